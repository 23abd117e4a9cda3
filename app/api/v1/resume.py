import logging

from fastapi import APIRouter, Request

from app.core.errors import ServiceError
from app.core.rate_limit import rate_limit
from app.resume.parser import ResumeDataError, build_resume_summary, load_resume
from app.schemas.resume import ParsedResume, ResumeSummary

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/resume/summary", response_model=ResumeSummary)
@rate_limit()
def resume_summary(request: Request):
    _ = request
    try:
        return build_resume_summary(load_resume())
    except ResumeDataError as exc:
        logger.exception("resume_summary_failed")
        raise ServiceError("Failed to retrieve resume summary") from exc


@router.get("/resume/full", response_model=ParsedResume)
@rate_limit()
def resume_full(request: Request):
    _ = request
    try:
        return load_resume()
    except ResumeDataError as exc:
        logger.exception("resume_full_failed")
        raise ServiceError("Failed to retrieve resume") from exc
