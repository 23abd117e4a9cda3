from __future__ import annotations

import json
import logging
import re
from datetime import date
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from app.core.config import project_path, settings
from app.schemas.resume import ParsedResume, ResumeSummary

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"(\d{4})")


class ResumeDataError(RuntimeError):
    pass


def _read_resume_json(path: str) -> dict[str, Any]:
    resume_path = project_path(path)
    try:
        raw = resume_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ResumeDataError(f"Failed to read resume data '{resume_path}': {exc}") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ResumeDataError(f"Invalid JSON in resume data '{resume_path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ResumeDataError(f"Invalid resume data '{resume_path}': expected a JSON object.")
    return data


def convert_resume(data: dict[str, Any]) -> ParsedResume:
    """Convert the resume.json document into the parsed resume shape."""
    personal = data.get("personalInfo") or {}
    try:
        return ParsedResume.model_validate(
            {
                "contact": {
                    "name": personal.get("name") or "",
                    "location": personal.get("location") or "",
                    "phone": personal.get("phone") or "",
                    "email": personal.get("email") or "",
                    "linkedin": personal.get("linkedin") or "",
                    "github": personal.get("github") or "",
                },
                "summary": data.get("summary") or "",
                "skills": data.get("skills") or {},
                "experience": data.get("experience") or [],
                "education": data.get("education") or [],
                "certifications": data.get("certifications") or [],
                "languages": data.get("languages") or [],
                "patents": data.get("publications") or [],
            }
        )
    except ValidationError as exc:
        raise ResumeDataError(f"Resume data does not match the expected shape: {exc}") from exc


@lru_cache(maxsize=4)
def load_resume(path: str | None = None) -> ParsedResume:
    resume = convert_resume(_read_resume_json(path or settings.resume_data_path))
    logger.info(
        "resume_loaded name=%s experience=%s skill_categories=%s",
        resume.contact.name,
        len(resume.experience),
        len(resume.skills),
    )
    return resume


def calculate_years_of_experience(resume: ParsedResume, today: date | None = None) -> int:
    if not resume.experience:
        return 0
    first_job = resume.experience[-1]
    match = _YEAR_RE.search(first_job.start_date or "")
    if not match:
        return 0
    current_year = (today or date.today()).year
    return max(0, current_year - int(match.group(1)))


def build_resume_summary(resume: ParsedResume, today: date | None = None) -> ResumeSummary:
    all_skills: list[str] = []
    for skill_list in resume.skills.values():
        all_skills.extend(skill_list)

    return ResumeSummary(
        summary=resume.summary,
        key_skills=all_skills[:10],
        years_of_experience=calculate_years_of_experience(resume, today=today),
        current_role=(resume.experience[0].title if resume.experience else "") or "Product Manager",
        languages=[f"{lang.language}: {lang.proficiency}" for lang in resume.languages],
    )
