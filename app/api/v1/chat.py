from fastapi import APIRouter, Depends, Request

from app.api.deps import get_chat_service
from app.core.rate_limit import rate_limit
from app.schemas.chat import (
    AssessFitRequest,
    AssessFitResponse,
    ChatRequest,
    ChatResponse,
    ClearSessionResponse,
)
from app.services.chat_service import ChatService

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
@rate_limit()
async def chat(
    request: Request,
    payload: ChatRequest,
    service: ChatService = Depends(get_chat_service),
):
    _ = request
    reply = await service.chat(payload.message, session_id=payload.session_id)
    return ChatResponse(message=reply.message, session_id=reply.session_id)


@router.post(
    "/chat/assess-fit",
    response_model=AssessFitResponse,
    response_model_exclude_none=True,
)
@rate_limit()
async def assess_fit(
    request: Request,
    payload: AssessFitRequest,
    service: ChatService = Depends(get_chat_service),
):
    _ = request
    result = await service.assess_fit(payload.job_description, session_id=payload.session_id)
    return AssessFitResponse(
        assessment=result.assessment,
        fit_score=result.fit_score,
        session_id=result.session_id,
    )


@router.delete("/chat/session/{session_id}", response_model=ClearSessionResponse)
@rate_limit()
async def clear_session(
    request: Request,
    session_id: str,
    service: ChatService = Depends(get_chat_service),
):
    _ = request
    return ClearSessionResponse(cleared=service.store.clear_session(session_id))
