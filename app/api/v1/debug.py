from fastapi import APIRouter, Depends

from app.api.deps import get_chat_service
from app.schemas.chat import SessionStatsResponse
from app.services.chat_service import ChatService

router = APIRouter()


@router.get("/debug/sessions", response_model=SessionStatsResponse)
def session_stats(service: ChatService = Depends(get_chat_service)):
    stats = service.store.get_stats()
    return SessionStatsResponse(
        total_sessions=stats.total_sessions,
        session_ages=stats.session_ages,
        average_history_length=stats.average_history_length,
    )
