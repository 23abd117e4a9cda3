from fastapi import Request

from app.core.errors import ServiceError
from app.services.chat_service import ChatService


def get_chat_service(request: Request) -> ChatService:
    service = getattr(request.app.state, "chat_service", None)
    if service is None:
        raise ServiceError("Chat service is not initialized.", status_code=503)
    return service
