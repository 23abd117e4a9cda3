from datetime import datetime, timezone

from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()

SERVICE_NAME = "resume-chat-backend"


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {
        "status": "ok",
        "service": SERVICE_NAME,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }
