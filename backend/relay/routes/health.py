from fastapi import APIRouter

from relay.config import settings
from relay.models.response import HealthResponse
from relay.providers.registry import get_configured_service_types

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check listing the chat services that have an API key"""
    return HealthResponse(
        status="healthy",
        providers=get_configured_service_types(),
        default_service=settings.chat_service_type,
    )
