from fastapi import APIRouter

from ..core.ai_client import ai_client, openai_client
from ..infra.redis_client import ping
from ..settings import settings

router = APIRouter()


@router.get("/ready")
async def ready():
    return {"ok": True, "redis_ok": await ping()}


@router.get("/ai/status")
def ai_status():
    return {
        "mode": settings.ai_mode,
        "gemini": {"available": ai_client.is_available(), "last_error": ai_client.last_error},
        "openai": {"available": openai_client.is_available(), "last_error": openai_client.last_error},
        "google_vision": bool(settings.google_vision_api_key) and settings.ai_mode == "live",
        "usda": bool(settings.usda_api_key),
    }
