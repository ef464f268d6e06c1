"""Health and debug (no auth), typed and stable outputs."""
from fastapi import APIRouter, status

from noteart.core.config import settings
from noteart.infrastructure.db.mongo import db_ready
from noteart.api.schemas.health import PingOut, HealthOut, DebugStatusOut


router = APIRouter(tags=["Health"])  # no prefix to keep paths stable


@router.get("/ping", response_model=PingOut, summary="Basic ping")
def ping() -> PingOut:
    return PingOut(message="pong")


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthOut, summary="Basic health")
def health() -> HealthOut:
    return HealthOut(ok=db_ready())


@router.get("/_debug/status", status_code=status.HTTP_200_OK, response_model=DebugStatusOut, summary="Configuration status")
def debug_status() -> DebugStatusOut:
    # Flags only; never echoes secrets
    return DebugStatusOut(
        app_name=settings.app_name,
        api_prefix=settings.api_prefix,
        mongo_ready=db_ready(),
        storage_configured=settings.storage_configured,
        openai_configured=settings.openai_configured,
        openrouter_configured=settings.openrouter_configured,
        gemini_configured=settings.gemini_configured,
        imagen_placeholder_fallback=settings.imagen_placeholder_fallback,
    )
