"""Schemas for health/debug endpoints."""
from pydantic import BaseModel


class PingOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    ok: bool


class DebugStatusOut(BaseModel):
    app_name: str
    api_prefix: str
    mongo_ready: bool
    storage_configured: bool
    openai_configured: bool
    openrouter_configured: bool
    gemini_configured: bool
    imagen_placeholder_fallback: bool
