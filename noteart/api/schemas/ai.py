"""Schemas for the image generation endpoints."""
from typing import Optional
from pydantic import BaseModel, Field

from noteart.infrastructure.ai.schemas import Provider


class GeneratePayload(BaseModel):
    prompt: str = Field(min_length=1)
    provider: Provider = Provider.OPENROUTER
    model: Optional[str] = None
    size: Optional[str] = None  # e.g. 512x512, 1024x1024
    quality: Optional[str] = None  # standard | hd
    style: Optional[str] = None  # natural | vivid


class EditPayload(BaseModel):
    prompt: str = Field(min_length=1)
    image_url: str = Field(min_length=1)
    model: Optional[str] = None
