"""Normalized request/result types shared by the image provider adapters."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Provider(str, Enum):
    OPENAI = "openai"
    OPENROUTER = "openrouter"
    GEMINI = "gemini"
    IMAGEN = "imagen"


class GenerationOptions(BaseModel):
    model: Optional[str] = None
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None


class ImageMetadata(BaseModel):
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None


class GenerationResult(BaseModel):
    """Single result contract every adapter returns."""
    success: bool
    image_url: Optional[str] = None
    prompt: str
    generated_at: str
    provider: Provider
    metadata: Optional[ImageMetadata] = None
