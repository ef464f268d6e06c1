"""
Pydantic schemas for notes and their AI images.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class NoteWrite(BaseModel):
    """Body of create and update. Updates replace every field with these values."""
    title: str = ""
    description: Optional[str] = None
    content: str = Field(min_length=1)
    tags: List[str] = Field(default_factory=list)
    image_ids: Optional[List[str]] = None

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be empty")
        return v


class AiImageMetadata(BaseModel):
    size: Optional[str] = None
    quality: Optional[str] = None
    style: Optional[str] = None


class AiImageOut(BaseModel):
    id: Optional[str] = None
    url: str
    prompt: str
    generated_at: str
    provider: str
    metadata: Optional[AiImageMetadata] = None


class NoteOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: str
    content: str
    tags: List[str]
    image_ids: List[str]
    image_urls: List[Optional[str]]
    ai_generated_images: List[AiImageOut]
    creation_time: Optional[str] = None


class NoteListOut(BaseModel):
    notes: List[NoteOut]


class NoteCreateResponse(BaseModel):
    message: str
    id: str


class AiImageAdd(BaseModel):
    image_url: str = Field(min_length=1)
    prompt: str
    provider: str
    metadata: Optional[AiImageMetadata] = None


class AiImageAddResponse(BaseModel):
    success: bool
    index: int
    id: str
    ai_image: AiImageOut


class AiImageListOut(BaseModel):
    ai_images: List[AiImageOut]
