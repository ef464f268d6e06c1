"""Pydantic schemas for tags."""
from typing import List
from pydantic import BaseModel, Field, field_validator


class TagWrite(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    color: str = Field(min_length=1, max_length=32)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v


class TagOut(BaseModel):
    id: str
    name: str
    color: str
    user_id: str


class TagListOut(BaseModel):
    tags: List[TagOut]
