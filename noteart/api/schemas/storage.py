"""Schemas for the two-step upload flow."""
from pydantic import BaseModel


class UploadTargetOut(BaseModel):
    upload_url: str
    expires_in: int


class UploadOut(BaseModel):
    storage_id: str
