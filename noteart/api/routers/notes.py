"""
Note endpoints: CRUD, list/search and AI image attachments.

Reads without identity answer with empty data; writes without identity get 401.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from noteart.api.deps import get_current_user_id
from noteart.api.schemas.note import (
    AiImageAdd,
    AiImageAddResponse,
    AiImageListOut,
    NoteCreateResponse,
    NoteListOut,
    NoteOut,
    NoteWrite,
)
from noteart.services import ai_image_service, note_service

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get(
    "",
    response_model=NoteListOut,
    summary="List or search notes",
    description="Without `q` (or with a blank one) lists the user's notes newest first; otherwise full-text search on content.",
)
def list_notes(
    q: Optional[str] = Query(default=None, description="Full-text query"),
    user_id: Optional[str] = Depends(get_current_user_id),
) -> NoteListOut:
    items = note_service.search_notes(user_id, q)
    return NoteListOut(notes=[NoteOut(**i) for i in items])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteCreateResponse,
    summary="Create note",
)
def create_note(payload: NoteWrite, user_id: Optional[str] = Depends(get_current_user_id)) -> NoteCreateResponse:
    try:
        note_id = note_service.create_note(user_id, **payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return NoteCreateResponse(message="ok", id=note_id)


@router.get("/{note_id}", response_model=NoteOut, summary="Get note")
def get_note(note_id: str, user_id: Optional[str] = Depends(get_current_user_id)) -> NoteOut:
    return NoteOut(**note_service.get_note(user_id, note_id))


@router.put(
    "/{note_id}",
    response_model=dict,
    summary="Replace note",
    description="Full replacement: omitted `description` becomes empty and omitted `image_ids` detaches every image.",
)
def update_note(note_id: str, payload: NoteWrite, user_id: Optional[str] = Depends(get_current_user_id)):
    try:
        note_service.update_note(user_id, note_id, **payload.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"message": "ok"}


@router.delete("/{note_id}", response_model=dict, summary="Delete note")
def remove_note(note_id: str, user_id: Optional[str] = Depends(get_current_user_id)):
    note_service.remove_note(user_id, note_id)
    return {"message": "ok"}


@router.get("/{note_id}/ai-images", response_model=AiImageListOut, summary="List AI images of a note")
def list_ai_images(note_id: str, user_id: Optional[str] = Depends(get_current_user_id)) -> AiImageListOut:
    return AiImageListOut(ai_images=ai_image_service.list_ai_images(user_id, note_id))


@router.post(
    "/{note_id}/ai-images",
    status_code=status.HTTP_201_CREATED,
    response_model=AiImageAddResponse,
    summary="Attach a generated image to a note",
)
def add_ai_image(
    note_id: str,
    payload: AiImageAdd,
    user_id: Optional[str] = Depends(get_current_user_id),
) -> AiImageAddResponse:
    res = ai_image_service.add_ai_image(
        user_id,
        note_id,
        url=payload.image_url,
        prompt=payload.prompt,
        provider=payload.provider,
        metadata=payload.metadata.model_dump() if payload.metadata else None,
    )
    return AiImageAddResponse(**res)


@router.delete("/{note_id}/ai-images/{image_id}", response_model=dict, summary="Remove AI image by id")
def remove_ai_image(note_id: str, image_id: str, user_id: Optional[str] = Depends(get_current_user_id)):
    ai_image_service.remove_ai_image(user_id, note_id, image_id)
    return {"success": True}


@router.delete("/{note_id}/ai-images/at/{index}", response_model=dict, summary="Remove AI image by position")
def remove_ai_image_at(note_id: str, index: int, user_id: Optional[str] = Depends(get_current_user_id)):
    ai_image_service.remove_ai_image_at(user_id, note_id, index)
    return {"success": True}
