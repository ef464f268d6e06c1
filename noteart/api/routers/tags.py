"""Tag endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, status

from noteart.api.deps import get_current_user_id
from noteart.api.schemas.tag import TagListOut, TagOut, TagWrite
from noteart.services import tag_service

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get("", response_model=TagListOut, summary="List tags")
def list_tags(user_id: Optional[str] = Depends(get_current_user_id)) -> TagListOut:
    return TagListOut(tags=[TagOut(**t) for t in tag_service.list_tags(user_id)])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=dict, summary="Create tag")
def create_tag(payload: TagWrite, user_id: Optional[str] = Depends(get_current_user_id)):
    tag_id = tag_service.create_tag(user_id, payload.name, payload.color)
    return {"message": "ok", "id": tag_id}


@router.put("/{tag_id}", response_model=dict, summary="Replace tag name and color")
def update_tag(tag_id: str, payload: TagWrite, user_id: Optional[str] = Depends(get_current_user_id)):
    tag_service.update_tag(user_id, tag_id, payload.name, payload.color)
    return {"message": "ok"}


@router.delete(
    "/{tag_id}",
    response_model=dict,
    summary="Delete tag",
    description="Notes keep the tag name in their `tags`.",
)
def remove_tag(tag_id: str, user_id: Optional[str] = Depends(get_current_user_id)):
    tag_service.remove_tag(user_id, tag_id)
    return {"message": "ok"}
