"""
AI-generated images attached to notes.

Each image gets a stable `id` when appended. Removal by id is immune to
reordering; removal by position is kept for clients that still address
images by index.
"""
import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from noteart.core.exceptions import InvalidIndex, NotFoundOrUnauthorized, Unauthenticated
from noteart.core.time import now_iso
from noteart.repositories import note_repo

_log = logging.getLogger("noteart.ai_images")


def ai_image_out(img: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": img.get("id"),
        "url": img.get("url"),
        "prompt": img.get("prompt"),
        "generated_at": img.get("generated_at"),
        "provider": img.get("provider"),
        "metadata": img.get("metadata"),
    }


def add_ai_image(
    user_id: Optional[str],
    note_id: str,
    *,
    url: str,
    prompt: str,
    provider: str,
    metadata: Optional[Dict[str, Optional[str]]] = None,
) -> Dict[str, Any]:
    """Appends one image; returns its position, its stable id and the stored value."""
    if not user_id:
        raise Unauthenticated("Authentication required")
    ai_image: Dict[str, Any] = {
        "id": uuid4().hex,
        "url": url,
        "prompt": prompt,
        "generated_at": now_iso(),
        "provider": provider,
    }
    if metadata:
        ai_image["metadata"] = {k: v for k, v in metadata.items() if v is not None}
    note = note_repo.push_ai_image(note_id, user_id, ai_image)
    if not note:
        raise NotFoundOrUnauthorized("Note not found or access denied")
    images = note.get("ai_generated_images") or []
    _log.info("ai image added note_id=%s provider=%s", note_id, provider)
    return {
        "success": True,
        "index": len(images) - 1,
        "id": ai_image["id"],
        "ai_image": ai_image_out(ai_image),
    }


def _owned_note(user_id: Optional[str], note_id: str) -> Dict[str, Any]:
    if not user_id:
        raise Unauthenticated("Authentication required")
    note = note_repo.find_owned(note_id, user_id)
    if not note:
        raise NotFoundOrUnauthorized("Note not found or access denied")
    return note


def remove_ai_image(user_id: Optional[str], note_id: str, image_id: str) -> None:
    _owned_note(user_id, note_id)
    if not note_repo.pull_ai_image(note_id, user_id, image_id):
        raise InvalidIndex("AI image not found on this note")


def remove_ai_image_at(user_id: Optional[str], note_id: str, index: int) -> None:
    """Removes the image at `index`; later images shift down by one."""
    _owned_note(user_id, note_id)
    if not note_repo.remove_ai_image_at(note_id, user_id, index):
        raise InvalidIndex()


def list_ai_images(user_id: Optional[str], note_id: str) -> List[Dict[str, Any]]:
    """Empty for anonymous callers, missing notes and other users' notes."""
    if not user_id:
        return []
    note = note_repo.find_owned(note_id, user_id)
    if not note:
        return []
    return [ai_image_out(i) for i in (note.get("ai_generated_images") or [])]
