"""
Service layer for notes: identity checks, defaults and read-time enrichment
over the note repository.

Updates are full replacements; the last writer wins.
"""
import logging
from typing import Any, Dict, List, Optional

from noteart.core.exceptions import NotFoundOrUnauthorized, Unauthenticated
from noteart.repositories import note_repo
from noteart.services.ai_image_service import ai_image_out
from noteart.services.attachment_service import effective_image_ids, resolve_urls

_log = logging.getLogger("noteart.notes")


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise Unauthenticated()
    return str(user_id)


def _check_content(content: str) -> None:
    if not content or not content.strip():
        raise ValueError("content must not be empty")


def note_out(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Output shape of a note: legacy image fallback applied, URLs resolved."""
    image_ids = effective_image_ids(doc)
    return {
        "id": str(doc["_id"]),
        "user_id": doc.get("user_id"),
        "title": doc.get("title") or "",
        "description": doc.get("description") or "",
        "content": doc.get("content") or "",
        "tags": list(doc.get("tags") or []),
        "image_ids": image_ids,
        "image_urls": resolve_urls(image_ids) if image_ids else [],
        "ai_generated_images": [ai_image_out(i) for i in (doc.get("ai_generated_images") or [])],
        "creation_time": doc.get("created_at"),
    }


def create_note(
    user_id: Optional[str],
    *,
    title: str,
    content: str,
    tags: List[str],
    description: Optional[str] = None,
    image_ids: Optional[List[str]] = None,
) -> str:
    uid = _require_user(user_id)
    _check_content(content)
    note_id = note_repo.insert_note(
        {
            "user_id": uid,
            "title": title,
            "description": description or "",
            "content": content,
            "tags": list(tags),
            "image_ids": list(image_ids or []),
            "ai_generated_images": [],
        }
    )
    _log.info("note created id=%s user_id=%s", note_id, uid)
    return note_id


def update_note(
    user_id: Optional[str],
    note_id: str,
    *,
    title: str,
    content: str,
    tags: List[str],
    description: Optional[str] = None,
    image_ids: Optional[List[str]] = None,
) -> None:
    """Overwrites every editable field, `image_ids` included (omitted means [])."""
    uid = _require_user(user_id)
    _check_content(content)
    ok = note_repo.replace_fields(
        note_id,
        uid,
        {
            "title": title,
            "description": description or "",
            "content": content,
            "tags": list(tags),
            "image_ids": list(image_ids or []),
        },
    )
    if not ok:
        raise NotFoundOrUnauthorized("Note not found or unauthorized")


def remove_note(user_id: Optional[str], note_id: str) -> None:
    """Deletes the note; the blobs it referenced stay in storage."""
    uid = _require_user(user_id)
    if not note_repo.delete_owned(note_id, uid):
        raise NotFoundOrUnauthorized("Note not found or unauthorized")
    _log.info("note removed id=%s user_id=%s", note_id, uid)


def get_note(user_id: Optional[str], note_id: str) -> Dict[str, Any]:
    doc = note_repo.find_owned(note_id, user_id) if user_id else None
    if not doc:
        raise NotFoundOrUnauthorized("Note not found or unauthorized")
    return note_out(doc)


def list_notes(user_id: Optional[str]) -> List[Dict[str, Any]]:
    """Newest first; no identity means no data."""
    if not user_id:
        return []
    return [note_out(d) for d in note_repo.list_by_user(user_id)]


def search_notes(user_id: Optional[str], query: Optional[str]) -> List[Dict[str, Any]]:
    """Blank query lists everything; otherwise full-text search on content."""
    if not user_id:
        return []
    q = (query or "").strip()
    if not q:
        return list_notes(user_id)
    return [note_out(d) for d in note_repo.search_content(user_id, q)]
