"""
Service layer for tags: user-scoped, uniquely named colored labels.

Notes reference tags by name only; deleting a tag leaves those names in place.
"""
import logging
from typing import Any, Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from noteart.core.exceptions import DuplicateTag, NotFoundOrUnauthorized, Unauthenticated
from noteart.repositories import tag_repo

_log = logging.getLogger("noteart.tags")


def _require_user(user_id: Optional[str]) -> str:
    if not user_id:
        raise Unauthenticated()
    return str(user_id)


def tag_out(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "name": doc.get("name"),
        "color": doc.get("color"),
        "user_id": doc.get("user_id"),
    }


def list_tags(user_id: Optional[str]) -> List[Dict[str, Any]]:
    if not user_id:
        return []
    return [tag_out(d) for d in tag_repo.list_by_user(user_id)]


def create_tag(user_id: Optional[str], name: str, color: str) -> str:
    uid = _require_user(user_id)
    if tag_repo.find_by_name(uid, name):
        raise DuplicateTag()
    try:
        tag_id = tag_repo.insert_tag(uid, name, color)
    except DuplicateKeyError as e:
        # concurrent create of the same name
        raise DuplicateTag() from e
    _log.info("tag created id=%s user_id=%s", tag_id, uid)
    return tag_id


def update_tag(user_id: Optional[str], tag_id: str, name: str, color: str) -> None:
    """Full replacement of name and color.

    Renaming onto a name the user already has raises DuplicateTag, the same
    rule as create. This is stricter than the legacy update, which had no
    duplicate check; the `(user_id, name)` unique index would reject the
    write anyway.
    """
    uid = _require_user(user_id)
    if tag_repo.find_by_name(uid, name, exclude_id=tag_id):
        raise DuplicateTag()
    try:
        ok = tag_repo.update_owned(tag_id, uid, name, color)
    except DuplicateKeyError as e:
        raise DuplicateTag() from e
    if not ok:
        raise NotFoundOrUnauthorized("Tag not found or unauthorized")


def remove_tag(user_id: Optional[str], tag_id: str) -> None:
    uid = _require_user(user_id)
    if not tag_repo.delete_owned(tag_id, uid):
        raise NotFoundOrUnauthorized("Tag not found or unauthorized")
    _log.info("tag removed id=%s user_id=%s", tag_id, uid)
