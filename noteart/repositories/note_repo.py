"""Repository for the `note` collection.

Every lookup that precedes a mutation filters by `_id` and `user_id`
together, so a missing note and someone else's note look the same.
"""
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING, ReturnDocument

from noteart.core.time import now_iso
from noteart.infrastructure.db.mongo import get_db, to_object_id

COLLECTION = "note"
NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]


def _owned(note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    oid = to_object_id(note_id)
    if oid is None:
        return None
    return {"_id": oid, "user_id": str(user_id)}


def insert_note(doc: Dict[str, Any]) -> str:
    """Inserts a note with defaults and returns its id (str)."""
    data = dict(doc)
    now = now_iso()
    data.setdefault("title", "")
    data.setdefault("description", "")
    data.setdefault("tags", [])
    data.setdefault("image_ids", [])
    data.setdefault("ai_generated_images", [])
    data.setdefault("created_at", now)
    data["updated_at"] = now
    res = get_db()[COLLECTION].insert_one(data)
    return str(res.inserted_id)


def find_owned(note_id: str, user_id: str) -> Optional[Dict[str, Any]]:
    flt = _owned(note_id, user_id)
    if flt is None:
        return None
    return get_db()[COLLECTION].find_one(flt)


def list_by_user(user_id: str) -> List[Dict[str, Any]]:
    """Notes of one user, newest first."""
    return list(get_db()[COLLECTION].find({"user_id": str(user_id)}).sort(NEWEST_FIRST))


def search_content(user_id: str, query: str) -> List[Dict[str, Any]]:
    """Full-text match on `content` (text index), limited to the user's notes."""
    flt = {"$text": {"$search": query}, "user_id": str(user_id)}
    return list(get_db()[COLLECTION].find(flt))


def replace_fields(note_id: str, user_id: str, fields: Dict[str, Any]) -> bool:
    """Overwrites `fields` on an owned note. False when nothing matched."""
    flt = _owned(note_id, user_id)
    if flt is None:
        return False
    data = dict(fields)
    data["updated_at"] = now_iso()
    res = get_db()[COLLECTION].update_one(flt, {"$set": data})
    return res.matched_count > 0


def delete_owned(note_id: str, user_id: str) -> bool:
    flt = _owned(note_id, user_id)
    if flt is None:
        return False
    return get_db()[COLLECTION].delete_one(flt).deleted_count > 0


def push_ai_image(note_id: str, user_id: str, ai_image: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Appends to `ai_generated_images` atomically; returns the note after the push."""
    flt = _owned(note_id, user_id)
    if flt is None:
        return None
    return get_db()[COLLECTION].find_one_and_update(
        flt,
        {"$push": {"ai_generated_images": ai_image}, "$set": {"updated_at": now_iso()}},
        return_document=ReturnDocument.AFTER,
    )


def remove_ai_image_at(note_id: str, user_id: str, index: int) -> bool:
    """Drops the element at `index` without rewriting the array.

    Null out the slot, then pull nulls, so images appended concurrently
    survive. False when the note has no element at `index`.
    """
    flt = _owned(note_id, user_id)
    if flt is None or index < 0:
        return False
    slot = f"ai_generated_images.{index}"
    flt[slot] = {"$exists": True}
    coll = get_db()[COLLECTION]
    res = coll.update_one(flt, {"$unset": {slot: ""}, "$set": {"updated_at": now_iso()}})
    if res.matched_count == 0:
        return False
    coll.update_one(_owned(note_id, user_id), {"$pull": {"ai_generated_images": None}})
    return True


def pull_ai_image(note_id: str, user_id: str, image_id: str) -> bool:
    """Removes the AI image with `image_id`. False when the note does not hold it."""
    flt = _owned(note_id, user_id)
    if flt is None:
        return False
    flt["ai_generated_images.id"] = image_id
    res = get_db()[COLLECTION].update_one(
        flt,
        {"$pull": {"ai_generated_images": {"id": image_id}}, "$set": {"updated_at": now_iso()}},
    )
    return res.matched_count > 0
