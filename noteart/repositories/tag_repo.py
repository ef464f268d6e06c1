"""Repository for the `tag` collection."""
from typing import Any, Dict, List, Optional

from noteart.core.time import now_iso
from noteart.infrastructure.db.mongo import get_db, to_object_id

COLLECTION = "tag"


def list_by_user(user_id: str) -> List[Dict[str, Any]]:
    """Tags of one user in storage order."""
    return list(get_db()[COLLECTION].find({"user_id": str(user_id)}))


def find_by_name(user_id: str, name: str, exclude_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
    flt: Dict[str, Any] = {"user_id": str(user_id), "name": name}
    if exclude_id is not None:
        oid = to_object_id(exclude_id)
        if oid is not None:
            flt["_id"] = {"$ne": oid}
    return get_db()[COLLECTION].find_one(flt)


def insert_tag(user_id: str, name: str, color: str) -> str:
    """Inserts and returns the id. DuplicateKeyError propagates (unique index)."""
    doc = {"user_id": str(user_id), "name": name, "color": color, "created_at": now_iso()}
    res = get_db()[COLLECTION].insert_one(doc)
    return str(res.inserted_id)


def update_owned(tag_id: str, user_id: str, name: str, color: str) -> bool:
    oid = to_object_id(tag_id)
    if oid is None:
        return False
    res = get_db()[COLLECTION].update_one(
        {"_id": oid, "user_id": str(user_id)},
        {"$set": {"name": name, "color": color}},
    )
    return res.matched_count > 0


def delete_owned(tag_id: str, user_id: str) -> bool:
    oid = to_object_id(tag_id)
    if oid is None:
        return False
    return get_db()[COLLECTION].delete_one({"_id": oid, "user_id": str(user_id)}).deleted_count > 0
