"""
Repository for the `user` collection.
"""
from typing import Any, Dict, Optional

from noteart.core.time import now_iso
from noteart.infrastructure.db.mongo import get_db, to_object_id

COLLECTION = "user"


def insert_user(email: str, password_hash: str) -> str:
    """
    Inserts a user and returns the inserted id as string.
    - `email` is stored lowercase.
    - `token_version` starts at 0.
    """
    now = now_iso()
    res = get_db()[COLLECTION].insert_one(
        {
            "email": email.strip().lower(),
            "password_hash": password_hash,
            "token_version": 0,
            "created_at": now,
            "updated_at": now,
        }
    )
    return str(res.inserted_id)


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    return get_db()[COLLECTION].find_one({"email": email.strip().lower()})


def get_user_by_id(user_id: str) -> Optional[Dict[str, Any]]:
    oid = to_object_id(user_id)
    if oid is None:
        return None
    return get_db()[COLLECTION].find_one({"_id": oid})
