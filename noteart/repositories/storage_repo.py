"""Registry of uploaded blobs (`storage` collection).

Maps an opaque storage id to its object key in the bucket.
"""
from typing import Any, Dict, Optional

from noteart.core.time import now_iso
from noteart.infrastructure.db.mongo import get_db

COLLECTION = "storage"


def insert_blob(storage_id: str, *, key: str, content_type: str, size: int, user_id: str) -> str:
    get_db()[COLLECTION].insert_one(
        {
            "_id": storage_id,
            "key": key,
            "content_type": content_type,
            "size": int(size),
            "user_id": str(user_id),
            "created_at": now_iso(),
        }
    )
    return storage_id


def get_blob(storage_id: str) -> Optional[Dict[str, Any]]:
    return get_db()[COLLECTION].find_one({"_id": str(storage_id)})
