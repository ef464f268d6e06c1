"""
Attachment resolution: storage ids on a note become fetchable URLs at read time.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

from botocore.exceptions import BotoCoreError, ClientError
from pymongo.errors import PyMongoError

from noteart.infrastructure.storage import r2 as r2_storage
from noteart.repositories import storage_repo

_log = logging.getLogger("noteart.attachments")


def effective_image_ids(note: Dict[str, Any]) -> List[str]:
    """`image_ids`, or `[image_id]` for records that predate multi-image notes.

    Evaluated on every read; storage is never migrated.
    """
    image_ids = list(note.get("image_ids") or [])
    if not image_ids and note.get("image_id"):
        image_ids = [note["image_id"]]
    return image_ids


def resolve_url(storage_id: str) -> Optional[str]:
    """URL for one storage id, or None when it cannot be resolved."""
    try:
        blob = storage_repo.get_blob(storage_id)
        if not blob:
            return None
        return r2_storage.object_url(blob["key"])
    except (PyMongoError, BotoCoreError, ClientError, RuntimeError) as e:
        _log.warning("Could not resolve storage id=%s: %s", storage_id, e)
        return None


def resolve_urls(storage_ids: Sequence[str]) -> List[Optional[str]]:
    """One independent lookup per id, same order as the input."""
    return [resolve_url(sid) for sid in storage_ids]
