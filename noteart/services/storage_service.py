"""
Two-step image upload: hand out a signed upload target, then accept the bytes.

The returned storage id is what notes reference in `image_ids`.
"""
import logging
import mimetypes
from typing import Any, Dict, Optional
from uuid import uuid4

import jwt
from botocore.exceptions import BotoCoreError, ClientError

from noteart.core.config import settings
from noteart.core.exceptions import Unauthenticated, UploadFailed
from noteart.infrastructure.storage import r2 as r2_storage
from noteart.repositories import storage_repo
from noteart.services import token_service

_log = logging.getLogger("noteart.storage")


def generate_upload_target(user_id: Optional[str]) -> Dict[str, Any]:
    if not user_id:
        raise Unauthenticated()
    token = token_service.create_upload_token(user_id=user_id)
    return {
        "upload_url": settings.upload_url(token),
        "expires_in": settings.upload_token_expire_minutes * 60,
    }


def _extension(content_type: str) -> str:
    if content_type == "image/jpeg":
        return ".jpg"
    return mimetypes.guess_extension(content_type) or ""


def store_upload(token: str, body: bytes, content_type: Optional[str]) -> str:
    """
    Stores the raw bytes posted to an upload target and registers the blob.
    Returns the new storage id.
    """
    try:
        payload = token_service.verify_upload_token(token)
    except jwt.InvalidTokenError as e:
        raise Unauthenticated("Invalid or expired upload token") from e
    user_id = str(payload["sub"])

    if not body:
        raise UploadFailed("Upload failed: empty body")
    if not settings.storage_configured:
        raise UploadFailed("Upload failed: storage not configured")

    ctype = (content_type or "application/octet-stream").split(";", 1)[0].strip().lower()
    storage_id = uuid4().hex
    key = f"{settings.storage_key_prefix}{storage_id}{_extension(ctype)}"
    try:
        r2_storage.put_object(key, body, ctype)
    except (BotoCoreError, ClientError) as e:
        _log.warning("R2 upload failed key=%s: %s", key, e)
        raise UploadFailed(f"Upload failed: {e}") from e

    storage_repo.insert_blob(storage_id, key=key, content_type=ctype, size=len(body), user_id=user_id)
    _log.info("blob stored id=%s size=%s user_id=%s", storage_id, len(body), user_id)
    return storage_id
