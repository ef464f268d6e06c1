"""S3-compatible client for Cloudflare R2.

Stores note image bytes and turns object keys into fetchable URLs
(public base when configured, presigned GET otherwise).
"""
from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import boto3
from botocore.config import Config

from noteart.core.config import settings


def _endpoint_url() -> str:
    # S3 API endpoint (e.g. https://<account>.r2.cloudflarestorage.com)
    if settings.r2_endpoint:
        return settings.r2_endpoint
    return f"https://{settings.r2_account_id or ''}.r2.cloudflarestorage.com"


def _bucket() -> str:
    if not settings.r2_bucket:
        raise RuntimeError("R2_BUCKET not configured")
    return settings.r2_bucket


def get_s3_client():
    style = (settings.r2_addressing_style or "path").lower()
    if style not in ("path", "virtual"):
        style = "path"
    cfg = Config(signature_version="s3v4", s3={"addressing_style": style})
    return boto3.client(
        "s3",
        aws_access_key_id=settings.r2_access_key,
        aws_secret_access_key=settings.r2_secret_key,
        endpoint_url=_endpoint_url(),
        region_name=settings.r2_region or "auto",
        config=cfg,
    )


def put_object(key: str, body: bytes, content_type: str) -> None:
    """Uploads `body` under `key`. botocore errors propagate to the caller."""
    s3 = get_s3_client()
    s3.put_object(Bucket=_bucket(), Key=key, Body=body, ContentType=content_type)


def public_base_url() -> Optional[str]:
    base = settings.r2_public_base_url
    return base.rstrip("/") if base else None


def presign_get_url(key: str, *, expires: int = 600, filename: Optional[str] = None) -> str:
    """Presigned read URL; inline disposition unless a download filename is given."""
    s3 = get_s3_client()
    params = {"Bucket": _bucket(), "Key": key}
    if filename:
        params["ResponseContentDisposition"] = f'attachment; filename="{filename}"'
    return s3.generate_presigned_url(
        ClientMethod="get_object", Params=params, ExpiresIn=int(expires)
    )


def object_url(key: str) -> str:
    """Fetchable URL for `key`: public base first, presigned fallback."""
    base = public_base_url()
    if base:
        return f"{base}/{quote(key)}"
    return presign_get_url(key, expires=settings.storage_url_ttl_seconds)
