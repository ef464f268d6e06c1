"""
Creation and verification of JWTs for access and upload flows.
"""
from datetime import timedelta
from typing import Any, Dict
from uuid import uuid4

import jwt

from noteart.core.config import settings
from noteart.core.exceptions import MissingConfiguration
from noteart.core.time import now_utc

UPLOAD_PURPOSE = "upload"


def _secret() -> str:
    if not settings.jwt_secret:
        raise MissingConfiguration("JWT_SECRET not configured")
    return settings.jwt_secret


def _encode(payload: Dict[str, Any], minutes: int) -> str:
    now = now_utc()
    claims = {
        **payload,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(minutes=minutes)).timestamp()),
        "jti": str(uuid4()),
    }
    return jwt.encode(claims, _secret(), algorithm=settings.jwt_algorithm)


def _decode(token: str) -> Dict[str, Any]:
    return jwt.decode(token, key=_secret(), algorithms=[settings.jwt_algorithm])


def create_access_token(*, user: Dict[str, Any]) -> str:
    """
    HS256 JWT valid for ACCESS_TOKEN_EXPIRE_MINUTES.
    Claims: sub(user_id), email, token_version, iat, exp, jti.
    """
    return _encode(
        {
            "sub": str(user["_id"]),
            "email": user.get("email"),
            "token_version": user.get("token_version", 0),
        },
        settings.access_token_expire_minutes,
    )


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Decodes and checks signature/expiry. Raises jwt.InvalidTokenError otherwise.
    """
    payload = _decode(token)
    if payload.get("purpose"):
        raise jwt.InvalidTokenError("Not an access token")
    return payload


def create_upload_token(*, user_id: str) -> str:
    """Short-lived token embedded in an upload target URL."""
    return _encode({"sub": str(user_id), "purpose": UPLOAD_PURPOSE}, settings.upload_token_expire_minutes)


def verify_upload_token(token: str) -> Dict[str, Any]:
    payload = _decode(token)
    if payload.get("purpose") != UPLOAD_PURPOSE:
        raise jwt.InvalidTokenError("Not an upload token")
    return payload
