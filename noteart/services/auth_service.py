"""
Authentication logic: registration, login and identity resolution.
"""
import logging
from typing import Any, Dict, Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import Argon2Error, InvalidHashError
from argon2.low_level import Type
from pymongo.errors import DuplicateKeyError

from noteart.repositories import user_repo as repo
from noteart.services import token_service

_log = logging.getLogger("noteart.auth")

ph = PasswordHasher(time_cost=2, memory_cost=51200, parallelism=2, hash_len=32, salt_len=16, type=Type.ID)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return ph.verify(password_hash, password)
    except (Argon2Error, InvalidHashError):
        return False


def register_user(email: str, password: str) -> Dict[str, Any]:
    """Creates a local user. ValueError when the email is taken."""
    if repo.find_user_by_email(email):
        raise ValueError("Email already registered")
    try:
        user_id = repo.insert_user(email, hash_password(password))
    except DuplicateKeyError as e:
        raise ValueError("Email already registered") from e
    _log.info("user registered id=%s", user_id)
    return {"message": "ok", "id": user_id}


def login(email: str, password: str) -> Dict[str, Any]:
    """Returns an access token. ValueError on bad credentials."""
    user = repo.find_user_by_email(email)
    if not user or not verify_password(password, user.get("password_hash") or ""):
        raise ValueError("Invalid credentials")
    return {
        "access_token": token_service.create_access_token(user=user),
        "token_type": "bearer",
        "user_id": str(user["_id"]),
    }


def resolve_identity(authorization: Optional[str]) -> Optional[str]:
    """
    Resolves the current user id from an `Authorization: Bearer` header.

    Missing, invalid, expired or revoked (token_version mismatch) tokens
    resolve to None; this never raises for a bad token.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    try:
        payload = token_service.verify_access_token(token)
    except jwt.InvalidTokenError:
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    user = repo.get_user_by_id(user_id)
    if not user or user.get("token_version", 0) != payload.get("token_version"):
        return None
    return str(user["_id"])
