"""
Reusable router dependencies (FastAPI Depends).

- Identity: resolves the current user id from the access token, or None.
  Services decide what "no identity" means (empty result or Unauthenticated).
- Keep this layer thin: no business logic.
"""
from typing import Optional

from fastapi import Depends, Header

from noteart.core.exceptions import Unauthenticated
from noteart.infrastructure.ai.image_gateway import ImageGenerationGateway
from noteart.services import auth_service


def get_current_user_id(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    return auth_service.resolve_identity(authorization)


def require_user_id(user_id: Optional[str] = Depends(get_current_user_id)) -> str:
    if not user_id:
        raise Unauthenticated()
    return user_id


_gateway: Optional[ImageGenerationGateway] = None


def get_image_gateway() -> ImageGenerationGateway:
    """One gateway per process, bound to the global settings."""
    global _gateway
    if _gateway is None:
        _gateway = ImageGenerationGateway()
    return _gateway
