"""
Domain errors and global exception handlers for consistent API errors.

Services raise the `NoteArtError` subclasses below; the HTTP layer maps each
one to a status code and a `{"message", "code"}` body.
"""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class NoteArtError(Exception):
    status_code = 500
    code = "error"
    default_message = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(NoteArtError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Not authenticated"


class NotFoundOrUnauthorized(NoteArtError):
    """Missing entity and someone else's entity are reported the same way."""
    status_code = 404
    code = "not_found_or_unauthorized"
    default_message = "Not found or unauthorized"


class DuplicateTag(NoteArtError):
    status_code = 409
    code = "duplicate_tag"
    default_message = "Tag already exists"


class InvalidIndex(NoteArtError):
    status_code = 400
    code = "invalid_index"
    default_message = "Invalid image index"


class MissingConfiguration(NoteArtError):
    status_code = 503
    code = "missing_configuration"
    default_message = "Service not configured"


class GenerationFailed(NoteArtError):
    status_code = 502
    code = "generation_failed"
    default_message = "Failed to generate image. Please try again."


class UploadFailed(NoteArtError):
    status_code = 502
    code = "upload_failed"
    default_message = "Upload failed"


def _req_id(request: Request) -> str | None:
    return getattr(getattr(request, "state", object()), "request_id", None)


def register_exception_handlers(app: FastAPI) -> None:
    log = logging.getLogger("noteart.errors")

    @app.exception_handler(NoteArtError)
    async def _domain_exc_handler(request: Request, exc: NoteArtError):
        body: Dict[str, Any] = {"message": exc.message, "code": exc.code}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        if exc.status_code >= 500:
            log.warning("%s request_id=%s: %s", exc.code, rid, exc.message)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def _http_exc_handler(request: Request, exc: StarletteHTTPException):
        body: Dict[str, Any] = {"message": exc.detail or "HTTP error"}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.exception_handler(RequestValidationError)
    async def _validation_handler(request: Request, exc: RequestValidationError):
        body: Dict[str, Any] = {"message": "Validation error", "errors": jsonable_encoder(exc.errors())}
        rid = _req_id(request)
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=422, content=body)

    @app.exception_handler(Exception)
    async def _generic_handler(request: Request, exc: Exception):
        rid = _req_id(request)
        log.exception("Unhandled error request_id=%s", rid)
        body: Dict[str, Any] = {"message": "Internal server error"}
        if rid:
            body["request_id"] = rid
        return JSONResponse(status_code=500, content=body)
