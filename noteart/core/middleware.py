"""
Application middlewares: request context (id + access log) and CORS.
"""
import logging
import time
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from noteart.core.config import settings
from noteart.core.logging import request_id_var

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags the request with an id (client supplied or generated) and logs one line per request."""

    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.log = logging.getLogger("noteart.request")

    async def dispatch(self, request: Request, call_next):
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = rid
        token = request_id_var.set(rid)
        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            self.log.info(
                "%s %s status=%s latency_ms=%d bearer=%s",
                request.method,
                request.url.path,
                status,
                (time.perf_counter() - start) * 1000,
                request.headers.get("authorization", "").startswith("Bearer "),
            )
            request_id_var.reset(token)


def add_middlewares(app: FastAPI) -> None:
    cors_kwargs = dict(
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
        allow_credentials=True,
    )
    if settings.cors_allow_any:
        # wildcard origins cannot be combined with credentials
        cors_kwargs.update(allow_origins=[], allow_origin_regex=".*", allow_credentials=False)
    app.add_middleware(CORSMiddleware, **cors_kwargs)
    app.add_middleware(RequestContextMiddleware)
