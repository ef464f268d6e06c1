"""Main FastAPI entry point (wires middlewares, exception handlers and routers)."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pymongo.errors import PyMongoError

from noteart.api.router import api_router
from noteart.core.config import settings
from noteart.core.exceptions import register_exception_handlers
from noteart.core.logging import setup_logging
from noteart.core.middleware import add_middlewares
from noteart.infrastructure.db.bootstrap import ensure_collections
from noteart.infrastructure.db.mongo import close_mongo, db_ready, init_mongo

_log = logging.getLogger("noteart.startup")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_mongo()
    # Collections/indexes/validators when the database is reachable
    if db_ready():
        try:
            ensure_collections()
        except PyMongoError as e:
            _log.warning("ensure_collections() failed: %s", e)
    else:
        _log.warning("Mongo not ready; skipping ensure_collections()")
    yield
    close_mongo()


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    add_middlewares(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix_normalized)
    return app


app = create_app()
