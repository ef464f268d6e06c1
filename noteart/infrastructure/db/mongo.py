"""MongoDB client (pymongo): single client/db per process."""
import logging
from typing import Any, Optional

import certifi
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from noteart.core.config import settings

_log = logging.getLogger("noteart.mongo")

_client: MongoClient | None = None
_db: Database | None = None


def _client_kwargs(uri: str) -> dict:
    kwargs = dict(serverSelectionTimeoutMS=15000)
    if uri.startswith("mongodb+srv://"):
        # SRV implies TLS; the certifi bundle makes it work on slim images
        kwargs["tlsCAFile"] = certifi.where()
    elif settings.mongo_tls:
        kwargs["tls"] = True
        kwargs["tlsCAFile"] = certifi.where()
        kwargs["tlsAllowInvalidCertificates"] = settings.mongo_tls_insecure
        kwargs["tlsAllowInvalidHostnames"] = settings.mongo_tls_allow_invalid_hostnames
    return kwargs


def init_mongo() -> None:
    """
    Builds the client and checks the connection (ping).
    Call once at FastAPI startup. On failure the app stays up and `get_db()` raises.
    """
    global _client, _db
    uri = settings.mongo_uri
    try:
        _client = MongoClient(uri, **_client_kwargs(uri))
        _client.admin.command("ping")
        _db = _client[settings.mongo_db]
        _log.info("Mongo connected db=%s", settings.mongo_db)
    except ServerSelectionTimeoutError as e:
        _log.warning("Mongo unreachable (timeout): %s", e)
        _client = None
        _db = None
    except PyMongoError as e:
        _log.warning("Mongo connection error: %s", e)
        _client = None
        _db = None


def get_db() -> Database:
    """
    Returns the database handle.
    Use it from repositories, never from routers.
    """
    if _db is None:
        raise RuntimeError("Mongo not initialized. Try again later.")
    return _db


def db_ready() -> bool:
    return _db is not None


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Parses an id coming from the API; malformed ids yield None."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def close_mongo() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
