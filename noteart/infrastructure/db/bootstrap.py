"""
Mongo bootstrap: defines and applies validators (JSON Schema) and indexes.
Runs at app startup to guarantee the minimal collections and their consistency.
Never brings the app down; non-critical failures are only logged.
"""
from __future__ import annotations

from typing import Any, Dict, List
import logging
from pymongo import TEXT
from pymongo.errors import PyMongoError
from noteart.infrastructure.db.mongo import get_db

_log = logging.getLogger("noteart.mongo.bootstrap")

USER_COLL = "user"
NOTE_COLL = "note"
TAG_COLL = "tag"
STORAGE_COLL = "storage"


def _collmod_or_create(name: str, validator: Dict[str, Any] | None) -> None:
    db = get_db()
    try:
        if validator:
            db.command({
                "collMod": name,
                "validator": {"$jsonSchema": validator},
                "validationLevel": "moderate",
            })
        else:
            db.create_collection(name)
    except PyMongoError:
        # collMod fails when the collection does not exist yet
        try:
            if name not in db.list_collection_names():
                if validator:
                    db.create_collection(name, validator={"$jsonSchema": validator})
                else:
                    db.create_collection(name)
        except PyMongoError as e:
            _log.warning("Could not apply validator on '%s': %s", name, e)


def _ensure_indexes(name: str, indexes: List[Dict[str, Any]]) -> None:
    coll = get_db()[name]
    for ix in indexes:
        opts = dict(ix)
        keys = opts.pop("keys")
        try:
            coll.create_index(keys, **opts)
        except PyMongoError as e:
            # Pre-existing non-unique data or an index with other options
            _log.warning("Could not create index on '%s' (%s): %s", name, keys, e)


_AI_IMAGE_SCHEMA = {
    "bsonType": "object",
    "required": ["url", "prompt", "generated_at", "provider"],
    "properties": {
        "id": {"bsonType": "string"},
        "url": {"bsonType": "string"},
        "prompt": {"bsonType": "string"},
        "generated_at": {"bsonType": "string"},
        "provider": {"bsonType": "string"},
        "metadata": {
            "bsonType": ["object", "null"],
            "properties": {
                "size": {"bsonType": ["string", "null"]},
                "quality": {"bsonType": ["string", "null"]},
                "style": {"bsonType": ["string", "null"]},
            },
        },
    },
}


def ensure_collections() -> None:
    """
    Guarantees the minimal collections, validators and indexes.
    """
    user_validator = {
        "bsonType": "object",
        "required": ["email", "password_hash", "token_version", "created_at", "updated_at"],
        "properties": {
            "email": {"bsonType": "string", "minLength": 3, "description": "lowercase"},
            "password_hash": {"bsonType": "string"},
            "token_version": {"bsonType": "int", "minimum": 0},
            "created_at": {"bsonType": "string", "minLength": 10},
            "updated_at": {"bsonType": "string", "minLength": 10},
        },
        "additionalProperties": True,
    }
    _collmod_or_create(USER_COLL, user_validator)
    _ensure_indexes(USER_COLL, [{"keys": [("email", 1)], "unique": True, "name": "uniq_email"}])

    # `title` stays optional: records written before titles existed have none.
    # `image_id` is the legacy single attachment, read but never written.
    note_validator = {
        "bsonType": "object",
        "required": ["user_id", "content", "tags", "created_at"],
        "properties": {
            "user_id": {"bsonType": "string"},
            "title": {"bsonType": "string"},
            "description": {"bsonType": "string"},
            "content": {"bsonType": "string"},
            "tags": {"bsonType": "array", "items": {"bsonType": "string"}},
            "image_id": {"bsonType": ["string", "null"]},
            "image_ids": {"bsonType": "array", "items": {"bsonType": "string"}},
            "ai_generated_images": {"bsonType": "array", "items": _AI_IMAGE_SCHEMA},
            "created_at": {"bsonType": "string", "minLength": 10},
            "updated_at": {"bsonType": "string", "minLength": 10},
        },
        "additionalProperties": True,
    }
    _collmod_or_create(NOTE_COLL, note_validator)
    _ensure_indexes(
        NOTE_COLL,
        [
            {"keys": [("user_id", 1), ("created_at", -1)], "name": "ix_user_created"},
            {"keys": [("content", TEXT)], "name": "txt_content"},
        ],
    )

    tag_validator = {
        "bsonType": "object",
        "required": ["user_id", "name", "color"],
        "properties": {
            "user_id": {"bsonType": "string"},
            "name": {"bsonType": "string", "minLength": 1},
            "color": {"bsonType": "string"},
            "created_at": {"bsonType": "string"},
        },
        "additionalProperties": True,
    }
    _collmod_or_create(TAG_COLL, tag_validator)
    _ensure_indexes(
        TAG_COLL,
        [{"keys": [("user_id", 1), ("name", 1)], "unique": True, "name": "uniq_user_tag_name"}],
    )

    storage_validator = {
        "bsonType": "object",
        "required": ["_id", "key", "content_type", "user_id", "created_at"],
        "properties": {
            "_id": {"bsonType": "string"},
            "key": {"bsonType": "string"},
            "content_type": {"bsonType": "string"},
            "size": {"bsonType": ["int", "long"]},
            "user_id": {"bsonType": "string"},
            "created_at": {"bsonType": "string"},
        },
        "additionalProperties": True,
    }
    _collmod_or_create(STORAGE_COLL, storage_validator)
    _ensure_indexes(STORAGE_COLL, [{"keys": [("user_id", 1)], "name": "ix_storage_user"}])
    _log.info("Collections and indexes ensured")
