import pytest
from fastapi.testclient import TestClient

from noteart.core.config import settings
from noteart.infrastructure.db import mongo
from noteart.infrastructure.storage import r2
from noteart.repositories import user_repo
from noteart.services import token_service
from tests.fakes import FakeDatabase


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeDatabase()
    db["user"].create_index([("email", 1)], unique=True, name="uniq_email")
    db["tag"].create_index([("user_id", 1), ("name", 1)], unique=True, name="uniq_user_tag_name")
    monkeypatch.setattr(mongo, "_db", db)
    return db


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", "test-secret")
    monkeypatch.setattr(settings, "r2_bucket", "noteart-test")
    monkeypatch.setattr(settings, "r2_access_key", "test-access")
    monkeypatch.setattr(settings, "r2_secret_key", "test-secret-key")
    monkeypatch.setattr(settings, "public_api_url", "http://api.test")
    return settings


@pytest.fixture
def blob_store(monkeypatch):
    """Replaces the bucket: uploads are recorded, URLs are deterministic."""
    stored = {}

    def _put(key, body, content_type):
        stored[key] = (body, content_type)

    monkeypatch.setattr(r2, "put_object", _put)
    monkeypatch.setattr(r2, "object_url", lambda key: f"https://cdn.test/{key}")
    return stored


@pytest.fixture
def make_user(fake_db):
    counter = {"n": 0}

    def _make(email=None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        user_id = user_repo.insert_user(email, "not-a-real-hash")
        token = token_service.create_access_token(user=user_repo.get_user_by_id(user_id))
        return user_id, {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def client(fake_db, blob_store):
    # no context manager: the lifespan would try to reach a real Mongo
    from noteart.main import app

    yield TestClient(app)
    app.dependency_overrides.clear()
