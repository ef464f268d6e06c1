from urllib.parse import parse_qs, urlparse

import jwt
import pytest
from botocore.exceptions import ClientError

from noteart.core.exceptions import Unauthenticated, UploadFailed
from noteart.infrastructure.storage import r2
from noteart.repositories import storage_repo
from noteart.services import attachment_service, storage_service, token_service


def _token_from(target):
    return parse_qs(urlparse(target["upload_url"]).query)["token"][0]


def test_upload_target_requires_identity(fake_db):
    with pytest.raises(Unauthenticated):
        storage_service.generate_upload_target(None)


def test_upload_target_points_at_upload_endpoint(fake_db):
    target = storage_service.generate_upload_target("u1")

    assert target["upload_url"].startswith("http://api.test/api/storage/upload?token=")
    assert target["expires_in"] == 600
    payload = token_service.verify_upload_token(_token_from(target))
    assert payload["sub"] == "u1"


def test_upload_token_is_not_an_access_token(fake_db):
    token = _token_from(storage_service.generate_upload_target("u1"))
    with pytest.raises(jwt.InvalidTokenError):
        token_service.verify_access_token(token)


def test_store_upload_registers_blob(fake_db, blob_store):
    token = _token_from(storage_service.generate_upload_target("u1"))

    storage_id = storage_service.store_upload(token, b"\x89PNG...", "image/png")

    blob = storage_repo.get_blob(storage_id)
    assert blob["key"] == f"notes/{storage_id}.png"
    assert blob["content_type"] == "image/png"
    assert blob["size"] == 7
    assert blob["user_id"] == "u1"
    assert blob_store[blob["key"]] == (b"\x89PNG...", "image/png")
    assert attachment_service.resolve_url(storage_id) == f"https://cdn.test/notes/{storage_id}.png"


def test_store_upload_normalizes_content_type(fake_db, blob_store):
    token = _token_from(storage_service.generate_upload_target("u1"))
    storage_id = storage_service.store_upload(token, b"jpeg", "IMAGE/JPEG; charset=binary")
    assert storage_repo.get_blob(storage_id)["key"].endswith(".jpg")


def test_store_upload_rejects_bad_tokens(fake_db, blob_store):
    access = token_service.create_access_token(user={"_id": "u1", "email": "a@b.c"})
    for token in ("garbage", access):
        with pytest.raises(Unauthenticated):
            storage_service.store_upload(token, b"data", "image/png")
    assert blob_store == {}


def test_store_upload_rejects_empty_body(fake_db, blob_store):
    token = _token_from(storage_service.generate_upload_target("u1"))
    with pytest.raises(UploadFailed):
        storage_service.store_upload(token, b"", "image/png")


def test_store_upload_without_bucket(fake_db, blob_store, monkeypatch):
    token = _token_from(storage_service.generate_upload_target("u1"))
    monkeypatch.setattr(storage_service.settings, "r2_bucket", None)
    with pytest.raises(UploadFailed):
        storage_service.store_upload(token, b"data", "image/png")


def test_store_upload_bucket_error(fake_db, monkeypatch):
    def _fail(key, body, content_type):
        raise ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")

    monkeypatch.setattr(r2, "put_object", _fail)
    token = _token_from(storage_service.generate_upload_target("u1"))

    with pytest.raises(UploadFailed) as exc:
        storage_service.store_upload(token, b"data", "image/png")
    assert "AccessDenied" in exc.value.message
    assert fake_db["storage"].count_documents({}) == 0


def test_resolver_yields_none_for_unknown_ids(fake_db, blob_store):
    storage_repo.insert_blob("known", key="notes/known.png", content_type="image/png", size=1, user_id="u1")

    urls = attachment_service.resolve_urls(["abc", "known", "other"])

    assert urls == [None, "https://cdn.test/notes/known.png", None]


def test_resolver_swallows_lookup_failures(fake_db, monkeypatch):
    storage_repo.insert_blob("known", key="notes/known.png", content_type="image/png", size=1, user_id="u1")

    def _boom(key):
        raise RuntimeError("R2_BUCKET not configured")

    monkeypatch.setattr(r2, "object_url", _boom)
    assert attachment_service.resolve_urls(["known"]) == [None]


def test_object_url_prefers_public_base(monkeypatch):
    monkeypatch.setattr(r2.settings, "r2_public_base_url", "https://pub.test/")
    assert r2.object_url("notes/a b.png") == "https://pub.test/notes/a%20b.png"


def test_object_url_falls_back_to_presigned(monkeypatch):
    monkeypatch.setattr(r2.settings, "r2_public_base_url", None)
    monkeypatch.setattr(r2.settings, "r2_endpoint", "https://acct.r2.cloudflarestorage.com")

    url = r2.object_url("notes/a.png")

    parsed = urlparse(url)
    assert parsed.netloc == "acct.r2.cloudflarestorage.com"
    assert parsed.path == "/noteart-test/notes/a.png"
    assert "X-Amz-Signature" in url
    assert parse_qs(parsed.query)["X-Amz-Expires"] == ["3600"]
