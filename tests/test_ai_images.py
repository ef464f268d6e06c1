import pytest

from noteart.core.exceptions import InvalidIndex, NotFoundOrUnauthorized, Unauthenticated
from noteart.services import ai_image_service, note_service


@pytest.fixture
def note_id(fake_db, blob_store):
    return note_service.create_note("u1", title="Art", content="ideas", tags=[])


def _add(note_id, n, user_id="u1", **extra):
    return ai_image_service.add_ai_image(
        user_id,
        note_id,
        url=f"https://img.test/{n}.png",
        prompt=f"prompt {n}",
        provider="openai",
        **extra,
    )


def test_add_returns_index_id_and_value(note_id):
    first = _add(note_id, 0)
    second = _add(note_id, 1, metadata={"size": "1024x1024", "quality": None, "style": "vivid"})

    assert first["success"] is True
    assert first["index"] == 0
    assert second["index"] == 1
    assert first["id"] != second["id"]
    assert second["ai_image"]["url"] == "https://img.test/1.png"
    assert second["ai_image"]["metadata"] == {"size": "1024x1024", "style": "vivid"}
    assert second["ai_image"]["generated_at"].endswith("Z")


def test_add_requires_identity_and_ownership(note_id):
    with pytest.raises(Unauthenticated):
        _add(note_id, 0, user_id=None)
    with pytest.raises(NotFoundOrUnauthorized):
        _add(note_id, 0, user_id="u2")
    with pytest.raises(NotFoundOrUnauthorized):
        _add("0123456789abcdef01234567", 0)


def test_remove_at_index_shifts_later_images(note_id):
    for n in range(3):
        _add(note_id, n)

    ai_image_service.remove_ai_image_at("u1", note_id, 1)

    urls = [i["url"] for i in ai_image_service.list_ai_images("u1", note_id)]
    assert urls == ["https://img.test/0.png", "https://img.test/2.png"]


def test_remove_at_keeps_image_appended_meanwhile(note_id, monkeypatch):
    _add(note_id, 0)
    _add(note_id, 1)
    owned_note = ai_image_service._owned_note

    def _owned_then_append(user_id, nid):
        note = owned_note(user_id, nid)
        # another session attaches an image after the ownership check
        _add(nid, 2)
        return note

    monkeypatch.setattr(ai_image_service, "_owned_note", _owned_then_append)
    ai_image_service.remove_ai_image_at("u1", note_id, 0)

    urls = [i["url"] for i in ai_image_service.list_ai_images("u1", note_id)]
    assert urls == ["https://img.test/1.png", "https://img.test/2.png"]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_remove_at_out_of_range(note_id, index):
    for n in range(3):
        _add(note_id, n)
    with pytest.raises(InvalidIndex):
        ai_image_service.remove_ai_image_at("u1", note_id, index)
    assert len(ai_image_service.list_ai_images("u1", note_id)) == 3


def test_remove_by_id(note_id):
    ids = [_add(note_id, n)["id"] for n in range(3)]

    ai_image_service.remove_ai_image("u1", note_id, ids[1])

    remaining = ai_image_service.list_ai_images("u1", note_id)
    assert [i["id"] for i in remaining] == [ids[0], ids[2]]
    with pytest.raises(InvalidIndex):
        ai_image_service.remove_ai_image("u1", note_id, ids[1])


def test_remove_on_foreign_note(note_id):
    image_id = _add(note_id, 0)["id"]
    with pytest.raises(NotFoundOrUnauthorized):
        ai_image_service.remove_ai_image("u2", note_id, image_id)
    with pytest.raises(NotFoundOrUnauthorized):
        ai_image_service.remove_ai_image_at("u2", note_id, 0)
    with pytest.raises(Unauthenticated):
        ai_image_service.remove_ai_image_at(None, note_id, 0)


def test_list_is_empty_when_not_visible(note_id):
    _add(note_id, 0)
    assert ai_image_service.list_ai_images(None, note_id) == []
    assert ai_image_service.list_ai_images("u2", note_id) == []
    assert ai_image_service.list_ai_images("u1", "0123456789abcdef01234567") == []
    assert ai_image_service.list_ai_images("u1", "garbage") == []


def test_note_read_includes_ai_images(note_id):
    _add(note_id, 0)
    note = note_service.get_note("u1", note_id)
    assert [i["prompt"] for i in note["ai_generated_images"]] == ["prompt 0"]
