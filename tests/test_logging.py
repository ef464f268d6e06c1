import logging

from noteart.core.logging import RequestIdFilter, request_id_var


def _record():
    return logging.LogRecord("noteart.notes", logging.INFO, __file__, 1, "note created", None, None)


def test_records_outside_a_request_get_a_dash():
    record = _record()
    assert RequestIdFilter().filter(record) is True
    assert record.request_id == "-"


def test_records_inside_a_request_get_its_id():
    token = request_id_var.set("req-42")
    try:
        record = _record()
        RequestIdFilter().filter(record)
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-42"


def test_generated_request_id_is_echoed(client):
    r = client.get("/api/ping")
    assert len(r.headers["X-Request-Id"]) == 32
