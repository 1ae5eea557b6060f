from __future__ import annotations

import logging

import pytest

from core.logging_context import clear_context, get_context, set_context, set_locale
from core.logging_filters import RequestContextFilter


def _record():
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello", None, None)


def test_filter_outside_request_uses_placeholders():
    clear_context()
    record = _record()
    assert RequestContextFilter().filter(record) is True
    assert record.request_id == "-"
    assert record.locale == "-"


def test_filter_copies_request_context():
    set_context(request_id="rid-1", user_id=7, path="/en/menu/")
    set_locale("en")
    try:
        record = _record()
        RequestContextFilter().filter(record)
        assert (record.request_id, record.user_id, record.path, record.locale) == ("rid-1", 7, "/en/menu/", "en")
    finally:
        clear_context()


@pytest.mark.django_db
def test_context_is_cleared_after_response(client):
    client.get("/en/")
    assert get_context() is None
