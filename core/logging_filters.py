# core/logging_filters.py
from __future__ import annotations

import logging

from .logging_context import get_context


class RequestContextFilter(logging.Filter):
    """Copy request id, user, path and locale onto every record (dashes outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        ctx = get_context()
        if ctx is None:
            record.request_id = "-"
            record.user_id = None
            record.path = ""
            record.locale = "-"
            return True

        record.request_id = ctx.request_id
        record.user_id = ctx.user_id
        record.path = ctx.path
        record.locale = ctx.locale
        return True
