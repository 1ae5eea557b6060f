# core/logging_context.py
"""
Per-thread request context for log records.

RequestIDMiddleware fills it at the start of a request, the gateway adds the
resolved locale once it is known, and RequestContextFilter reads it back.
"""
from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from typing import Optional

_local = threading.local()


@dataclass
class LogContext:
    request_id: str
    user_id: Optional[int] = None
    path: str = ""
    locale: str = "-"


def set_context(*, request_id: str, user_id: Optional[int], path: str) -> None:
    _local.ctx = LogContext(request_id=request_id, user_id=user_id, path=path)


def set_locale(locale: str) -> None:
    ctx = get_context()
    if ctx is not None:
        ctx.locale = locale or "-"


def clear_context() -> None:
    if hasattr(_local, "ctx"):
        delattr(_local, "ctx")


def get_context() -> LogContext | None:
    return getattr(_local, "ctx", None)


def new_request_id() -> str:
    return uuid.uuid4().hex
