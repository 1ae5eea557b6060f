# core/throttle.py
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Iterable, Tuple

from django.conf import settings
from django.contrib import messages
from django.core.cache import cache
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ThrottleRule:
    key_prefix: str
    limit: int
    window_seconds: int


def _get_client_ip(request: HttpRequest) -> str:
    """
    Best-effort client IP.

    With THROTTLE_TRUST_PROXY_HEADERS=True (prod behind our own proxy) the
    X-Forwarded-For / X-Real-IP headers win; otherwise REMOTE_ADDR.
    """
    if getattr(settings, "THROTTLE_TRUST_PROXY_HEADERS", False):
        xff = (request.META.get("HTTP_X_FORWARDED_FOR") or "").strip()
        if xff:
            ip = xff.split(",")[0].strip()
            if ip:
                return ip

        xri = (request.META.get("HTTP_X_REAL_IP") or "").strip()
        if xri:
            return xri

    return (request.META.get("REMOTE_ADDR") or "").strip() or "ip-unknown"


def _client_fingerprint(request: HttpRequest) -> str:
    # ip + short UA prefix + user id (or the cart session for guests)
    ip = _get_client_ip(request)
    ua = (request.META.get("HTTP_USER_AGENT") or "")[:60]
    user = getattr(request, "user", None)
    if user is not None and user.is_authenticated:
        who = f"user:{user.pk}"
    else:
        who = "anon"
    return f"{ip}|{ua}|{who}"


def _too_many_requests(request: HttpRequest, rule: ThrottleRule) -> HttpResponse:
    window = max(1, rule.window_seconds)
    retry_after = max(1, int(window - (time.time() % window)))

    # HTML form posts go back where they came from with a flash message.
    accept = (request.META.get("HTTP_ACCEPT") or "").lower()
    referer = (request.META.get("HTTP_REFERER") or "").strip()
    if "text/html" in accept and referer and request.method.upper() != "GET":
        messages.error(request, "Too many requests. Please try again in a moment.")
        return redirect(referer)

    resp = HttpResponse("Too many requests. Please try again shortly.", status=429)
    resp["Retry-After"] = str(retry_after)
    return resp


def throttle(rule: ThrottleRule, *, methods: Iterable[str] | None = None) -> Callable:
    """
    Cache-based fixed-window throttle for abusable endpoints:
    sign-in / sign-up posts, cart mutations and checkout.
    """
    allowed: Tuple[str, ...] = tuple(m.upper() for m in methods) if methods else ("POST", "PUT", "PATCH", "DELETE")

    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        def wrapped(request: HttpRequest, *args, **kwargs) -> HttpResponse:
            if request.method.upper() not in allowed:
                return view_func(request, *args, **kwargs)

            bucket = int(time.time() // max(1, rule.window_seconds))
            cache_key = f"throttle:{rule.key_prefix}:{bucket}:{_client_fingerprint(request)}"

            current = int(cache.get(cache_key, 0) or 0)
            if current >= rule.limit:
                logger.warning("throttled %s (limit=%s/%ss)", rule.key_prefix, rule.limit, rule.window_seconds)
                return _too_many_requests(request, rule)

            cache.set(cache_key, current + 1, timeout=rule.window_seconds + 5)
            return view_func(request, *args, **kwargs)

        return wrapped

    return decorator
