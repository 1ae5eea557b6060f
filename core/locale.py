# core/locale.py
"""
Locale helpers shared by the gateway, views and templates.

The current locale is always passed around explicitly (URL kwarg, request
attribute or the X-URL header written by the gateway); nothing here reads or
activates a thread-global language.
"""
from __future__ import annotations

from typing import Iterable, Sequence
from urllib.parse import urlsplit

from django.conf import settings
from django.urls import reverse
# parse_accept_lang_header has no public alias. get_supported_language_variant only
# checks settings.LANGUAGES, while negotiation here runs against the `locales` argument.
from django.utils.translation.trans_real import parse_accept_lang_header

X_URL_META_KEY = "HTTP_X_URL"


def supported_locales() -> list[str]:
    return [code for code, _name in getattr(settings, "LANGUAGES", [])]


def default_locale() -> str:
    return getattr(settings, "LANGUAGE_CODE", "ar")


def direction(locale: str) -> str:
    rtl = getattr(settings, "RTL_LANGUAGES", ["ar"])
    return "rtl" if locale in rtl else "ltr"


def negotiate_locale(accept_language: str, locales: Sequence[str], default: str) -> str:
    """
    Pick the best supported locale for an Accept-Language header.

    Candidates are tried in quality order; a candidate matches exactly
    ("en" -> "en") or by its primary subtag ("en-GB" -> "en"). Anything
    unparsable falls back to `default`.
    """
    header = (accept_language or "").strip()
    if not header:
        return default

    try:
        parsed = parse_accept_lang_header(header)
    except ValueError:
        return default

    supported = {code.lower(): code for code in locales}
    for lang, _q in parsed:
        lang = (lang or "").lower()
        if not lang or lang == "*":
            continue
        if lang in supported:
            return supported[lang]
        primary = lang.split("-", 1)[0]
        if primary in supported:
            return supported[primary]
    return default


def locale_from_path(path: str, locales: Iterable[str]) -> str | None:
    """Return the locale when it is the first path segment, else None."""
    segments = (path or "").lstrip("/").split("/", 1)
    first = segments[0] if segments else ""
    return first if first and first in set(locales) else None


def get_current_locale(request) -> str:
    """
    Locale for downstream handlers.

    Re-derived from the original URL the gateway stored in X-URL, falling back
    to `request.locale` and then the configured default.
    """
    locales = supported_locales()
    url = (getattr(request, "META", {}) or {}).get(X_URL_META_KEY) or ""
    if url:
        locale = locale_from_path(urlsplit(url).path, locales)
        if locale:
            return locale

    locale = getattr(request, "locale", None)
    if locale in locales:
        return locale
    return default_locale()


def locale_url(locale: str, viewname: str, **kwargs) -> str:
    return reverse(viewname, kwargs={"locale": locale, **kwargs})


def switch_locale_path(path: str, new_locale: str) -> str:
    """/ar/menu/ -> /en/menu/ (paths without a locale just get one)."""
    locales = supported_locales()
    current = locale_from_path(path, locales)
    if current is None:
        return f"/{new_locale}{path if path.startswith('/') else '/' + path}"
    rest = path.lstrip("/")[len(current):]
    return f"/{new_locale}{rest or '/'}"
