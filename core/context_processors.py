from __future__ import annotations

from typing import Any

from django.conf import settings

from accounts.permissions import is_admin_user

from .locale import direction, get_current_locale, switch_locale_path


def locale_context(request) -> dict[str, Any]:
    """
    Locale data for the base layout: current code, text direction and the
    links for the language switcher (same page in every other locale).
    """
    locale = get_current_locale(request)
    path = request.get_full_path()
    switch_links = [
        {"code": code, "name": name, "url": switch_locale_path(path, code)}
        for code, name in getattr(settings, "LANGUAGES", [])
        if code != locale
    ]
    return {
        "locale": locale,
        "direction": direction(locale),
        "locale_switch_links": switch_links,
    }


def user_role(request) -> dict[str, Any]:
    user = getattr(request, "user", None)
    return {"user_is_admin": bool(user is not None and is_admin_user(user))}
