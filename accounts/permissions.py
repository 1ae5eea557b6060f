# accounts/permissions.py
from __future__ import annotations

from functools import wraps
from typing import Callable

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect

from core.gateway import ROLE_ADMIN, ROLE_USER
from core.locale import get_current_locale


def _get_profile(user):
    # Works with the OneToOne Profile named `profile`
    return getattr(user, "profile", None)


def is_admin_user(user) -> bool:
    if not user or not user.is_authenticated:
        return False
    # Superuser/staff override the stored role
    if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False):
        return True
    profile = _get_profile(user)
    return getattr(profile, "role", ROLE_USER) == ROLE_ADMIN


def user_role(user) -> str:
    return ROLE_ADMIN if is_admin_user(user) else ROLE_USER


def admin_required(view_func: Callable[..., HttpResponse]):
    """
    Requires:
      - authenticated
      - ADMIN role (or staff/superuser)

    The gateway already bounces non-admins away from /{locale}/admin/; this is
    the view-level check for anything mounted elsewhere or called directly.
    """

    @login_required
    @wraps(view_func)
    def _wrapped(request: HttpRequest, *args, **kwargs):
        if not is_admin_user(request.user):
            messages.info(request, "You don't have access to the admin dashboard.")
            locale = kwargs.get("locale") or get_current_locale(request)
            return redirect("accounts:profile", locale=locale)
        return view_func(request, *args, **kwargs)

    return _wrapped
