# accounts/views.py
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from core.throttle import ThrottleRule, throttle

from .forms import ProfileForm, SignInForm, SignUpForm
from .permissions import is_admin_user

logger = logging.getLogger(__name__)


# ----------------------------
# Throttle rules (tune anytime)
# ----------------------------
AUTH_SIGNIN_RULE = ThrottleRule(key_prefix="auth_signin", limit=10, window_seconds=60)
AUTH_SIGNUP_RULE = ThrottleRule(key_prefix="auth_signup", limit=5, window_seconds=60)


def _safe_next(request) -> str:
    next_url = (request.POST.get("next") or request.GET.get("next") or "").strip()
    if next_url and url_has_allowed_host_and_scheme(
        next_url, allowed_hosts={request.get_host()}, require_https=request.is_secure()
    ):
        return next_url
    return ""


def _home_for(user, locale: str):
    if is_admin_user(user):
        return redirect("dashboards:home", locale=locale)
    return redirect("accounts:profile", locale=locale)


def signin_view(request, locale: str):
    # The gateway already bounces signed-in users away from /auth/*.
    if request.user.is_authenticated:
        return _home_for(request.user, locale)

    if request.method == "POST":
        # throttle only the POST attempt
        return _signin_post(request, locale)

    form = SignInForm(request)
    return render(request, "accounts/signin.html", {"form": form, "next": _safe_next(request)})


@require_POST
@throttle(AUTH_SIGNIN_RULE)
def _signin_post(request, locale: str):
    form = SignInForm(request, data=request.POST)
    if not form.is_valid():
        return render(request, "accounts/signin.html", {"form": form, "next": _safe_next(request)})

    user = form.get_user()
    login(request, user)
    logger.info("user signed in user_id=%s", user.pk)
    messages.success(request, "Welcome back.")

    next_url = _safe_next(request)
    if next_url:
        return redirect(next_url)
    return _home_for(user, locale)


def signup_view(request, locale: str):
    if request.user.is_authenticated:
        return _home_for(request.user, locale)

    if request.method == "POST":
        return _signup_post(request, locale)

    form = SignUpForm()
    return render(request, "accounts/signup.html", {"form": form})


@require_POST
@throttle(AUTH_SIGNUP_RULE)
def _signup_post(request, locale: str):
    form = SignUpForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Please correct the form.")
        return render(request, "accounts/signup.html", {"form": form})

    user = form.save()
    logger.info("account created user_id=%s", user.pk)
    messages.success(request, "Account created. Please sign in.")
    return redirect("accounts:signin", locale=locale)


@require_POST
def signout_view(request, locale: str):
    if request.user.is_authenticated:
        logger.info("user signed out user_id=%s", request.user.pk)
    logout(request)
    messages.success(request, "You have been signed out.")
    return redirect("core:home", locale=locale)


@login_required
def profile_view(request, locale: str):
    # Profile is created via signal; assume it exists.
    profile = request.user.profile

    if request.method == "POST":
        form = ProfileForm(request.POST, request.FILES, instance=profile)
        if form.is_valid():
            form.save()
            messages.success(request, "Profile updated.")
            return redirect("accounts:profile", locale=locale)
        messages.error(request, "Please correct the form.")
    else:
        form = ProfileForm(instance=profile)

    return render(request, "accounts/profile.html", {"form": form, "profile": profile})
