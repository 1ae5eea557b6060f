from __future__ import annotations

import pytest

from core.gateway import (
    CONTINUE,
    ROLE_ADMIN,
    ROLE_USER,
    GatewayConfig,
    Redirect,
    SessionInfo,
    evaluate,
    is_under,
    make_context,
)

CONFIG = GatewayConfig(
    locales=("ar", "en"),
    default_locale="ar",
    excluded_prefixes=("/static/", "/media/", "/api/", "/django-admin/", "/favicon.ico"),
)

USER = SessionInfo(user_id=1, role=ROLE_USER)
ADMIN = SessionInfo(user_id=2, role=ROLE_ADMIN)


def decide(path, *, session=None, query="", accept=""):
    ctx = make_context(path, CONFIG, query_string=query, accept_language=accept, session=session)
    return evaluate(ctx, CONFIG)


# ---- locale resolution ----
def test_missing_locale_redirects_to_default():
    assert decide("/menu/") == Redirect("/ar/menu/")


def test_missing_locale_preserves_path_and_query():
    assert decide("/menu/", query="category=2&x=1", accept="en-US,en;q=0.9") == Redirect("/en/menu/?category=2&x=1")


def test_root_gets_locale():
    assert decide("/", accept="en") == Redirect("/en/")


def test_unsupported_accept_language_falls_back_to_default():
    assert decide("/about/", accept="fr-FR,de;q=0.8") == Redirect("/ar/about/")


def test_locale_check_is_segment_based():
    # "/english" starts with "en" but has no locale segment.
    assert decide("/english/") == Redirect("/ar/english/")


@pytest.mark.parametrize("path", ["/static/css/site.css", "/media/x.png", "/api/anything", "/django-admin/", "/favicon.ico"])
def test_excluded_paths_pass_through(path):
    assert decide(path) is CONTINUE
    assert decide(path, session=USER) is CONTINUE


def test_localized_public_page_continues():
    assert decide("/en/menu/") is CONTINUE
    assert decide("/ar/", session=USER) is CONTINUE


# ---- auth pages ----
def test_admin_on_auth_page_goes_to_admin_root():
    assert decide("/en/auth/signin/", session=ADMIN) == Redirect("/en/admin/")


def test_user_on_auth_page_goes_to_profile():
    assert decide("/ar/auth/signup/", session=USER) == Redirect("/ar/profile/")


def test_anonymous_on_auth_page_continues():
    assert decide("/en/auth/signin/") is CONTINUE


# ---- protected routes ----
def test_anonymous_admin_route_redirects_to_signin():
    assert decide("/en/admin/x") == Redirect("/en/auth/signin/")


def test_anonymous_profile_redirects_to_signin():
    assert decide("/ar/profile") == Redirect("/ar/auth/signin/")


def test_user_profile_continues():
    assert decide("/en/profile/", session=USER) is CONTINUE


# ---- admin role ----
def test_user_on_admin_route_goes_to_profile():
    assert decide("/en/admin/categories/", session=USER) == Redirect("/en/profile/")


def test_admin_on_admin_route_continues():
    assert decide("/en/admin/orders/", session=ADMIN) is CONTINUE


def test_admin_prefix_is_segment_aware():
    assert is_under("/en/admin", "en", "admin")
    assert is_under("/en/admin/users/", "en", "admin")
    assert not is_under("/en/administrator/", "en", "admin")
    assert decide("/en/administrator/") is CONTINUE


def test_custom_guard_chain_first_redirect_wins():
    calls = []

    def first(ctx, config):
        calls.append("first")
        return Redirect("/first/")

    def second(ctx, config):
        calls.append("second")
        return Redirect("/second/")

    ctx = make_context("/en/", CONFIG)
    assert evaluate(ctx, CONFIG, guards=[first, second]) == Redirect("/first/")
    assert calls == ["first"]


def test_config_urls_have_trailing_slash():
    assert CONFIG.login_url("en") == "/en/auth/signin/"
    assert CONFIG.profile_url("ar") == "/ar/profile/"
    assert CONFIG.admin_url("ar") == "/ar/admin/"


def test_config_from_settings(settings):
    settings.LANGUAGES = [("ar", "Arabic"), ("en", "English")]
    settings.LANGUAGE_CODE = "ar"
    settings.GATEWAY_EXCLUDED_PREFIXES = ["/static/"]
    config = GatewayConfig.from_settings()
    assert config.locales == ("ar", "en")
    assert config.default_locale == "ar"
    assert config.is_excluded("/static/app.js")
    assert not config.is_excluded("/en/")
