# core/gateway.py
"""
Request gateway: locale routing + auth gating as an ordered list of guards.

Every guard takes a RequestContext plus the GatewayConfig and returns either
CONTINUE or a Redirect. `evaluate` runs them in order and the first redirect
wins. Guards are pure: no request object, no database, no shared state.

Order:
  1. resolve_locale          no locale segment -> redirect to /{negotiated}{path}?{query}
  2. (session lookup)        done while building the context, see build_context
  3. guard_auth_pages        /{locale}/auth/* with a session -> admin or profile root
  4. guard_protected_routes  /{locale}/profile|admin without a session -> sign-in page
  5. guard_admin_role        /{locale}/admin with a non-admin session -> profile root
  6. forward                 the middleware attaches X-URL and request.locale
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence, Tuple, Union

from django.conf import settings

from .locale import locale_from_path, negotiate_locale

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


# ============================================================
# Types
# ============================================================
@dataclass(frozen=True)
class SessionInfo:
    user_id: int
    role: str = ROLE_USER

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


@dataclass(frozen=True)
class RequestContext:
    path: str
    query_string: str = ""
    accept_language: str = ""
    full_url: str = ""
    locale: Optional[str] = None
    session: Optional[SessionInfo] = None


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Redirect:
    location: str


Decision = Union[Continue, Redirect]
CONTINUE = Continue()


@dataclass(frozen=True)
class GatewayConfig:
    locales: Tuple[str, ...]
    default_locale: str
    auth_prefix: str = "auth"
    login_page: str = "signin"
    profile_prefix: str = "profile"
    admin_prefix: str = "admin"
    excluded_prefixes: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(cls) -> "GatewayConfig":
        locales = tuple(code for code, _name in getattr(settings, "LANGUAGES", []))
        default = getattr(settings, "LANGUAGE_CODE", "") or (locales[0] if locales else "en")
        if locales and default not in locales:
            default = locales[0]
        return cls(
            locales=locales,
            default_locale=default,
            excluded_prefixes=tuple(getattr(settings, "GATEWAY_EXCLUDED_PREFIXES", ()) or ()),
        )

    def is_excluded(self, path: str) -> bool:
        return any(path.startswith(p) for p in self.excluded_prefixes if p)

    def login_url(self, locale: str) -> str:
        return f"/{locale}/{self.auth_prefix}/{self.login_page}/"

    def profile_url(self, locale: str) -> str:
        return f"/{locale}/{self.profile_prefix}/"

    def admin_url(self, locale: str) -> str:
        return f"/{locale}/{self.admin_prefix}/"


Guard = Callable[[RequestContext, GatewayConfig], Decision]


# ============================================================
# Context
# ============================================================
def make_context(
    path: str,
    config: GatewayConfig,
    *,
    query_string: str = "",
    accept_language: str = "",
    full_url: str = "",
    session: Optional[SessionInfo] = None,
) -> RequestContext:
    path = path or "/"
    return RequestContext(
        path=path,
        query_string=query_string or "",
        accept_language=accept_language or "",
        full_url=full_url or path,
        locale=locale_from_path(path, config.locales),
        session=session,
    )


def build_context(request, config: GatewayConfig, session: Optional[SessionInfo] = None) -> RequestContext:
    """Normalize a Django request (session already decoded by the caller)."""
    return make_context(
        request.path,
        config,
        query_string=request.META.get("QUERY_STRING", ""),
        accept_language=request.META.get("HTTP_ACCEPT_LANGUAGE", ""),
        full_url=request.build_absolute_uri(),
        session=session,
    )


def is_under(path: str, locale: str, prefix: str) -> bool:
    """Segment-aware prefix test: /en/admin and /en/admin/x match, /en/adminx does not."""
    base = f"/{locale}/{prefix.strip('/')}"
    return path == base or path.startswith(base + "/")


# ============================================================
# Guards
# ============================================================
def resolve_locale(ctx: RequestContext, config: GatewayConfig) -> Decision:
    if ctx.locale:
        return CONTINUE

    locale = negotiate_locale(ctx.accept_language, config.locales, config.default_locale)
    path = ctx.path if ctx.path.startswith("/") else f"/{ctx.path}"
    location = f"/{locale}{path}"
    if ctx.query_string:
        location = f"{location}?{ctx.query_string}"
    return Redirect(location)


def guard_auth_pages(ctx: RequestContext, config: GatewayConfig) -> Decision:
    if ctx.session is None or not is_under(ctx.path, ctx.locale, config.auth_prefix):
        return CONTINUE
    if ctx.session.is_admin:
        return Redirect(config.admin_url(ctx.locale))
    return Redirect(config.profile_url(ctx.locale))


def guard_protected_routes(ctx: RequestContext, config: GatewayConfig) -> Decision:
    if ctx.session is not None:
        return CONTINUE
    protected = (config.profile_prefix, config.admin_prefix)
    if any(is_under(ctx.path, ctx.locale, prefix) for prefix in protected):
        return Redirect(config.login_url(ctx.locale))
    return CONTINUE


def guard_admin_role(ctx: RequestContext, config: GatewayConfig) -> Decision:
    if ctx.session is None or ctx.session.is_admin:
        return CONTINUE
    if is_under(ctx.path, ctx.locale, config.admin_prefix):
        return Redirect(config.profile_url(ctx.locale))
    return CONTINUE


DEFAULT_GUARDS: Tuple[Guard, ...] = (
    resolve_locale,
    guard_auth_pages,
    guard_protected_routes,
    guard_admin_role,
)


def evaluate(ctx: RequestContext, config: GatewayConfig, guards: Sequence[Guard] = DEFAULT_GUARDS) -> Decision:
    if config.is_excluded(ctx.path):
        return CONTINUE

    for guard in guards:
        decision = guard(ctx, config)
        if isinstance(decision, Redirect):
            return decision
    return CONTINUE
