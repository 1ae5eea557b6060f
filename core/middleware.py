# core/middleware.py
from __future__ import annotations

import logging

from django.http import HttpResponseRedirect
from django.utils.deprecation import MiddlewareMixin

from accounts.permissions import user_role

from .gateway import GatewayConfig, Redirect, SessionInfo, build_context, evaluate
from .locale import X_URL_META_KEY
from .logging_context import clear_context, new_request_id, set_context, set_locale

logger = logging.getLogger(__name__)


class RequestIDMiddleware(MiddlewareMixin):
    """
    Adds a stable request id for observability.

    - request.request_id
    - response header: X-Request-ID
    - threadlocal context for logging filters
    """

    header_name = "HTTP_X_REQUEST_ID"
    response_header = "X-Request-ID"

    def process_request(self, request):
        rid = (request.META.get(self.header_name) or "").strip() or new_request_id()
        request.request_id = rid
        user = getattr(request, "user", None)
        user_id = user.id if user is not None and user.is_authenticated else None
        set_context(request_id=rid, user_id=user_id, path=(request.path or ""))

    def process_response(self, request, response):
        rid = getattr(request, "request_id", None)
        if rid:
            response[self.response_header] = rid
        clear_context()
        return response

    def process_exception(self, request, exception):
        clear_context()
        return None


def session_from_request(request) -> SessionInfo | None:
    """Decode the auth session into the gateway's view of it; anonymous is None."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    return SessionInfo(user_id=user.pk, role=user_role(user))


class LocaleGatewayMiddleware:
    """
    Runs core.gateway for every request.

    Redirect decisions short-circuit the request. On pass-through the original
    full URL is attached as the internal X-URL header and the resolved locale
    as request.locale, so views never re-parse routing state.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.config = GatewayConfig.from_settings()

    def __call__(self, request):
        if self.config.is_excluded(request.path):
            return self.get_response(request)

        ctx = build_context(request, self.config, session=session_from_request(request))
        decision = evaluate(ctx, self.config)

        if isinstance(decision, Redirect):
            logger.debug("gateway redirect %s -> %s", ctx.path, decision.location)
            return HttpResponseRedirect(decision.location)

        request.locale = ctx.locale
        request.META[X_URL_META_KEY] = ctx.full_url
        set_locale(ctx.locale or "")
        return self.get_response(request)
