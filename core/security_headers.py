from __future__ import annotations

from django.conf import settings

DEFAULT_CSP = (
    "default-src 'self'; "
    "img-src 'self' data: blob: https:; "
    "style-src 'self' 'unsafe-inline'; "
    "script-src 'self'; "
    "font-src 'self' data:; "
    "connect-src 'self'; "
    "form-action 'self'; "
    "frame-ancestors 'none'; "
    "base-uri 'self';"
)


class SecurityHeadersMiddleware:
    """
    Baseline security headers for every response.

    The CSP only allows same-origin scripts (pages are server rendered and the
    cart is a plain form post); product images may come from any https host
    so S3 media keeps working. Override with SECURITY_CSP per environment.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.csp = getattr(settings, "SECURITY_CSP", DEFAULT_CSP)
        self.permissions_policy = getattr(
            settings,
            "SECURITY_PERMISSIONS_POLICY",
            "camera=(), microphone=(), geolocation=(), payment=()",
        )
        self.referrer_policy = getattr(settings, "SECURE_REFERRER_POLICY", "strict-origin-when-cross-origin")

    def __call__(self, request):
        resp = self.get_response(request)

        resp["X-Frame-Options"] = "DENY"
        resp["X-Content-Type-Options"] = "nosniff"
        resp["Referrer-Policy"] = self.referrer_policy
        # Legacy XSS auditor off; CSP covers it.
        resp["X-XSS-Protection"] = "0"
        resp["Content-Security-Policy"] = self.csp
        resp["Cross-Origin-Opener-Policy"] = "same-origin"
        resp["Permissions-Policy"] = self.permissions_policy

        # Only when HTTPS is truly enforced.
        hsts_seconds = int(getattr(settings, "SECURE_HSTS_SECONDS", 0) or 0)
        if hsts_seconds > 0:
            value = f"max-age={hsts_seconds}"
            if getattr(settings, "SECURE_HSTS_INCLUDE_SUBDOMAINS", True):
                value += "; includeSubDomains"
            if getattr(settings, "SECURE_HSTS_PRELOAD", False):
                value += "; preload"
            resp["Strict-Transport-Security"] = value

        return resp
