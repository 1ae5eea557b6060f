# core/views.py
from __future__ import annotations

import logging
from urllib.parse import urljoin

from django.conf import settings
from django.core.cache import cache
from django.http import HttpResponse
from django.shortcuts import render
from django.urls import reverse

from catalog.services import get_best_sellers

from .locale import supported_locales

logger = logging.getLogger(__name__)

HOME_BEST_SELLERS = 3

# Public pages listed in sitemap.xml, per locale.
SITEMAP_VIEWS = ["core:home", "catalog:menu", "core:about", "core:contact"]


def home(request, locale: str):
    """Hero + best sellers (served from the menu cache)."""
    return render(request, "core/home.html", {"best_sellers": get_best_sellers(HOME_BEST_SELLERS)})


def about(request, locale: str):
    return render(request, "core/about.html")


def contact(request, locale: str):
    return render(request, "core/contact.html")


def error_404(request, exception=None):
    return render(request, "errors/404.html", status=404)


def error_500(request):
    return render(request, "errors/500.html", status=500)


def _base_url(request) -> str:
    base_url = (getattr(settings, "SITE_BASE_URL", "") or "").rstrip("/")
    if not base_url:
        base_url = request.build_absolute_uri("/").rstrip("/")
    return base_url


def robots_txt(request):
    cache_key = "robots_txt_v1"
    cached = cache.get(cache_key)
    if cached:
        return HttpResponse(cached, content_type="text/plain")

    base_url = _base_url(request)
    content = "\n".join(
        [
            "User-agent: *",
            *[f"Disallow: /{code}/admin/" for code in supported_locales()],
            f"Sitemap: {base_url}/sitemap.xml",
        ]
    )
    cache.set(cache_key, content, getattr(settings, "SITEMAP_CACHE_SECONDS", 3600))
    return HttpResponse(content, content_type="text/plain")


def sitemap_xml(request):
    cache_key = "sitemap_xml_v1"
    cached = cache.get(cache_key)
    if cached:
        return HttpResponse(cached, content_type="application/xml")

    base_url = _base_url(request)
    urls = [
        urljoin(base_url + "/", reverse(name, kwargs={"locale": code}).lstrip("/"))
        for code in supported_locales()
        for name in SITEMAP_VIEWS
    ]

    xml_lines = [
        "<?xml version=\"1.0\" encoding=\"UTF-8\"?>",
        "<urlset xmlns=\"http://www.sitemaps.org/schemas/sitemap/0.9\">",
        *[f"  <url><loc>{url}</loc></url>" for url in urls],
        "</urlset>",
    ]
    content = "\n".join(xml_lines)
    cache.set(cache_key, content, getattr(settings, "SITEMAP_CACHE_SECONDS", 3600))
    return HttpResponse(content, content_type="application/xml")
