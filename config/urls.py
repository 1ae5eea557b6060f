# config/urls.py

from __future__ import annotations

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path, register_converter

from core import views as core_views
from core.converters import LocaleConverter

register_converter(LocaleConverter, "locale")

urlpatterns = [
    path("robots.txt", core_views.robots_txt),
    path("sitemap.xml", core_views.sitemap_xml),
    path("django-admin/", admin.site.urls),

    # Everything user-facing lives under /{locale}/ (the gateway guarantees the prefix).
    path("<locale:locale>/", include("core.urls")),
    path("<locale:locale>/", include("accounts.urls")),
    path("<locale:locale>/", include("catalog.urls")),
    path("<locale:locale>/", include("cart.urls")),
    path("<locale:locale>/", include("orders.urls")),
    path("<locale:locale>/", include("dashboards.urls")),
]

handler404 = "core.views.error_404"
handler500 = "core.views.error_500"

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
