from __future__ import annotations

from django.shortcuts import render

from .services import get_products_by_category


def menu(request, locale: str):
    """
    Full menu: every category (by `order`) with its items, sizes and extras.
    Served from the menu cache.
    """
    categories = get_products_by_category()
    return render(request, "catalog/menu.html", {"categories": categories})
