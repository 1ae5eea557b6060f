# catalog/services.py
"""
Read side of the menu, cached through Django's cache framework.

All keys share a generation number; `invalidate_menu_cache()` bumps it so every
cached menu query (including per-product entries) is dropped at once. Admin
writes call it after they commit.
"""
from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, TypeVar

from django.conf import settings
from django.core.cache import cache
from django.db.models import Count, Prefetch

from .models import Category, Product

logger = logging.getLogger(__name__)

T = TypeVar("T")

MENU_CACHE_PREFIX = "menu:v1"
MENU_GENERATION_KEY = f"{MENU_CACHE_PREFIX}:generation"


def _ttl() -> int:
    try:
        return int(getattr(settings, "MENU_CACHE_SECONDS", 3600))
    except (TypeError, ValueError):
        return 3600


def _generation() -> int:
    return int(cache.get_or_set(MENU_GENERATION_KEY, 0, None) or 0)


def _key(name: str) -> str:
    return f"{MENU_CACHE_PREFIX}:{_generation()}:{name}"


def _cached(name: str, loader: Callable[[], T], *, use_cache: bool = True) -> T:
    if not use_cache:
        return loader()

    key = _key(name)
    value = cache.get(key)
    if value is not None:
        return value

    value = loader()
    cache.set(key, value, _ttl())
    return value


def invalidate_menu_cache() -> None:
    cache.set(MENU_GENERATION_KEY, time.time_ns(), None)
    logger.info("menu cache invalidated")


def _products_qs():
    return Product.objects.select_related("category").prefetch_related("sizes", "extras")


# ============================================================
# Queries
# ============================================================
def get_categories(*, use_cache: bool = True) -> List[Category]:
    return _cached("categories", lambda: list(Category.objects.order_by("order", "name")), use_cache=use_cache)


def get_products_by_category(*, use_cache: bool = True) -> List[Category]:
    """Categories in menu order, each with `products` (and their sizes/extras) prefetched."""

    def load() -> List[Category]:
        products = _products_qs().order_by("order", "name")
        return list(
            Category.objects.order_by("order", "name").prefetch_related(
                Prefetch("products", queryset=products)
            )
        )

    return _cached("products_by_category", load, use_cache=use_cache)


def get_best_sellers(limit: Optional[int] = None, *, use_cache: bool = True) -> List[Product]:
    """Products that were ordered at least once, most-ordered first."""

    def load() -> List[Product]:
        qs = (
            _products_qs()
            .annotate(order_count=Count("order_items"))
            .filter(order_count__gt=0)
            .order_by("-order_count", "order", "name")
        )
        if limit:
            qs = qs[:limit]
        return list(qs)

    return _cached(f"best_sellers:{limit or 'all'}", load, use_cache=use_cache)


def get_products(*, use_cache: bool = True) -> List[Product]:
    return _cached("products", lambda: list(_products_qs().order_by("order", "name")), use_cache=use_cache)


def get_product(pk: int, *, use_cache: bool = True) -> Optional[Product]:
    def load() -> Optional[Product]:
        return _products_qs().filter(pk=pk).first()

    # None is never cached, so a missing product is re-queried each time.
    return _cached(f"product:{int(pk)}", load, use_cache=use_cache)
