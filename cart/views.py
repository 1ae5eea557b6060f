# cart/views.py
from __future__ import annotations

import logging
from typing import List, Optional

from django.contrib import messages
from django.shortcuts import get_object_or_404, redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.decorators.http import require_POST

from catalog.models import Extra, Product, Size
from core.throttle import ThrottleRule, throttle

from .cart import Cart, CartLine, OptionChoice

logger = logging.getLogger(__name__)


# ============================================================
# Throttle rules
# ============================================================
CART_ADD_RULE = ThrottleRule(key_prefix="cart_add", limit=30, window_seconds=60)
CART_UPDATE_RULE = ThrottleRule(key_prefix="cart_update", limit=30, window_seconds=60)
CART_CLEAR_RULE = ThrottleRule(key_prefix="cart_clear", limit=6, window_seconds=60)


# ============================================================
# Helpers
# ============================================================
def _parse_id(value) -> Optional[int]:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return None


def _chosen_size(request, product: Product) -> Optional[Size]:
    sizes = list(product.sizes.all())
    if not sizes:
        return None
    size_id = _parse_id(request.POST.get("size"))
    for size in sizes:
        if size.pk == size_id:
            return size
    # No (or a foreign) size submitted: default to the first one.
    return sizes[0]


def _chosen_extras(request, product: Product) -> List[Extra]:
    wanted = {pk for pk in (_parse_id(v) for v in request.POST.getlist("extras")) if pk is not None}
    if not wanted:
        return []
    return [extra for extra in product.extras.all() if extra.pk in wanted]


def line_from_product(product: Product, size: Optional[Size], extras: List[Extra]) -> CartLine:
    """Snapshot a menu item and the chosen options into a cart line."""
    return CartLine(
        product_id=product.pk,
        name=product.name,
        image=product.image_url,
        base_price=product.base_price,
        size=OptionChoice(name=size.name, price=size.price) if size else None,
        extras=tuple(OptionChoice(name=e.name, price=e.price) for e in extras),
    )


def _back(request, locale: str):
    next_url = (request.POST.get("next") or "").strip()
    if next_url and url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
        return redirect(next_url)
    return redirect("cart:detail", locale=locale)


# ============================================================
# Views
# ============================================================
def cart_detail(request, locale: str):
    cart = Cart.for_request(request)
    return render(
        request,
        "cart/cart_detail.html",
        {
            "cart": cart,
            "cart_lines": cart.lines(),
            "subtotal": cart.subtotal(),
            "delivery_fee": cart.delivery_fee(),
            "total": cart.total(),
            "can_checkout": not cart.is_empty(),
        },
    )


@require_POST
@throttle(CART_ADD_RULE)
def cart_add(request, locale: str):
    product_id = _parse_id(request.POST.get("product_id"))
    product = get_object_or_404(Product.objects.prefetch_related("sizes", "extras"), pk=product_id)

    line = line_from_product(product, _chosen_size(request, product), _chosen_extras(request, product))

    cart = Cart.for_request(request)
    cart.add(line)
    logger.info("cart add product=%s qty=%s", product.pk, cart.quantity_of(product.pk))
    messages.success(request, f"{product.name} added to cart.")

    return _back(request, locale)


@require_POST
@throttle(CART_UPDATE_RULE)
def cart_decrement(request, locale: str, product_id: int):
    cart = Cart.for_request(request)
    cart.decrement(product_id)
    return _back(request, locale)


@require_POST
@throttle(CART_UPDATE_RULE)
def cart_remove(request, locale: str, product_id: int):
    cart = Cart.for_request(request)
    cart.remove(product_id)
    messages.info(request, "Item removed.")
    return _back(request, locale)


@require_POST
@throttle(CART_CLEAR_RULE)
def cart_clear(request, locale: str):
    cart = Cart.for_request(request)
    cart.clear()
    messages.info(request, "Cart cleared.")
    return redirect("cart:detail", locale=locale)
