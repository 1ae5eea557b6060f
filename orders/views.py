# orders/views.py

from __future__ import annotations

import logging

from django.contrib import messages
from django.db import DatabaseError
from django.http import Http404
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_POST

from cart.cart import Cart
from core.throttle import ThrottleRule, throttle

from .forms import CheckoutForm
from .models import Order
from .services import EmptyCartError, MissingEmailError, create_order_from_cart

logger = logging.getLogger(__name__)

CHECKOUT_PLACE_RULE = ThrottleRule(key_prefix="checkout_place_order", limit=6, window_seconds=60)

# Guests can only see the order they just placed.
LAST_ORDER_SESSION_KEY = "last_order_id"


def _render_checkout(request, cart: Cart, form: CheckoutForm):
    return render(
        request,
        "orders/checkout.html",
        {
            "form": form,
            "cart_lines": cart.lines(),
            "subtotal": cart.subtotal(),
            "delivery_fee": cart.delivery_fee(),
            "total": cart.total(),
        },
    )


def checkout(request, locale: str):
    cart = Cart.for_request(request)
    if cart.is_empty():
        messages.info(request, "Your cart is empty.")
        return redirect("cart:detail", locale=locale)

    if request.method == "POST":
        return _checkout_post(request, locale)

    form = CheckoutForm(user=request.user, initial=CheckoutForm.initial_from_profile(request.user))
    return _render_checkout(request, cart, form)


@require_POST
@throttle(CHECKOUT_PLACE_RULE)
def _checkout_post(request, locale: str):
    cart = Cart.for_request(request)
    form = CheckoutForm(request.POST, user=request.user)
    if not form.is_valid():
        messages.error(request, "Please correct the delivery details.")
        return _render_checkout(request, cart, form)

    try:
        order = create_order_from_cart(
            cart,
            user=request.user,
            email=form.order_email(),
            delivery=form.delivery(),
        )
    except EmptyCartError:
        messages.info(request, "Your cart is empty.")
        return redirect("cart:detail", locale=locale)
    except MissingEmailError:
        form.add_error("email" if "email" in form.fields else None, "Please enter an email address for this order.")
        return _render_checkout(request, cart, form)
    except DatabaseError:
        logger.exception("checkout failed")
        messages.error(request, "We couldn't place your order. Please try again.")
        return _render_checkout(request, cart, form)

    request.session[LAST_ORDER_SESSION_KEY] = order.pk
    messages.success(request, "Order placed. Thank you!")
    return redirect("orders:detail", locale=locale, pk=order.pk)


def order_detail(request, locale: str, pk: int):
    order = get_object_or_404(Order.objects.prefetch_related("items"), pk=pk)

    is_owner = request.user.is_authenticated and order.user_id == request.user.pk
    is_last_guest_order = request.session.get(LAST_ORDER_SESSION_KEY) == order.pk
    if not (is_owner or is_last_guest_order):
        raise Http404("Order not found.")

    return render(request, "orders/order_detail.html", {"order": order})
