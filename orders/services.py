# orders/services.py

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.db import transaction

from cart.cart import Cart
from catalog.models import Product

from .models import Order, OrderItem

logger = logging.getLogger(__name__)


class EmptyCartError(ValueError):
    """Checkout was attempted with nothing in the cart."""


class MissingEmailError(ValueError):
    """Neither the checkout form nor the account supplied an email address."""


@dataclass(frozen=True)
class DeliveryDetails:
    phone: str = ""
    street_address: str = ""
    postal_code: str = ""
    city: str = ""
    country: str = ""


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@transaction.atomic
def create_order_from_cart(
    cart: Cart,
    *,
    user,
    email: str,
    delivery: DeliveryDetails,
) -> Order:
    """
    Create an Order + OrderItems from the cart, then empty the cart.

    Rules:
      - totals come from the cart aggregator (subtotal, flat delivery fee, total)
      - every line is snapshotted (name, size, extras, prices) onto its OrderItem
      - products deleted since they were added are kept as name-only lines
      - an empty cart raises EmptyCartError and writes nothing
    """
    lines = cart.lines()
    if not lines:
        raise EmptyCartError("Cannot check out an empty cart.")

    user_obj = user if getattr(user, "is_authenticated", False) else None
    email = normalize_email(email) or normalize_email(getattr(user_obj, "email", ""))
    if not email:
        raise MissingEmailError("Checkout requires an email address.")

    order = Order.objects.create(
        user=user_obj,
        user_email=email,
        phone=delivery.phone,
        street_address=delivery.street_address,
        postal_code=delivery.postal_code,
        city=delivery.city,
        country=delivery.country,
        sub_total=cart.subtotal(),
        delivery_fee=cart.delivery_fee(),
        total_price=cart.total(),
    )

    existing = set(Product.objects.filter(pk__in=[line.product_id for line in lines]).values_list("pk", flat=True))

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product_id=line.product_id if line.product_id in existing else None,
                name=line.name,
                size_name=line.size.name if line.size else "",
                extras=[e.to_dict() for e in line.extras],
                unit_price=line.unit_price,
                quantity=line.quantity,
                line_total=line.line_total,
            )
            for line in lines
        ]
    )

    cart.clear()
    logger.info("order created order=%s user=%s total=%s", order.pk, getattr(user_obj, "pk", None), order.total_price)
    return order
