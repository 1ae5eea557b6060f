from __future__ import annotations

from .cart import Cart


def cart_summary(request):
    session = getattr(request, "session", None)
    if session is None:
        return {"cart_item_count": 0}
    return {"cart_item_count": Cart.for_request(request).total_quantity()}
