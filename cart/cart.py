# cart/cart.py
"""
Cart aggregator.

Two layers:

  * pure functions over an immutable snapshot (a list of CartLine); they never
    mutate their input and never touch the database or the session
  * Cart, a thin service that loads a snapshot from a CartStorage, applies the
    pure functions and writes the full snapshot back after every mutation

Session format (SessionCartStorage, key CART_SESSION_KEY):
  [
    {
      "product_id": 3,
      "name": "Margherita",
      "image": "/media/products/margherita.png",
      "base_price": "8.00",
      "quantity": 2,
      "size": {"name": "MEDIUM", "price": "2.00"},      # or null
      "extras": [{"name": "CHEESE", "price": "2.00"}]
    },
    ...
  ]
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from core.formatters import to_money

logger = logging.getLogger(__name__)

CART_SESSION_KEY = "cart_items_v1"
DELIVERY_FEE = Decimal("5.00")

ZERO = Decimal("0.00")


# ============================================================
# Types
# ============================================================
@dataclass(frozen=True)
class OptionChoice:
    """A chosen size or extra, captured at add time."""

    name: str
    price: Decimal = ZERO

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "price": str(to_money(self.price))}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "OptionChoice":
        return cls(name=str(raw["name"]), price=to_money(raw.get("price")))


@dataclass(frozen=True)
class CartLine:
    product_id: int
    name: str
    base_price: Decimal
    quantity: int = 1
    image: str = ""
    size: Optional[OptionChoice] = None
    extras: Tuple[OptionChoice, ...] = field(default_factory=tuple)

    @property
    def unit_price(self) -> Decimal:
        size_price = self.size.price if self.size else ZERO
        return self.base_price + size_price + sum((e.price for e in self.extras), ZERO)

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "image": self.image,
            "base_price": str(to_money(self.base_price)),
            "quantity": self.quantity,
            "size": self.size.to_dict() if self.size else None,
            "extras": [e.to_dict() for e in self.extras],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CartLine":
        size = raw.get("size")
        return cls(
            product_id=int(raw["product_id"]),
            name=str(raw.get("name") or ""),
            image=str(raw.get("image") or ""),
            base_price=to_money(raw.get("base_price")),
            quantity=int(raw["quantity"]),
            size=OptionChoice.from_dict(size) if size else None,
            extras=tuple(OptionChoice.from_dict(e) for e in (raw.get("extras") or [])),
        )


Snapshot = List[CartLine]


# ============================================================
# Pure operations
# ============================================================
def quantity_of(cart: Iterable[CartLine], product_id: int) -> int:
    for line in cart:
        if line.product_id == product_id:
            return line.quantity
    return 0


def total_quantity(cart: Iterable[CartLine]) -> int:
    return sum(line.quantity for line in cart)


def subtotal(cart: Iterable[CartLine]) -> Decimal:
    return sum((line.line_total for line in cart), ZERO)


def total(cart: Iterable[CartLine]) -> Decimal:
    return subtotal(cart) + DELIVERY_FEE


def add_line(cart: Iterable[CartLine], item: CartLine) -> Snapshot:
    """
    Add one unit of `item`.

    A line for the same product gets quantity + 1 and takes the new size and
    extras (last selection wins, earlier extras are dropped). Otherwise the item
    is appended with quantity 1.
    """
    result: Snapshot = []
    found = False
    for line in cart:
        if line.product_id == item.product_id and not found:
            result.append(replace(line, quantity=line.quantity + 1, size=item.size, extras=tuple(item.extras)))
            found = True
        else:
            result.append(line)

    if not found:
        result.append(replace(item, quantity=1, extras=tuple(item.extras)))
    return result


def decrement_line(cart: Iterable[CartLine], product_id: int) -> Snapshot:
    result: Snapshot = []
    for line in cart:
        if line.product_id != product_id:
            result.append(line)
        elif line.quantity > 1:
            result.append(replace(line, quantity=line.quantity - 1))
        # quantity 1 -> dropped
    return result


def remove_line(cart: Iterable[CartLine], product_id: int) -> Snapshot:
    return [line for line in cart if line.product_id != product_id]


def clear(cart: Iterable[CartLine]) -> Snapshot:
    return []


# ============================================================
# Serialization
# ============================================================
def dump_snapshot(cart: Iterable[CartLine]) -> List[Dict[str, Any]]:
    return [line.to_dict() for line in cart]


def load_snapshot(raw: Any) -> Snapshot:
    """Anything that is not a well-formed list of lines loads as an empty cart."""
    if not isinstance(raw, list):
        return []
    try:
        lines = [CartLine.from_dict(item) for item in raw]
    except (KeyError, TypeError, ValueError, AttributeError):
        logger.warning("discarding malformed cart payload")
        return []
    return [line for line in lines if line.quantity >= 1]


# ============================================================
# Storage
# ============================================================
class CartStorage(Protocol):
    def load(self) -> List[Dict[str, Any]]: ...

    def save(self, data: List[Dict[str, Any]]) -> None: ...


class SessionCartStorage:
    def __init__(self, session, key: str = CART_SESSION_KEY):
        self.session = session
        self.key = key

    def load(self) -> Any:
        return self.session.get(self.key, [])

    def save(self, data: List[Dict[str, Any]]) -> None:
        self.session[self.key] = data
        self.session.modified = True


class MemoryCartStorage:
    def __init__(self, data: Optional[List[Dict[str, Any]]] = None):
        self.data: List[Dict[str, Any]] = list(data or [])
        self.saves = 0

    def load(self) -> List[Dict[str, Any]]:
        return list(self.data)

    def save(self, data: List[Dict[str, Any]]) -> None:
        self.data = list(data)
        self.saves += 1


# ============================================================
# Service
# ============================================================
class Cart:
    """
    Cart bound to a storage backend.

    The snapshot is loaded once; each mutation replaces it with the result of
    the matching pure function and persists the whole thing.
    """

    def __init__(self, storage: CartStorage):
        self.storage = storage
        self._lines: Snapshot = load_snapshot(storage.load())

    @classmethod
    def for_request(cls, request) -> "Cart":
        return cls(SessionCartStorage(request.session))

    def _commit(self, lines: Snapshot) -> None:
        self._lines = lines
        self.storage.save(dump_snapshot(lines))

    # ---- reads ----
    def lines(self) -> Snapshot:
        return list(self._lines)

    def quantity_of(self, product_id: int) -> int:
        return quantity_of(self._lines, product_id)

    def total_quantity(self) -> int:
        return total_quantity(self._lines)

    def subtotal(self) -> Decimal:
        return subtotal(self._lines)

    def delivery_fee(self) -> Decimal:
        return DELIVERY_FEE

    def total(self) -> Decimal:
        return total(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def __iter__(self):
        return iter(self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    # ---- writes ----
    def add(self, item: CartLine) -> None:
        self._commit(add_line(self._lines, item))

    def decrement(self, product_id: int) -> None:
        self._commit(decrement_line(self._lines, product_id))

    def remove(self, product_id: int) -> None:
        self._commit(remove_line(self._lines, product_id))

    def clear(self) -> None:
        self._commit(clear(self._lines))
