# core/formatters.py
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

CURRENCY_SYMBOL = "$"


def to_money(value: Any) -> Decimal:
    """
    Coerce a price-ish value (Decimal, int, float, "12.5") into a 2dp Decimal.
    Unparsable input becomes 0.00.
    """
    if value is None:
        return Decimal("0.00")
    if isinstance(value, Decimal):
        d = value
    else:
        try:
            d = Decimal(str(value).strip() or "0")
        except (InvalidOperation, ValueError):
            return Decimal("0.00")
    if d.is_nan() or d.is_infinite():
        return Decimal("0.00")
    return d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_currency(value: Any) -> str:
    """
    12.5 -> "$12.50", 1234 -> "$1,234.00" (en-US style, USD).
    """
    amount = to_money(value)
    sign = "-" if amount < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(amount):,.2f}"
