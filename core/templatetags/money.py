from __future__ import annotations

from django import template

from core.formatters import format_currency

register = template.Library()


@register.filter(name="currency")
def currency(value) -> str:
    """
    Decimal("12.5") -> "$12.50"
    """
    return format_currency(value)
