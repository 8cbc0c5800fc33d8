from __future__ import annotations

from decimal import Decimal
from typing import Any

from django import template

from calm_cashflow.core.utils import to_decimal

register = template.Library()


@register.filter(name="intcomma")
def intcomma(value: Any) -> str:
    """Format number with comma thousands separator and no decimals (e.g., 1,234,567)."""
    number = to_decimal(value)
    sign = "-" if number < 0 else ""
    return f"{sign}{abs(number):,.0f}"


@register.filter(name="rupees")
def rupees(value: Any) -> str:
    """Format number as Pakistani Rupee string: Rs 1,234,567.

    Example: {{ 1234567|rupees }} -> "Rs 1,234,567"
    """
    return f"Rs {intcomma(value)}"


@register.filter(name="percent")
def percent(value: Any) -> str:
    """Format a percentage with one decimal place: 40.0%"""
    return f"{to_decimal(value).quantize(Decimal('0.1'))}%"
