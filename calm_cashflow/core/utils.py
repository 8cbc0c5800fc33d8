from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from django.contrib.auth.models import User
from django.http import HttpRequest


class TypedHttpRequest(HttpRequest):
    user: User


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored or posted amount to Decimal, 0 when unparseable"""
    try:
        if isinstance(value, Decimal):
            return value
        if value is None or value == "":
            return Decimal("0")
        number = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")
    return number if number.is_finite() else Decimal("0")
