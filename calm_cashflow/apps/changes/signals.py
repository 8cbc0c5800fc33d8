from __future__ import annotations

from typing import Any, Dict, NamedTuple, Optional

from django.dispatch import Signal


class RowChange(NamedTuple):
    table: str
    event: str  # INSERT | UPDATE | DELETE
    new: Optional[Dict[str, Any]] = None
    old: Optional[Dict[str, Any]] = None


# Sent with ``change=RowChange(...)`` after a tracked row is written or deleted
row_changed = Signal()
