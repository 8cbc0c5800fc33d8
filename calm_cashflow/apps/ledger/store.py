from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

from calm_cashflow.apps.changes.signals import RowChange, row_changed
from calm_cashflow.core.constants import TRANSACTIONS_TABLE, ChangeType

from . import calculations
from .tuples import GoalProgress, LedgerEntry, Summary

logger = logging.getLogger(__name__)


class LedgerState:
    """In-memory transaction list of one user plus the views derived from it.

    Writes are merged in two phases. After a successful write the caller
    applies it locally right away (``apply_local_*``). When the authoritative
    change event arrives later it is reconciled by id (``apply_change``):
    an INSERT for a row already present is ignored, an UPDATE replaces the row
    with the same id, a DELETE removes it. Derived views are cached and
    dropped on every mutation.
    """

    def __init__(self, entries: Iterable[LedgerEntry] = (), user_id: Any = None) -> None:
        self.user_id = user_id
        self._entries: List[LedgerEntry] = list(entries)
        self._cache: Dict[str, Any] = {}
        self._subscribed = False

    @classmethod
    def for_user(cls, user: Any, subscribe: bool = True) -> "LedgerState":
        """Load the user's transactions, newest first, and follow the change feed"""
        from calm_cashflow.apps.transactions.models import Transaction

        transactions = Transaction.objects.filter(user=user).select_related("category")
        state = cls((t.to_entry() for t in transactions), user_id=user.pk)
        if subscribe:
            state.subscribe()
        return state

    @property
    def entries(self) -> Tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, entry_id: Any) -> Optional[LedgerEntry]:
        index = self._index(entry_id)
        return self._entries[index] if index is not None else None

    def _index(self, entry_id: Any) -> Optional[int]:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        return None

    def _invalidate(self) -> None:
        self._cache.clear()

    def load(self, entries: Iterable[LedgerEntry]) -> None:
        self._entries = list(entries)
        self._invalidate()

    # Local tentative apply

    def apply_local_insert(self, entry: LedgerEntry) -> None:
        index = self._index(entry.id)
        if index is None:
            self._entries.insert(0, entry)
        else:
            self._entries[index] = entry
        self._invalidate()

    def apply_local_update(self, entry: LedgerEntry) -> None:
        index = self._index(entry.id)
        if index is None:
            return
        self._entries[index] = entry
        self._invalidate()

    def apply_local_delete(self, entry_id: Any) -> None:
        index = self._index(entry_id)
        if index is None:
            return
        del self._entries[index]
        self._invalidate()

    # Reconcile authoritative events

    def apply_change(self, change: RowChange) -> bool:
        """Merge a change event, returning whether the list changed"""
        if change.event == ChangeType.INSERT:
            entry = LedgerEntry.from_row(change.new)
            if self._index(entry.id) is not None:
                return False
            self._entries.insert(0, entry)
        elif change.event == ChangeType.UPDATE:
            entry = LedgerEntry.from_row(change.new)
            index = self._index(entry.id)
            if index is None:
                return False
            self._entries[index] = entry
        elif change.event == ChangeType.DELETE:
            index = self._index((change.old or {}).get("id"))
            if index is None:
                return False
            del self._entries[index]
        else:
            return False

        self._invalidate()
        return True

    def subscribe(self) -> None:
        if not self._subscribed:
            row_changed.connect(self._on_row_changed, weak=True)
            self._subscribed = True

    def unsubscribe(self) -> None:
        if self._subscribed:
            row_changed.disconnect(self._on_row_changed)
            self._subscribed = False

    def _on_row_changed(self, sender: Any, change: RowChange, **kwargs: Any) -> None:
        if change.table != TRANSACTIONS_TABLE:
            return
        row = change.new or change.old or {}
        if self.user_id is not None and row.get("user_id") != self.user_id:
            return
        if self.apply_change(change):
            logger.debug("Ledger merged %s for transaction %s", change.event, row.get("id"))

    # Derived views

    @property
    def balances(self) -> Dict[str, Decimal]:
        if "balances" not in self._cache:
            self._cache["balances"] = calculations.calculate_source_balances(self._entries)
        return dict(self._cache["balances"])

    @property
    def summary(self) -> Summary:
        if "summary" not in self._cache:
            self._cache["summary"] = calculations.calculate_summary(self._entries)
        return self._cache["summary"]

    def available_amount(self, source: str) -> Decimal:
        return self.balances.get(source, Decimal("0"))

    def has_enough_funds(self, source: str, amount: Decimal) -> bool:
        return self.available_amount(source) >= amount

    def goal_progress(self, goal: Any) -> GoalProgress:
        return calculations.calculate_goal_progress(goal, self._entries)

    def filtered_groups(
        self, categories: Iterable[str] = (), types: Iterable[str] = ()
    ) -> Dict[str, List[LedgerEntry]]:
        return calculations.group_by_date(calculations.filter_entries(self._entries, categories, types))
