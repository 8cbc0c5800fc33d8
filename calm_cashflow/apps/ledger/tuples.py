from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any, Mapping, NamedTuple, Optional

from django.utils.dateparse import parse_date

from calm_cashflow.core.utils import to_decimal


class LedgerEntry(NamedTuple):
    id: Any
    type: str
    amount: Decimal
    payment_method: str = ""
    income_source: str = ""
    category_id: Any = None
    category_name: str = ""
    description: str = ""
    title: str = ""
    transfer_to_source: str = ""
    transaction_date: Optional[datetime.date] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "LedgerEntry":
        """Build an entry from a transaction row (model payload, change event or API body)"""
        category = row.get("categories") or {}
        transaction_date = row.get("transaction_date")
        if isinstance(transaction_date, datetime.datetime):
            transaction_date = transaction_date.date()
        elif isinstance(transaction_date, str):
            transaction_date = parse_date(transaction_date[:10])

        return cls(
            id=row.get("id"),
            type=row.get("type") or "",
            amount=to_decimal(row.get("amount")),
            payment_method=row.get("payment_method") or "",
            income_source=row.get("income_source") or "",
            category_id=row.get("category_id"),
            category_name=row.get("category_name") or category.get("name") or "",
            description=row.get("description") or "",
            title=row.get("title") or "",
            transfer_to_source=row.get("transfer_to_source") or "",
            transaction_date=transaction_date,
        )


class Summary(NamedTuple):
    income: Decimal
    expense: Decimal
    balance: Decimal

    @property
    def expense_percentage(self) -> Decimal:
        if self.income <= 0:
            return Decimal("0")
        return self.expense / self.income * 100

    @property
    def balance_percentage(self) -> Decimal:
        if self.income <= 0:
            return Decimal("0")
        return self.balance / self.income * 100


class GoalProgress(NamedTuple):
    auto_calculated_amount: Decimal
    should_auto_update: bool
    current_amount: Decimal
    percentage: Decimal
    remaining: Decimal
    needs_update: bool
