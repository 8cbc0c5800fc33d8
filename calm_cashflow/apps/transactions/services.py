from __future__ import annotations

import datetime
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from django.conf import settings
from django.db.models import QuerySet
from django.utils import timezone

from calm_cashflow.apps.categories.models import Category
from calm_cashflow.apps.ledger.store import LedgerState
from calm_cashflow.core.constants import AMOUNT_QUANTUM, IncomeSource, PaymentMethod, TransactionType

from .models import Transaction

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "description",
    "amount",
    "type",
    "category",
    "transaction_date",
    "currency",
    "payment_method",
    "income_source",
    "transfer_to_source",
)


def format_rupees(amount: Decimal) -> str:
    """Format an amount the way the UI shows balances, e.g. Rs 1,234.5"""
    text = f"{amount:,.2f}".rstrip("0").rstrip(".")
    return f"Rs {text}"


class TransactionService:
    """Create, edit and delete the transactions of one user"""

    def __init__(self, user: Any) -> None:
        self.user = user
        self._ledger: Optional[LedgerState] = None

    @property
    def ledger(self) -> LedgerState:
        if self._ledger is None:
            self._ledger = LedgerState.for_user(self.user)
        return self._ledger

    def list_transactions(self) -> QuerySet:
        return Transaction.objects.filter(user=self.user).select_related("category")

    def get(self, transaction_id: int) -> Transaction:
        return self.list_transactions().get(pk=transaction_id)

    def create(
        self,
        title: str,
        amount: Any,
        type: str,
        transaction_date: Optional[datetime.date] = None,
        description: str = "",
        category: Optional[Category] = None,
        currency: str = "",
        payment_method: str = "",
        income_source: str = "",
        transfer_to_source: str = "",
    ) -> Transaction:
        transaction = Transaction(
            user=self.user,
            title=self._clean_title(title),
            description=description or "",
            amount=self._clean_amount(amount),
            type=type,
            category=category,
            transaction_date=transaction_date or timezone.localdate(),
            currency=currency or settings.CALM_CASHFLOW_CURRENCY,
            payment_method=payment_method or PaymentMethod.CASH,
            income_source=income_source or IncomeSource.WALLET,
            transfer_to_source=transfer_to_source or "",
        )
        self._validate(transaction)
        transaction.save()
        logger.info("Created %s transaction %s for %s", transaction.type, transaction.pk, transaction.amount)

        if self._ledger is not None:
            self._ledger.apply_local_insert(transaction.to_entry())
        return transaction

    def update(self, transaction: Transaction, **changes: Any) -> Transaction:
        for field, value in changes.items():
            if field not in EDITABLE_FIELDS:
                raise ValueError(f"Field '{field}' cannot be changed.")
            setattr(transaction, field, value)

        transaction.title = self._clean_title(transaction.title)
        transaction.amount = self._clean_amount(transaction.amount)
        transaction.payment_method = transaction.payment_method or PaymentMethod.CASH
        transaction.income_source = transaction.income_source or IncomeSource.WALLET
        transaction.transfer_to_source = transaction.transfer_to_source or ""
        self._validate(transaction)
        transaction.save()
        logger.info("Updated transaction %s", transaction.pk)

        if self._ledger is not None:
            self._ledger.apply_local_update(transaction.to_entry())
        return transaction

    def delete(self, transaction: Transaction) -> None:
        transaction_id = transaction.pk
        transaction.delete()
        logger.info("Deleted transaction %s", transaction_id)

        if self._ledger is not None:
            self._ledger.apply_local_delete(transaction_id)

    def create_transfer(
        self,
        from_source: str,
        to_source: str,
        amount: Any,
        description: str = "",
        transfer_date: Optional[datetime.date] = None,
    ) -> Transaction:
        """Move money between two accounts, recorded as a single expense row"""
        for source in (from_source, to_source):
            if source not in IncomeSource.values:
                raise ValueError(f"Unknown account '{source}'.")
        if from_source == to_source:
            raise ValueError("Cannot transfer to the same account.")

        amount = self._clean_amount(amount)
        if amount <= 0:
            raise ValueError("Transfer amount must be greater than 0.")

        available = self.ledger.available_amount(from_source)
        if amount > available:
            raise ValueError(f"Insufficient funds in {from_source}. Available: {format_rupees(available)}")

        from_label = IncomeSource(from_source).label
        to_label = IncomeSource(to_source).label
        route = f"Transfer from {from_label} to {to_label}"
        note = (description or "").strip()

        return self.create(
            title=f"Transfer: {from_label} → {to_label}",
            description=f"{note} ({route})" if note else route,
            amount=amount,
            type=TransactionType.EXPENSE,
            transaction_date=transfer_date,
            payment_method=PaymentMethod.TRANSFER,
            income_source=from_source,
            transfer_to_source=to_source,
        )

    @staticmethod
    def _clean_title(title: str) -> str:
        title = (title or "").strip()
        if not title:
            raise ValueError("Title cannot be empty.")
        return title[0].upper() + title[1:]

    @staticmethod
    def _clean_amount(amount: Any) -> Decimal:
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            raise ValueError("Amount must be a number.")
        if not value.is_finite():
            raise ValueError("Amount must be a number.")
        if value < 0:
            raise ValueError("Amount cannot be negative.")
        return value.quantize(AMOUNT_QUANTUM)

    @staticmethod
    def _validate(transaction: Transaction) -> None:
        if transaction.type not in TransactionType.values:
            raise ValueError(f"Invalid transaction type '{transaction.type}'.")
        if transaction.payment_method not in PaymentMethod.values:
            raise ValueError(f"Invalid payment method '{transaction.payment_method}'.")
        if transaction.income_source not in IncomeSource.values:
            raise ValueError(f"Invalid account '{transaction.income_source}'.")
        if transaction.transfer_to_source and transaction.transfer_to_source not in IncomeSource.values:
            raise ValueError(f"Invalid account '{transaction.transfer_to_source}'.")
        if transaction.category is not None and not transaction.category.accepts(transaction.type):
            raise ValueError(
                f"Category '{transaction.category.name}' cannot be used for {transaction.type} transactions."
            )
