from __future__ import annotations

from typing import Any, Dict

from django.contrib.auth.models import User
from django.db import models
from django.utils import timezone

from calm_cashflow.apps.ledger.tuples import LedgerEntry
from calm_cashflow.core.constants import (
    DEFAULT_CURRENCY,
    IncomeSource,
    PaymentMethod,
    TransactionType,
)


class Transaction(models.Model):
    """A single income or expense record; a transfer is one expense with payment method transfer"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="transactions")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    type = models.CharField(max_length=10, choices=TransactionType.choices)
    category = models.ForeignKey(
        "categories.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )
    transaction_date = models.DateField(default=timezone.localdate)
    currency = models.CharField(max_length=3, default=DEFAULT_CURRENCY)
    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices, default=PaymentMethod.CASH)
    income_source = models.CharField(
        max_length=20,
        choices=IncomeSource.choices,
        default=IncomeSource.WALLET,
        help_text="Where income landed, or where an expense or transfer was drawn from",
    )
    transfer_to_source = models.CharField(
        max_length=20,
        choices=IncomeSource.choices,
        blank=True,
        help_text="Destination account of a transfer",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "transactions"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.type} - {self.title} - {self.amount}"

    @property
    def is_transfer(self) -> bool:
        return self.type == TransactionType.EXPENSE and self.payment_method == PaymentMethod.TRANSFER

    @property
    def category_name(self) -> str:
        return self.category.name if self.category else ""

    def as_row(self) -> Dict[str, Any]:
        """Row payload as delivered by the change feed, with the category name embedded"""
        return {
            "id": self.pk,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "amount": self.amount,
            "type": self.type,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "transaction_date": self.transaction_date,
            "currency": self.currency,
            "payment_method": self.payment_method,
            "income_source": self.income_source,
            "transfer_to_source": self.transfer_to_source,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    def to_entry(self) -> LedgerEntry:
        return LedgerEntry.from_row(self.as_row())
