from __future__ import annotations

from decimal import Decimal

from django.db.models import TextChoices


class TransactionType(TextChoices):
    INCOME = "income", "Income"
    EXPENSE = "expense", "Expense"


class PaymentMethod(TextChoices):
    CASH = "cash", "Cash"
    CREDIT = "credit", "Credit"
    TRANSFER = "transfer", "Transfer"


class IncomeSource(TextChoices):
    WALLET = "wallet", "Wallet"
    BANK = "bank", "Bank"
    DIGITAL_WALLET = "digital_wallet", "Digital Wallet"


class CategoryType(TextChoices):
    INCOME = "income", "Income"
    EXPENSE = "expense", "Expense"
    BOTH = "both", "Both"


class GoalPriority(TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"


class ChangeType(TextChoices):
    INSERT = "INSERT", "Insert"
    UPDATE = "UPDATE", "Update"
    DELETE = "DELETE", "Delete"


# Checked in order, first match wins
TRANSFER_DESTINATION_PHRASES = [
    ("to Wallet", IncomeSource.WALLET),
    ("to Bank", IncomeSource.BANK),
    ("to Digital Wallet", IncomeSource.DIGITAL_WALLET),
    ("→ Wallet", IncomeSource.WALLET),
    ("→ Bank", IncomeSource.BANK),
    ("→ Digital Wallet", IncomeSource.DIGITAL_WALLET),
]

TYPE_FILTER_ALL = "All"
TYPE_FILTER_INCOME = "Income"
TYPE_FILTER_EXPENSE = "Expense"
TYPE_FILTER_TRANSFER = "Transfer"

TYPE_FILTER_LABELS = [
    TYPE_FILTER_ALL,
    TYPE_FILTER_INCOME,
    TYPE_FILTER_EXPENSE,
    TYPE_FILTER_TRANSFER,
]

UNCATEGORIZED = "Uncategorized"

DEFAULT_CURRENCY = "PKR"
DEFAULT_CATEGORY_ICON = "more_horiz"
DEFAULT_CATEGORY_COLOR = "#6B7280"
DEFAULT_GOAL_CATEGORY = "savings"

# Amounts are stored with two decimal places
AMOUNT_QUANTUM = Decimal("0.01")

# Table names used by the change feed
TRANSACTIONS_TABLE = "transactions"
CATEGORIES_TABLE = "categories"
GOALS_TABLE = "financial_goals"
