from __future__ import annotations

import datetime
from decimal import Decimal
from unittest.mock import MagicMock, patch

from django.contrib.auth.models import User
from django.test import SimpleTestCase, TestCase, override_settings

from calm_cashflow.apps.categories.services import CategoryService
from calm_cashflow.apps.ledger.store import LedgerState
from calm_cashflow.apps.transactions.models import Transaction
from calm_cashflow.apps.transactions.services import TransactionService, format_rupees


class FormatRupeesTests(SimpleTestCase):
    def test_format(self) -> None:
        self.assertEqual(format_rupees(Decimal("0")), "Rs 0")
        self.assertEqual(format_rupees(Decimal("1000")), "Rs 1,000")
        self.assertEqual(format_rupees(Decimal("1234.50")), "Rs 1,234.5")


class TransactionServiceTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(username="tester", password="pass")
        self.service = TransactionService(self.user)
        self.food = CategoryService().create(name="Food", type="expense")
        self.salary = CategoryService().create(name="Salary", type="income")

    def test_create_applies_defaults(self) -> None:
        transaction = self.service.create(title="  lunch ", amount="250", type="expense", category=self.food)

        self.assertEqual(transaction.title, "Lunch")
        self.assertEqual(transaction.amount, Decimal("250"))
        self.assertEqual(transaction.payment_method, "cash")
        self.assertEqual(transaction.income_source, "wallet")
        self.assertEqual(transaction.currency, "PKR")
        self.assertEqual(transaction.transfer_to_source, "")
        self.assertIsNotNone(transaction.transaction_date)
        self.assertEqual(transaction.category_name, "Food")

    @override_settings(CALM_CASHFLOW_CURRENCY="USD")
    def test_currency_follows_settings(self) -> None:
        transaction = self.service.create(title="coffee", amount="3", type="expense")
        self.assertEqual(transaction.currency, "USD")

    def test_rejects_invalid_input(self) -> None:
        bad_inputs = [
            {"title": "", "amount": "10", "type": "expense"},
            {"title": "x", "amount": "-1", "type": "expense"},
            {"title": "x", "amount": "ten", "type": "expense"},
            {"title": "x", "amount": "10", "type": "refund"},
            {"title": "x", "amount": "10", "type": "expense", "income_source": "vault"},
            {"title": "x", "amount": "10", "type": "expense", "payment_method": "cheque"},
        ]
        for kwargs in bad_inputs:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    self.service.create(**kwargs)
        self.assertFalse(Transaction.objects.exists())

    def test_category_must_accept_type(self) -> None:
        with self.assertRaisesMessage(ValueError, "Category 'Salary' cannot be used for expense transactions."):
            self.service.create(title="x", amount="10", type="expense", category=self.salary)

        gift = CategoryService().create(name="Gift", type="both")
        self.service.create(title="x", amount="10", type="expense", category=gift)
        self.service.create(title="y", amount="10", type="income", category=gift)

    def test_update(self) -> None:
        transaction = self.service.create(title="lunch", amount="250", type="expense")

        self.service.update(transaction, amount=Decimal("300"), category=self.food, title="dinner")

        transaction.refresh_from_db()
        self.assertEqual(transaction.amount, Decimal("300"))
        self.assertEqual(transaction.title, "Dinner")
        self.assertEqual(transaction.category, self.food)

    def test_update_rejects_unknown_field(self) -> None:
        transaction = self.service.create(title="lunch", amount="250", type="expense")
        with self.assertRaises(ValueError):
            self.service.update(transaction, user=self.user)

    @patch("calm_cashflow.apps.transactions.services.LedgerState.for_user")
    def test_plain_writes_do_not_load_ledger(self, for_user: MagicMock) -> None:
        transaction = self.service.create(title="lunch", amount="250", type="expense")
        self.service.update(transaction, amount=Decimal("200"))
        self.service.delete(transaction)

        for_user.assert_not_called()

    def test_loaded_ledger_follows_service_writes(self) -> None:
        self.assertEqual(len(self.service.ledger), 0)

        transaction = self.service.create(title="salary", amount="1000", type="income")
        self.assertEqual(self.service.ledger.balances["wallet"], Decimal("1000"))

        self.service.delete(transaction)
        self.assertEqual(len(self.service.ledger), 0)
        self.assertFalse(Transaction.objects.exists())

    def test_amount_rounded_to_cents(self) -> None:
        self.assertEqual(len(self.service.ledger), 0)

        transaction = self.service.create(title="snack", amount="1.005", type="income")
        transfer = self.service.create_transfer("wallet", "bank", "0.499")

        for saved in (transaction, transfer):
            stored = Transaction.objects.get(pk=saved.pk).amount
            self.assertEqual(saved.amount, stored)
            self.assertEqual(self.service.ledger.get(saved.pk).amount, stored)
        self.assertEqual(self.service.ledger.balances, LedgerState.for_user(self.user, subscribe=False).balances)


class TransferTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(username="tester", password="pass")
        self.service = TransactionService(self.user)
        self.service.create(title="salary", amount="1000", type="income", income_source="wallet")

    def test_transfer_is_one_expense_row(self) -> None:
        transaction = self.service.create_transfer("wallet", "bank", "400", transfer_date=datetime.date(2024, 3, 1))

        self.assertEqual(transaction.title, "Transfer: Wallet → Bank")
        self.assertEqual(transaction.description, "Transfer from Wallet to Bank")
        self.assertEqual(transaction.type, "expense")
        self.assertEqual(transaction.payment_method, "transfer")
        self.assertEqual(transaction.income_source, "wallet")
        self.assertEqual(transaction.transfer_to_source, "bank")
        self.assertEqual(transaction.transaction_date, datetime.date(2024, 3, 1))
        self.assertEqual(Transaction.objects.count(), 2)

        balances = self.service.ledger.balances
        self.assertEqual(balances["wallet"], Decimal("600"))
        self.assertEqual(balances["bank"], Decimal("400"))

    def test_transfer_keeps_note(self) -> None:
        transaction = self.service.create_transfer("wallet", "digital_wallet", "100", description=" top up ")
        self.assertEqual(transaction.description, "top up (Transfer from Wallet to Digital Wallet)")

    def test_transfer_does_not_change_summary(self) -> None:
        before = self.service.ledger.summary
        self.service.create_transfer("wallet", "bank", "400")
        self.assertEqual(self.service.ledger.summary, before)

    def test_insufficient_funds(self) -> None:
        with self.assertRaisesMessage(ValueError, "Insufficient funds in wallet. Available: Rs 1,000"):
            self.service.create_transfer("wallet", "bank", "1000.01")
        with self.assertRaisesMessage(ValueError, "Insufficient funds in bank. Available: Rs 0"):
            self.service.create_transfer("bank", "wallet", "1")
        self.assertEqual(Transaction.objects.count(), 1)

    def test_whole_balance_can_be_moved(self) -> None:
        self.service.create_transfer("wallet", "bank", "1000")
        self.assertEqual(self.service.ledger.available_amount("wallet"), 0)

    def test_rejects_bad_transfers(self) -> None:
        for args in [("wallet", "wallet", "10"), ("wallet", "bank", "0"), ("wallet", "vault", "10")]:
            with self.subTest(args=args):
                with self.assertRaises(ValueError):
                    self.service.create_transfer(*args)
        self.assertEqual(Transaction.objects.count(), 1)
