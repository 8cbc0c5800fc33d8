from __future__ import annotations

import datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Any

from django.test import SimpleTestCase

from calm_cashflow.apps.ledger import calculations
from calm_cashflow.apps.ledger.tuples import LedgerEntry, Summary


def entry(id: int, type: str, amount: Any, **fields: Any) -> LedgerEntry:
    return LedgerEntry(id=id, type=type, amount=Decimal(str(amount)), **fields)


def transfer(id: int, amount: Any, source: str = "wallet", **fields: Any) -> LedgerEntry:
    return entry(id, "expense", amount, payment_method="transfer", income_source=source, **fields)


def goal(**fields: Any) -> SimpleNamespace:
    values = {
        "linked_category_id": None,
        "linked_category_name": "",
        "auto_update": False,
        "current_amount": Decimal("0"),
        "target_amount": Decimal("1000"),
    }
    values.update(fields)
    return SimpleNamespace(**values)


class SourceBalanceTests(SimpleTestCase):
    def test_income_and_expense_move_their_own_account(self) -> None:
        entries = [
            entry(1, "income", 1000, income_source="wallet"),
            entry(2, "income", 5000, income_source="bank"),
            entry(3, "expense", 300, income_source="bank"),
            entry(4, "income", 200, income_source="digital_wallet"),
        ]

        balances = calculations.calculate_source_balances(entries)

        self.assertEqual(balances, {"wallet": Decimal("1000"), "bank": Decimal("4700"), "digital_wallet": Decimal("200")})

    def test_missing_source_defaults_to_wallet(self) -> None:
        balances = calculations.calculate_source_balances([entry(1, "income", 50), entry(2, "expense", 20)])
        self.assertEqual(balances["wallet"], Decimal("30"))

    def test_empty_ledger_has_zero_balances(self) -> None:
        balances = calculations.calculate_source_balances([])
        self.assertEqual(set(balances), {"wallet", "bank", "digital_wallet"})
        self.assertTrue(all(value == 0 for value in balances.values()))

    def test_transfer_moves_money_and_keeps_total(self) -> None:
        entries = [
            entry(1, "income", 1000, income_source="wallet"),
            transfer(2, 400, source="wallet", transfer_to_source="bank"),
        ]

        balances = calculations.calculate_source_balances(entries)

        self.assertEqual(balances["wallet"], Decimal("600"))
        self.assertEqual(balances["bank"], Decimal("400"))
        self.assertEqual(sum(balances.values()), Decimal("1000"))

    def test_transfer_destination_read_from_description(self) -> None:
        entries = [
            entry(1, "income", 1000, income_source="bank"),
            transfer(2, 250, source="bank", description="Transfer from Bank to Digital Wallet"),
        ]

        balances = calculations.calculate_source_balances(entries)

        self.assertEqual(balances["bank"], Decimal("750"))
        self.assertEqual(balances["digital_wallet"], Decimal("250"))
        self.assertEqual(balances["wallet"], Decimal("0"))

    def test_unresolved_transfer_is_only_debited(self) -> None:
        entries = [
            entry(1, "income", 1000, income_source="wallet"),
            transfer(2, 100, source="wallet", description="moved somewhere"),
        ]

        with self.assertLogs("calm_cashflow.apps.ledger.calculations", level="DEBUG") as logs:
            balances = calculations.calculate_source_balances(entries)

        self.assertIn("Transfer 2 has no recognisable destination", logs.output[0])
        self.assertEqual(balances["wallet"], Decimal("900"))
        self.assertEqual(sum(balances.values()), Decimal("900"))

    def test_unknown_account_is_ignored(self) -> None:
        entries = [
            entry(1, "income", 1000, income_source="wallet"),
            entry(2, "income", 500, income_source="vault"),
            entry(3, "expense", 200, income_source="vault"),
        ]

        balances = calculations.calculate_source_balances(entries)

        self.assertEqual(balances, {"wallet": Decimal("1000"), "bank": Decimal("0"), "digital_wallet": Decimal("0")})

    def test_wallet_to_bank_example(self) -> None:
        entries = [
            entry(1, "income", 1000, income_source="wallet"),
            entry(2, "expense", 300, payment_method="cash", income_source="wallet"),
            transfer(3, 200, source="wallet", description="Transfer from Wallet to Bank"),
        ]

        balances = calculations.calculate_source_balances(entries)
        summary = calculations.calculate_summary(entries)

        self.assertEqual(balances, {"wallet": Decimal("500"), "bank": Decimal("200"), "digital_wallet": Decimal("0")})
        self.assertEqual(summary, Summary(income=Decimal("1000"), expense=Decimal("300"), balance=Decimal("700")))


class TransferResolutionTests(SimpleTestCase):
    def test_is_transfer(self) -> None:
        self.assertTrue(calculations.is_transfer(transfer(1, 10)))
        self.assertFalse(calculations.is_transfer(entry(2, "expense", 10, payment_method="cash")))
        self.assertFalse(calculations.is_transfer(entry(3, "income", 10, payment_method="transfer")))

    def test_structured_destination_wins_over_description(self) -> None:
        moved = transfer(1, 10, transfer_to_source="bank", description="Transfer from Bank to Wallet")
        self.assertEqual(calculations.resolve_transfer_destination(moved), "bank")

    def test_phrases(self) -> None:
        cases = {
            "Transfer from Wallet to Bank": "bank",
            "Transfer from Bank to Wallet": "wallet",
            "Transfer from Wallet to Digital Wallet": "digital_wallet",
            "Wallet → Bank": "bank",
            "Bank → Digital Wallet": "digital_wallet",
            "rent (Transfer from Bank to Wallet)": "wallet",
        }
        for description, expected in cases.items():
            with self.subTest(description=description):
                resolved = calculations.resolve_transfer_destination(transfer(1, 10, description=description))
                self.assertEqual(resolved, expected)

    def test_unknown_destination(self) -> None:
        self.assertIsNone(calculations.resolve_transfer_destination(transfer(1, 10, description="")))
        self.assertIsNone(calculations.resolve_transfer_destination(transfer(1, 10, transfer_to_source="vault")))

    def test_first_phrase_in_priority_order_wins(self) -> None:
        moved = transfer(1, 10, description="to Bank first, then to Wallet")
        self.assertEqual(calculations.resolve_transfer_destination(moved), "wallet")

        moved = transfer(2, 10, description="Bank → Digital Wallet, later to Bank")
        self.assertEqual(calculations.resolve_transfer_destination(moved), "bank")


class SummaryTests(SimpleTestCase):
    def test_transfers_are_not_expenses(self) -> None:
        entries = [
            entry(1, "income", 1000),
            entry(2, "expense", 250),
            transfer(3, 500, transfer_to_source="bank"),
        ]

        summary = calculations.calculate_summary(entries)

        self.assertEqual(summary, Summary(income=Decimal("1000"), expense=Decimal("250"), balance=Decimal("750")))
        self.assertEqual(summary.expense_percentage, Decimal("25"))
        self.assertEqual(summary.balance_percentage, Decimal("75"))

    def test_percentages_without_income(self) -> None:
        summary = calculations.calculate_summary([entry(1, "expense", 100)])

        self.assertEqual(summary.balance, Decimal("-100"))
        self.assertEqual(summary.expense_percentage, 0)
        self.assertEqual(summary.balance_percentage, 0)


class GoalProgressTests(SimpleTestCase):
    def test_percentage_is_capped(self) -> None:
        self.assertEqual(calculations.progress_percentage(50, 200), Decimal("25"))
        self.assertEqual(calculations.progress_percentage(500, 200), Decimal("100"))
        self.assertEqual(calculations.progress_percentage(50, 0), 0)

    def test_remaining_never_negative(self) -> None:
        self.assertEqual(calculations.remaining_amount(300, 1000), Decimal("700"))
        self.assertEqual(calculations.remaining_amount(1300, 1000), 0)

    def test_linked_category_net_contribution(self) -> None:
        entries = [
            entry(1, "income", 500, category_id=10, category_name="Freelance"),
            entry(2, "expense", 100, category_id=10, category_name="Freelance"),
            entry(3, "income", 999, category_id=11, category_name="Gift"),
        ]
        savings = goal(linked_category_id=10, linked_category_name="Freelance", auto_update=True)

        progress = calculations.calculate_goal_progress(savings, entries)

        self.assertTrue(progress.should_auto_update)
        self.assertEqual(progress.auto_calculated_amount, Decimal("400"))
        self.assertEqual(progress.current_amount, Decimal("400"))
        self.assertEqual(progress.percentage, Decimal("40"))
        self.assertEqual(progress.remaining, Decimal("600"))
        self.assertTrue(progress.needs_update)

    def test_salary_goal_subtracts_every_expense(self) -> None:
        entries = [
            entry(1, "income", 1000, category_id=1, category_name="Salary"),
            entry(2, "expense", 300, category_id=2, category_name="Food"),
            entry(3, "income", 700, category_id=3, category_name="Gift"),
            transfer(4, 200, transfer_to_source="bank"),
        ]
        savings = goal(linked_category_id=1, linked_category_name="Monthly Salary", auto_update=True)

        self.assertEqual(calculations.calculate_auto_amount(savings, entries), Decimal("700"))

    def test_auto_amount_never_negative(self) -> None:
        entries = [
            entry(1, "income", 100, category_id=1),
            entry(2, "expense", 500, category_id=2),
        ]
        savings = goal(linked_category_id=1, linked_category_name="Salary", auto_update=True)

        self.assertEqual(calculations.calculate_auto_amount(savings, entries), 0)

    def test_manual_goal_uses_stored_amount(self) -> None:
        entries = [entry(1, "income", 500, category_id=10)]
        savings = goal(linked_category_id=10, auto_update=False, current_amount=Decimal("250"))

        progress = calculations.calculate_goal_progress(savings, entries)

        self.assertFalse(progress.should_auto_update)
        self.assertEqual(progress.auto_calculated_amount, 0)
        self.assertEqual(progress.current_amount, Decimal("250"))
        self.assertFalse(progress.needs_update)

    def test_auto_goal_in_sync_does_not_need_update(self) -> None:
        entries = [entry(1, "income", 500, category_id=10)]
        savings = goal(linked_category_id=10, auto_update=True, current_amount=Decimal("500"))

        self.assertFalse(calculations.calculate_goal_progress(savings, entries).needs_update)

    def test_summarize_goals(self) -> None:
        entries = [entry(1, "income", 300, category_id=10)]
        auto = goal(linked_category_id=10, auto_update=True, target_amount=Decimal("1000"))
        manual = goal(current_amount=Decimal("200"), target_amount=Decimal("1000"))

        overview = calculations.summarize_goals([auto, manual], entries)

        self.assertEqual([g for g, _ in overview["goals"]], [auto, manual])
        self.assertEqual(overview["goals_needing_update"], [auto])
        self.assertEqual(overview["total_auto_contributions"], Decimal("300"))
        self.assertEqual(overview["total_savings"], Decimal("200"))
        self.assertEqual(overview["total_target"], Decimal("2000"))
        self.assertEqual(overview["overall_percentage"], Decimal("10"))

    def test_progress_is_deterministic(self) -> None:
        entries = [
            entry(1, "income", 1000, category_id=1, category_name="Salary"),
            entry(2, "expense", 300, category_id=2, category_name="Food"),
        ]
        savings = goal(linked_category_id=1, linked_category_name="Salary", auto_update=True)

        first = calculations.calculate_goal_progress(savings, entries)
        second = calculations.calculate_goal_progress(savings, entries)

        self.assertEqual(first, second)
        self.assertEqual(
            calculations.calculate_auto_amount(savings, entries), calculations.calculate_auto_amount(savings, entries)
        )
        self.assertEqual(first.auto_calculated_amount, Decimal("700"))


class FilterAndGroupTests(SimpleTestCase):
    def setUp(self) -> None:
        self.salary = entry(1, "income", 1000, category_name="Salary", transaction_date=datetime.date(2024, 1, 5))
        self.food = entry(2, "expense", 50, category_name="Food", transaction_date=datetime.date(2024, 1, 5))
        self.moved = transfer(3, 100, transfer_to_source="bank", transaction_date=datetime.date(2024, 1, 4))
        self.entries = [self.salary, self.food, self.moved]

    def test_no_selection_keeps_everything(self) -> None:
        self.assertEqual(calculations.filter_entries(self.entries), self.entries)
        self.assertEqual(calculations.filter_entries(self.entries, types=["All"]), self.entries)

    def test_filter_by_category(self) -> None:
        self.assertEqual(calculations.filter_entries(self.entries, categories=["Food"]), [self.food])
        self.assertEqual(calculations.filter_entries(self.entries, categories=["Uncategorized"]), [self.moved])

    def test_filter_by_type(self) -> None:
        self.assertEqual(calculations.filter_entries(self.entries, types=["Income"]), [self.salary])
        self.assertEqual(calculations.filter_entries(self.entries, types=["Expense"]), [self.food])
        self.assertEqual(calculations.filter_entries(self.entries, types=["Transfer"]), [self.moved])
        self.assertEqual(
            calculations.filter_entries(self.entries, types=["Income", "Transfer"]), [self.salary, self.moved]
        )

    def test_filters_combine(self) -> None:
        filtered = calculations.filter_entries(self.entries, categories=["Salary", "Food"], types=["Expense"])
        self.assertEqual(filtered, [self.food])

    def test_group_by_date_keeps_order(self) -> None:
        groups = calculations.group_by_date(self.entries)

        self.assertEqual(list(groups), ["Jan 5, 2024", "Jan 4, 2024"])
        self.assertEqual(groups["Jan 5, 2024"], [self.salary, self.food])
        self.assertEqual(groups["Jan 4, 2024"], [self.moved])


class LedgerEntryTests(SimpleTestCase):
    def test_from_row_with_embedded_category(self) -> None:
        row = {
            "id": 7,
            "type": "expense",
            "amount": "12.50",
            "category_id": 3,
            "categories": {"id": 3, "name": "Food"},
            "transaction_date": "2024-02-01T00:00:00Z",
        }

        parsed = LedgerEntry.from_row(row)

        self.assertEqual(parsed.amount, Decimal("12.50"))
        self.assertEqual(parsed.category_name, "Food")
        self.assertEqual(parsed.transaction_date, datetime.date(2024, 2, 1))

    def test_unparseable_amount_is_zero(self) -> None:
        self.assertEqual(LedgerEntry.from_row({"id": 1, "type": "income", "amount": "abc"}).amount, 0)
        self.assertEqual(LedgerEntry.from_row({"id": 1, "type": "income", "amount": None}).amount, 0)
