"""Read-side projections over the transaction ledger.

Every function here is pure: it takes the full list of ledger entries and
recomputes its result from scratch. Transfers are recognised and resolved in
one place (``is_transfer`` / ``resolve_transfer_destination``) and every
projection goes through those two helpers.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.utils.formats import date_format

from calm_cashflow.core.constants import (
    TRANSFER_DESTINATION_PHRASES,
    TYPE_FILTER_ALL,
    TYPE_FILTER_EXPENSE,
    TYPE_FILTER_INCOME,
    TYPE_FILTER_TRANSFER,
    UNCATEGORIZED,
    IncomeSource,
    PaymentMethod,
    TransactionType,
)
from calm_cashflow.core.utils import to_decimal

from .tuples import GoalProgress, LedgerEntry, Summary

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def is_transfer(entry: LedgerEntry) -> bool:
    return entry.type == TransactionType.EXPENSE and entry.payment_method == PaymentMethod.TRANSFER


def resolve_transfer_destination(entry: LedgerEntry) -> Optional[str]:
    """Return the account a transfer credits, or None when it cannot be determined.

    The structured ``transfer_to_source`` wins; rows written before it existed
    carry the destination only as a phrase in the description.
    """
    if entry.transfer_to_source in IncomeSource.values:
        return entry.transfer_to_source

    description = entry.description or ""
    for phrase, source in TRANSFER_DESTINATION_PHRASES:
        if phrase in description:
            return source.value
    return None


def calculate_source_balances(entries: Iterable[LedgerEntry]) -> Dict[str, Decimal]:
    """Derive wallet, bank and digital wallet balances from the whole ledger"""
    balances = {source: ZERO for source in IncomeSource.values}

    for entry in entries:
        source = entry.income_source or IncomeSource.WALLET.value

        if entry.type == TransactionType.INCOME:
            if source in balances:
                balances[source] += entry.amount
            continue

        if entry.type != TransactionType.EXPENSE:
            continue

        if source in balances:
            balances[source] -= entry.amount

        if is_transfer(entry):
            destination = resolve_transfer_destination(entry)
            if destination is None:
                # Debited but never credited
                logger.debug("Transfer %s has no recognisable destination", entry.id)
                continue
            balances[destination] += entry.amount

    return balances


def calculate_summary(entries: Iterable[LedgerEntry]) -> Summary:
    """Lifetime income, expense (transfers excluded) and net balance"""
    income = ZERO
    expense = ZERO
    for entry in entries:
        if entry.type == TransactionType.INCOME:
            income += entry.amount
        elif entry.type == TransactionType.EXPENSE and not is_transfer(entry):
            expense += entry.amount
    return Summary(income=income, expense=expense, balance=income - expense)


def progress_percentage(current_amount: Any, target_amount: Any) -> Decimal:
    current = to_decimal(current_amount)
    target = to_decimal(target_amount)
    if target <= 0:
        return ZERO
    return min(current / target * HUNDRED, HUNDRED)


def remaining_amount(current_amount: Any, target_amount: Any) -> Decimal:
    return max(to_decimal(target_amount) - to_decimal(current_amount), ZERO)


def calculate_auto_amount(goal: Any, entries: Iterable[LedgerEntry]) -> Decimal:
    """Amount a linked category has contributed towards a goal, never negative"""
    linked_category_id = goal.linked_category_id
    linked_name = (getattr(goal, "linked_category_name", "") or "").lower()

    total = ZERO
    if "salary" in linked_name:
        # Salary left over after every expense, whatever its category
        for entry in entries:
            if entry.type == TransactionType.INCOME and entry.category_id == linked_category_id:
                total += entry.amount
            elif entry.type == TransactionType.EXPENSE and not is_transfer(entry):
                total -= entry.amount
    else:
        for entry in entries:
            if entry.category_id != linked_category_id:
                continue
            if entry.type == TransactionType.INCOME:
                total += entry.amount
            else:
                total -= entry.amount

    return max(total, ZERO)


def calculate_goal_progress(goal: Any, entries: Iterable[LedgerEntry]) -> GoalProgress:
    """Progress of a savings goal, derived from the ledger when auto update is on"""
    stored_amount = to_decimal(goal.current_amount)

    if goal.auto_update and goal.linked_category_id:
        auto_amount = calculate_auto_amount(goal, entries)
        should_auto_update = True
        current = auto_amount
    else:
        auto_amount = ZERO
        should_auto_update = False
        current = stored_amount

    return GoalProgress(
        auto_calculated_amount=auto_amount,
        should_auto_update=should_auto_update,
        current_amount=current,
        percentage=progress_percentage(current, goal.target_amount),
        remaining=remaining_amount(current, goal.target_amount),
        needs_update=should_auto_update and auto_amount != stored_amount,
    )


def summarize_goals(goals: Iterable[Any], entries: Iterable[LedgerEntry]) -> Dict[str, Any]:
    """Progress of every goal plus the totals shown on the goals panel"""
    entries = list(entries)
    progress = []
    total_savings = ZERO
    total_target = ZERO
    total_auto = ZERO

    for goal in goals:
        goal_progress = calculate_goal_progress(goal, entries)
        progress.append((goal, goal_progress))
        total_savings += to_decimal(goal.current_amount)
        total_target += to_decimal(goal.target_amount)
        total_auto += goal_progress.auto_calculated_amount

    return {
        "goals": progress,
        "goals_needing_update": [goal for goal, p in progress if p.needs_update],
        "total_auto_contributions": total_auto,
        "total_savings": total_savings,
        "total_target": total_target,
        "overall_percentage": progress_percentage(total_savings, total_target),
    }


def _matches_type(entry: LedgerEntry, label: str) -> bool:
    if label == TYPE_FILTER_ALL:
        return True
    if label == TYPE_FILTER_INCOME:
        return entry.type == TransactionType.INCOME
    if label == TYPE_FILTER_EXPENSE:
        return entry.type == TransactionType.EXPENSE and not is_transfer(entry)
    if label == TYPE_FILTER_TRANSFER:
        return is_transfer(entry)
    return False


def filter_entries(
    entries: Iterable[LedgerEntry],
    categories: Iterable[str] = (),
    types: Iterable[str] = (),
) -> List[LedgerEntry]:
    """Keep entries matching any selected category and any selected type label"""
    categories = set(categories)
    types = set(types)

    result = []
    for entry in entries:
        if categories and (entry.category_name or UNCATEGORIZED) not in categories:
            continue
        if types and TYPE_FILTER_ALL not in types and not any(_matches_type(entry, t) for t in types):
            continue
        result.append(entry)
    return result


def group_by_date(entries: Iterable[LedgerEntry]) -> Dict[str, List[LedgerEntry]]:
    """Bucket entries by formatted transaction date, in order of first appearance"""
    groups: Dict[str, List[LedgerEntry]] = {}
    for entry in entries:
        key = date_format(entry.transaction_date, "M j, Y") if entry.transaction_date else ""
        groups.setdefault(key, []).append(entry)
    return groups
