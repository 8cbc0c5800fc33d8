from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from django.db.models import QuerySet

from calm_cashflow.apps.ledger import calculations
from calm_cashflow.apps.ledger.store import LedgerState
from calm_cashflow.apps.ledger.tuples import GoalProgress
from calm_cashflow.core.constants import AMOUNT_QUANTUM, CategoryType, GoalPriority

from .models import FinancialGoal

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title",
    "description",
    "target_amount",
    "current_amount",
    "target_date",
    "category",
    "priority",
    "linked_category",
    "auto_update",
)


class GoalService:
    """Savings goals of one user and their progress"""

    def __init__(self, user: Any, ledger: Optional[LedgerState] = None) -> None:
        self.user = user
        self._ledger = ledger

    @property
    def ledger(self) -> LedgerState:
        if self._ledger is None:
            self._ledger = LedgerState.for_user(self.user)
        return self._ledger

    def list_goals(self) -> QuerySet:
        return FinancialGoal.objects.filter(user=self.user).select_related("linked_category")

    def get(self, goal_id: int) -> FinancialGoal:
        return self.list_goals().get(pk=goal_id)

    def create(self, title: str, target_amount: Any = 0, **fields: Any) -> FinancialGoal:
        goal = FinancialGoal(user=self.user)
        self._apply(goal, dict(fields, title=title, target_amount=target_amount))
        goal.save()
        logger.info("Created goal %s targeting %s", goal.pk, goal.target_amount)
        return goal

    def update(self, goal: FinancialGoal, **changes: Any) -> FinancialGoal:
        self._apply(goal, changes)
        goal.save()
        logger.info("Updated goal %s", goal.pk)
        return goal

    def delete(self, goal: FinancialGoal) -> None:
        goal_id = goal.pk
        goal.delete()
        logger.info("Deleted goal %s", goal_id)

    def progress(self, goal: FinancialGoal) -> GoalProgress:
        return self.ledger.goal_progress(goal)

    def suggested_progress(self, goal: FinancialGoal) -> Decimal:
        """Amount to pre-fill when the user updates a goal's progress by hand"""
        progress = self.progress(goal)
        if progress.should_auto_update:
            return progress.auto_calculated_amount
        return goal.current_amount

    def update_progress(self, goal: FinancialGoal, current_amount: Any) -> FinancialGoal:
        goal.current_amount = self._clean_amount(current_amount, "Current amount")
        goal.save(update_fields=["current_amount", "updated_at"])
        logger.info("Goal %s progress set to %s", goal.pk, goal.current_amount)
        return goal

    def goals_with_progress(self) -> List[Tuple[FinancialGoal, GoalProgress]]:
        return self.overview()["goals"]

    def overview(self) -> Dict[str, Any]:
        return calculations.summarize_goals(self.list_goals(), self.ledger.entries)

    def _apply(self, goal: FinancialGoal, fields: Dict[str, Any]) -> None:
        for field, value in fields.items():
            if field not in EDITABLE_FIELDS:
                raise ValueError(f"Field '{field}' cannot be changed.")
            setattr(goal, field, value)

        goal.title = (goal.title or "").strip()
        if not goal.title:
            raise ValueError("Goal title cannot be empty.")
        goal.target_amount = self._clean_amount(goal.target_amount, "Target amount")
        goal.current_amount = self._clean_amount(goal.current_amount, "Current amount")
        if goal.priority not in GoalPriority.values:
            raise ValueError(f"Invalid priority '{goal.priority}'.")

        linked = goal.linked_category
        if linked is not None and linked.type not in (CategoryType.INCOME, CategoryType.BOTH):
            raise ValueError(f"Goals can only be linked to income categories, not '{linked.name}'.")

    @staticmethod
    def _clean_amount(amount: Any, label: str) -> Decimal:
        if amount in (None, ""):
            return Decimal("0")
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"{label} must be a number.")
        if not value.is_finite() or value < 0:
            raise ValueError(f"{label} must be 0 or greater.")
        return value.quantize(AMOUNT_QUANTUM)
