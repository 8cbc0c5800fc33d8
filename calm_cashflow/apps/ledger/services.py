from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from calm_cashflow.apps.goals.services import GoalService
from calm_cashflow.core.constants import IncomeSource

from .store import LedgerState
from .tuples import LedgerEntry, Summary


class CashflowAnalyzerService:
    """Service to build the dashboard projections of one user"""

    def __init__(self, user: Any, ledger: Optional[LedgerState] = None) -> None:
        self.user = user
        self.ledger = ledger if ledger is not None else LedgerState.for_user(user)

    def get_summary(self) -> Summary:
        return self.ledger.summary

    def get_balances(self) -> Dict[str, Decimal]:
        return self.ledger.balances

    def get_labelled_balances(self) -> List[Dict[str, Any]]:
        """Balances in display order with their account labels"""
        balances = self.ledger.balances
        return [
            {"source": source.value, "label": source.label, "balance": balances[source.value]}
            for source in IncomeSource
        ]

    def get_goal_overview(self) -> Dict[str, Any]:
        return GoalService(self.user, ledger=self.ledger).overview()

    def get_transaction_groups(
        self, categories: Iterable[str] = (), types: Iterable[str] = ()
    ) -> Dict[str, List[LedgerEntry]]:
        return self.ledger.filtered_groups(categories, types)

    def get_dashboard(self, categories: Iterable[str] = (), types: Iterable[str] = ()) -> Dict[str, Any]:
        """Get every figure shown on the dashboard"""
        balances = self.get_labelled_balances()
        return {
            "summary": self.get_summary(),
            "balances": balances,
            "total_balance": sum((b["balance"] for b in balances), Decimal("0")),
            "goal_overview": self.get_goal_overview(),
            "transaction_groups": self.get_transaction_groups(categories, types),
        }
