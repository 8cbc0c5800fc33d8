from __future__ import annotations

from typing import Any, Dict

from django.contrib.auth.models import User
from django.db import models

from calm_cashflow.core.constants import DEFAULT_GOAL_CATEGORY, GoalPriority


class FinancialGoal(models.Model):
    """Savings goal, tracked manually or from the transactions of a linked category"""

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name="financial_goals")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    target_amount = models.DecimalField(max_digits=15, decimal_places=2, default=0)
    current_amount = models.DecimalField(
        max_digits=15, decimal_places=2, default=0, help_text="Manually entered progress"
    )
    target_date = models.DateField(null=True, blank=True)
    category = models.CharField(max_length=50, default=DEFAULT_GOAL_CATEGORY, help_text="Kind of goal")
    priority = models.CharField(max_length=10, choices=GoalPriority.choices, default=GoalPriority.MEDIUM)
    linked_category = models.ForeignKey(
        "categories.Category",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="linked_goals",
        help_text="Category whose transactions feed the automatic progress",
    )
    auto_update = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "financial_goals"
        ordering = ["-created_at", "-id"]

    def __str__(self) -> str:
        return f"{self.title} ({self.current_amount}/{self.target_amount})"

    @property
    def linked_category_name(self) -> str:
        return self.linked_category.name if self.linked_category else ""

    def as_row(self) -> Dict[str, Any]:
        return {
            "id": self.pk,
            "user_id": self.user_id,
            "title": self.title,
            "description": self.description,
            "target_amount": self.target_amount,
            "current_amount": self.current_amount,
            "target_date": self.target_date,
            "category": self.category,
            "priority": self.priority,
            "linked_category_id": self.linked_category_id,
            "linked_category_name": self.linked_category_name,
            "auto_update": self.auto_update,
            "created_at": self.created_at,
        }
