from __future__ import annotations

from typing import Any, Dict

from django.db import models

from calm_cashflow.core.constants import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    CategoryType,
)


class Category(models.Model):
    """Transaction category shared by every transaction and goal"""

    name = models.CharField(max_length=100, unique=True)
    type = models.CharField(max_length=10, choices=CategoryType.choices, default=CategoryType.EXPENSE)
    icon = models.CharField(max_length=50, default=DEFAULT_CATEGORY_ICON, help_text="Material icon name")
    color = models.CharField(max_length=7, default=DEFAULT_CATEGORY_COLOR, help_text="Hex color, e.g. #6B7280")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "categories"
        ordering = ["name"]
        verbose_name_plural = "Categories"

    def __str__(self) -> str:
        return self.name

    def accepts(self, transaction_type: str) -> bool:
        """Whether transactions of the given type may use this category"""
        return self.type in (transaction_type, CategoryType.BOTH)

    def as_row(self) -> Dict[str, Any]:
        return {
            "id": self.pk,
            "name": self.name,
            "type": self.type,
            "icon": self.icon,
            "color": self.color,
        }
