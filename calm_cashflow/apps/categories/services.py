from __future__ import annotations

import logging
from typing import Any, List

from django.db.models import Q, QuerySet

from calm_cashflow.core.constants import DEFAULT_CATEGORY_COLOR, DEFAULT_CATEGORY_ICON, CategoryType

from .models import Category

logger = logging.getLogger(__name__)

# First matching keyword wins, so more specific names come first
ICON_KEYWORDS = [
    (("pocket money", "pocket"), "account_balance_wallet"),
    (("salary", "wage", "pay"), "work"),
    (("freelance", "contract"), "laptop"),
    (("investment", "dividend", "stock"), "trending_up"),
    (("business", "entrepreneur"), "store"),
    (("rental", "rent", "mortgage", "housing"), "home"),
    (("commission", "bonus"), "percent"),
    (("gift", "present"), "card_giftcard"),
    (("refund", "return"), "assignment_return"),
    (("interest", "savings", "tax", "bank", "account"), "account_balance"),
    (("food", "meal", "restaurant"), "restaurant"),
    (("transport", "gas", "fuel", "delivery", "uber"), "directions_car"),
    (("shopping", "clothes", "fashion"), "shopping_bag"),
    (("entertainment", "movie", "game"), "sports_esports"),
    (("health", "medical", "doctor"), "local_hospital"),
    (("education", "course", "book", "teaching", "tutor"), "school"),
    (("bills", "utility", "electric"), "receipt"),
    (("insurance", "policy"), "security"),
    (("card", "credit"), "credit_card"),
    (("phone", "mobile"), "phone_android"),
    (("cash", "money", "wallet", "purse"), "account_balance_wallet"),
]


def suggest_icon(name: str) -> str:
    """Pick a Material icon name for a category from keywords in its name"""
    lowered = name.lower().strip()
    for keywords, icon in ICON_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return icon
    return DEFAULT_CATEGORY_ICON


class CategoryService:
    """Create, edit and look up transaction categories"""

    def list_categories(self) -> QuerySet:
        return Category.objects.order_by("name")

    def list_by_type(self, category_type: str) -> QuerySet:
        """Categories usable for a transaction type, including those marked as both"""
        return self.list_categories().filter(Q(type=category_type) | Q(type=CategoryType.BOTH))

    def names(self) -> List[str]:
        return list(self.list_categories().values_list("name", flat=True))

    def create(
        self,
        name: str,
        type: str = CategoryType.EXPENSE,
        icon: str = "",
        color: str = "",
    ) -> Category:
        name = self._clean_name(name)
        self._validate_type(type)
        if Category.objects.filter(name__iexact=name).exists():
            raise ValueError(f"A category named '{name}' already exists.")

        category = Category.objects.create(
            name=name,
            type=type,
            icon=icon or suggest_icon(name),
            color=color or DEFAULT_CATEGORY_COLOR,
        )
        logger.info("Created category %s (%s)", category.name, category.type)
        return category

    def update(self, category: Category, **changes: Any) -> Category:
        if "name" in changes:
            name = self._clean_name(changes["name"])
            if Category.objects.filter(name__iexact=name).exclude(pk=category.pk).exists():
                raise ValueError(f"A category named '{name}' already exists.")
            category.name = name
        if "type" in changes:
            self._validate_type(changes["type"])
            category.type = changes["type"]
        if changes.get("icon"):
            category.icon = changes["icon"]
        if changes.get("color"):
            category.color = changes["color"]

        category.save()
        logger.info("Updated category %s", category.pk)
        return category

    def delete(self, category: Category) -> None:
        """Delete a category; its transactions become uncategorized"""
        category_id = category.pk
        category.delete()
        logger.info("Deleted category %s", category_id)

    @staticmethod
    def _clean_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValueError("Category name cannot be empty.")
        return name

    @staticmethod
    def _validate_type(category_type: str) -> None:
        if category_type not in CategoryType.values:
            raise ValueError(
                f"Invalid category type '{category_type}'. Must be one of: {', '.join(CategoryType.values)}."
            )
