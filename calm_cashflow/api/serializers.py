from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from calm_cashflow.apps.categories.models import Category
from calm_cashflow.apps.changes.models import ChangeEvent
from calm_cashflow.apps.goals.models import FinancialGoal
from calm_cashflow.apps.transactions.models import Transaction
from calm_cashflow.core.constants import IncomeSource


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "type", "icon", "color"]
        extra_kwargs = {
            "icon": {"required": False, "allow_blank": True},
            "color": {"required": False, "allow_blank": True},
            # Uniqueness is checked case-insensitively by the service
            "name": {"validators": []},
        }


class EmbeddedCategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "icon", "color"]


class TransactionSerializer(serializers.ModelSerializer):
    category_id = serializers.PrimaryKeyRelatedField(
        source="category", queryset=Category.objects.all(), required=False, allow_null=True
    )
    categories = EmbeddedCategorySerializer(source="category", read_only=True)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "title",
            "description",
            "amount",
            "type",
            "category_id",
            "categories",
            "transaction_date",
            "currency",
            "payment_method",
            "income_source",
            "transfer_to_source",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
            "transaction_date": {"required": False},
            "currency": {"required": False},
            "payment_method": {"required": False},
            "income_source": {"required": False},
            "transfer_to_source": {"required": False},
        }


class TransferSerializer(serializers.Serializer):
    from_source = serializers.ChoiceField(choices=IncomeSource.choices)
    to_source = serializers.ChoiceField(choices=IncomeSource.choices)
    amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    transfer_date = serializers.DateField(required=False, allow_null=True, default=None)


class GoalProgressSerializer(serializers.Serializer):
    auto_calculated_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    should_auto_update = serializers.BooleanField()
    current_amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    percentage = serializers.DecimalField(max_digits=None, decimal_places=2)
    remaining = serializers.DecimalField(max_digits=15, decimal_places=2)
    needs_update = serializers.BooleanField()


class GoalSerializer(serializers.ModelSerializer):
    linked_category_id = serializers.PrimaryKeyRelatedField(
        source="linked_category", queryset=Category.objects.all(), required=False, allow_null=True
    )
    linked_category_name = serializers.ReadOnlyField()

    class Meta:
        model = FinancialGoal
        fields = [
            "id",
            "title",
            "description",
            "target_amount",
            "current_amount",
            "target_date",
            "category",
            "priority",
            "linked_category_id",
            "linked_category_name",
            "auto_update",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]
        extra_kwargs = {
            "description": {"required": False, "allow_blank": True},
            "current_amount": {"required": False},
            "category": {"required": False},
            "priority": {"required": False},
            "auto_update": {"required": False},
        }

    def to_representation(self, instance: FinancialGoal) -> Dict[str, Any]:
        data = super().to_representation(instance)
        progress = self.context.get("progress", {}).get(instance.pk)
        if progress is not None:
            data["progress"] = GoalProgressSerializer(progress._asdict()).data
        return data


class ProgressUpdateSerializer(serializers.Serializer):
    current_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0)


class BalancesSerializer(serializers.Serializer):
    wallet = serializers.DecimalField(max_digits=15, decimal_places=2)
    bank = serializers.DecimalField(max_digits=15, decimal_places=2)
    digital_wallet = serializers.DecimalField(max_digits=15, decimal_places=2)


class SummarySerializer(serializers.Serializer):
    income = serializers.DecimalField(max_digits=15, decimal_places=2)
    expense = serializers.DecimalField(max_digits=15, decimal_places=2)
    balance = serializers.DecimalField(max_digits=15, decimal_places=2)
    expense_percentage = serializers.DecimalField(max_digits=None, decimal_places=2)
    balance_percentage = serializers.DecimalField(max_digits=None, decimal_places=2)


class ChangeEventSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChangeEvent
        fields = ["id", "table", "event", "row_id", "new", "old", "created_at"]
