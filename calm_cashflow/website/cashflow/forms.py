from __future__ import annotations

from decimal import Decimal
from typing import Any

from django import forms

from calm_cashflow.apps.categories.models import Category
from calm_cashflow.apps.categories.services import suggest_icon
from calm_cashflow.apps.goals.models import FinancialGoal
from calm_cashflow.apps.transactions.models import Transaction
from calm_cashflow.core.constants import DEFAULT_CATEGORY_COLOR, CategoryType, IncomeSource


class TransactionForm(forms.ModelForm):
    class Meta:
        model = Transaction
        fields = [
            "title",
            "description",
            "amount",
            "type",
            "category",
            "transaction_date",
            "payment_method",
            "income_source",
        ]
        widgets = {
            "title": forms.TextInput(attrs={"class": "form-control", "placeholder": "Enter transaction title"}),
            "description": forms.Textarea(attrs={"class": "form-control", "rows": 2}),
            "amount": forms.NumberInput(attrs={"class": "form-control", "step": "0.01", "min": "0"}),
            "type": forms.Select(attrs={"class": "form-select"}),
            "category": forms.Select(attrs={"class": "form-select"}),
            "transaction_date": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
            "payment_method": forms.Select(attrs={"class": "form-select"}),
            "income_source": forms.Select(attrs={"class": "form-select"}),
        }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.fields["category"].queryset = Category.objects.order_by("name")
        self.fields["category"].required = False


class TransferForm(forms.Form):
    from_source = forms.ChoiceField(
        choices=IncomeSource.choices, initial=IncomeSource.WALLET, widget=forms.Select(attrs={"class": "form-select"})
    )
    to_source = forms.ChoiceField(
        choices=IncomeSource.choices, initial=IncomeSource.BANK, widget=forms.Select(attrs={"class": "form-select"})
    )
    amount = forms.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=Decimal("0.01"),
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01"}),
    )
    description = forms.CharField(
        required=False,
        widget=forms.Textarea(
            attrs={"class": "form-control", "rows": 2, "placeholder": "Add a description for this transfer..."}
        ),
    )
    transfer_date = forms.DateField(
        required=False, widget=forms.DateInput(attrs={"class": "form-control", "type": "date"})
    )

    def clean(self) -> dict:
        cleaned_data = super().clean()
        if cleaned_data.get("from_source") and cleaned_data.get("from_source") == cleaned_data.get("to_source"):
            raise forms.ValidationError("Choose two different accounts.")
        return cleaned_data


class CategoryForm(forms.ModelForm):
    class Meta:
        model = Category
        fields = ["name", "type", "icon", "color"]
        widgets = {
            "name": forms.TextInput(attrs={"class": "form-control", "placeholder": "e.g., Groceries"}),
            "type": forms.Select(attrs={"class": "form-select"}),
            "icon": forms.TextInput(attrs={"class": "form-control", "placeholder": "Leave empty to pick one"}),
            "color": forms.TextInput(attrs={"class": "form-control", "type": "color"}),
        }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.fields["icon"].required = False
        self.fields["color"].required = False

    def clean_icon(self) -> str:
        return self.cleaned_data.get("icon") or suggest_icon(self.cleaned_data.get("name") or "")

    def clean_color(self) -> str:
        if self.cleaned_data.get("color"):
            return self.cleaned_data["color"]
        return self.instance.color if self.instance.pk else DEFAULT_CATEGORY_COLOR


class GoalForm(forms.ModelForm):
    class Meta:
        model = FinancialGoal
        fields = [
            "title",
            "description",
            "target_amount",
            "current_amount",
            "target_date",
            "category",
            "priority",
            "linked_category",
            "auto_update",
        ]
        widgets = {
            "title": forms.TextInput(attrs={"class": "form-control", "placeholder": "e.g., Emergency fund"}),
            "description": forms.Textarea(attrs={"class": "form-control", "rows": 2}),
            "target_amount": forms.NumberInput(attrs={"class": "form-control", "step": "0.01", "min": "0"}),
            "current_amount": forms.NumberInput(attrs={"class": "form-control", "step": "0.01", "min": "0"}),
            "target_date": forms.DateInput(attrs={"class": "form-control", "type": "date"}),
            "category": forms.TextInput(attrs={"class": "form-control"}),
            "priority": forms.Select(attrs={"class": "form-select"}),
            "linked_category": forms.Select(attrs={"class": "form-select"}),
            "auto_update": forms.CheckboxInput(attrs={"class": "form-check-input"}),
        }

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        # Only income categories can feed a goal
        self.fields["linked_category"].queryset = Category.objects.filter(
            type__in=[CategoryType.INCOME, CategoryType.BOTH]
        ).order_by("name")
        self.fields["linked_category"].required = False
        self.fields["current_amount"].required = False

    def clean_current_amount(self) -> Decimal:
        return self.cleaned_data.get("current_amount") or Decimal("0")


class ProgressForm(forms.Form):
    current_amount = forms.DecimalField(
        max_digits=15,
        decimal_places=2,
        min_value=0,
        widget=forms.NumberInput(attrs={"class": "form-control", "step": "0.01", "min": "0"}),
    )
