import logging

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods

from calm_cashflow.apps.categories.models import Category
from calm_cashflow.apps.categories.services import CategoryService
from calm_cashflow.apps.goals.models import FinancialGoal
from calm_cashflow.apps.goals.services import GoalService
from calm_cashflow.apps.ledger.services import CashflowAnalyzerService
from calm_cashflow.apps.transactions.models import Transaction
from calm_cashflow.apps.transactions.services import TransactionService
from calm_cashflow.core.constants import TYPE_FILTER_LABELS, UNCATEGORIZED
from calm_cashflow.core.utils import TypedHttpRequest

from .forms import CategoryForm, GoalForm, ProgressForm, TransactionForm, TransferForm

logger = logging.getLogger(__name__)


def dashboard_view(request: TypedHttpRequest) -> HttpResponse:
    """Dashboard with summary, account balances, goals and the filtered transaction list"""
    selected_categories = request.GET.getlist("category")
    selected_types = request.GET.getlist("type")

    analyzer = CashflowAnalyzerService(request.user)
    dashboard = analyzer.get_dashboard(categories=selected_categories, types=selected_types)

    context = {
        **dashboard,
        "available_categories": CategoryService().names() + [UNCATEGORIZED],
        "available_types": TYPE_FILTER_LABELS,
        "selected_categories": selected_categories,
        "selected_types": selected_types,
        "selected_tab": "dashboard",
    }

    return render(request, "cashflow/dashboard.html", context)


# Transactions


@require_http_methods(["GET", "POST"])
def transaction_create_view(request: TypedHttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = TransactionForm(request.POST)
        if form.is_valid():
            try:
                transaction = TransactionService(request.user).create(**form.cleaned_data)
            except ValueError as e:
                logger.warning("Could not add transaction: %s", e)
                messages.error(request, f"Error: {e}")
            else:
                messages.success(request, f"Added {transaction.title}")
                return redirect("dashboard")
    else:
        form = TransactionForm()

    return render(request, "cashflow/transaction_form.html", {"form": form, "create": True})


@require_http_methods(["GET", "POST"])
def transaction_update_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    transaction = get_object_or_404(Transaction, pk=pk, user=request.user)
    if request.method == "POST":
        form = TransactionForm(request.POST, instance=transaction)
        if form.is_valid():
            try:
                TransactionService(request.user).update(transaction, **form.cleaned_data)
            except ValueError as e:
                logger.warning("Could not update transaction %s: %s", pk, e)
                messages.error(request, f"Error updating transaction: {e}")
            else:
                messages.success(request, "Transaction updated")
                return redirect("dashboard")
    else:
        form = TransactionForm(instance=transaction)

    return render(
        request, "cashflow/transaction_form.html", {"form": form, "create": False, "transaction": transaction}
    )


@require_http_methods(["POST"])
def transaction_delete_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    transaction = get_object_or_404(Transaction, pk=pk, user=request.user)
    TransactionService(request.user).delete(transaction)
    messages.success(request, "Transaction deleted")
    return redirect("dashboard")


@require_http_methods(["GET", "POST"])
def transfer_view(request: TypedHttpRequest) -> HttpResponse:
    """Move money between wallet, bank and digital wallet"""
    service = TransactionService(request.user)
    if request.method == "POST":
        form = TransferForm(request.POST)
        if form.is_valid():
            try:
                service.create_transfer(**form.cleaned_data)
            except ValueError as e:
                logger.warning("Transfer rejected: %s", e)
                messages.error(request, f"Error: {e}")
            else:
                messages.success(request, "Transfer completed")
                return redirect("dashboard")
    else:
        form = TransferForm()

    return render(request, "cashflow/transfer_form.html", {"form": form, "balances": service.ledger.balances})


# Categories


def category_list_view(request: TypedHttpRequest) -> HttpResponse:
    categories = CategoryService().list_categories()
    return render(request, "cashflow/category_list.html", {"categories": categories, "selected_tab": "categories"})


@require_http_methods(["GET", "POST"])
def category_create_view(request: TypedHttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = CategoryForm(request.POST)
        if form.is_valid():
            try:
                CategoryService().create(**form.cleaned_data)
            except ValueError as e:
                messages.error(request, str(e))
            else:
                messages.success(request, "Category created")
                return redirect("category_list")
    else:
        form = CategoryForm()

    return render(request, "cashflow/category_form.html", {"form": form, "create": True})


@require_http_methods(["GET", "POST"])
def category_update_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    category = get_object_or_404(Category, pk=pk)
    if request.method == "POST":
        form = CategoryForm(request.POST, instance=category)
        if form.is_valid():
            try:
                CategoryService().update(category, **form.cleaned_data)
            except ValueError as e:
                messages.error(request, f"Failed to update category: {e}")
            else:
                messages.success(request, "Category updated")
                return redirect("category_list")
    else:
        form = CategoryForm(instance=category)

    return render(request, "cashflow/category_form.html", {"form": form, "create": False, "category": category})


@require_http_methods(["POST"])
def category_delete_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    category = get_object_or_404(Category, pk=pk)
    CategoryService().delete(category)
    messages.success(request, f'Category "{category.name}" deleted')
    return redirect("category_list")


# Savings goals


def goal_list_view(request: TypedHttpRequest) -> HttpResponse:
    overview = GoalService(request.user).overview()
    return render(request, "cashflow/goal_list.html", {"overview": overview, "selected_tab": "goals"})


@require_http_methods(["GET", "POST"])
def goal_create_view(request: TypedHttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = GoalForm(request.POST)
        if form.is_valid():
            try:
                GoalService(request.user).create(**form.cleaned_data)
            except ValueError as e:
                messages.error(request, f"Error: {e}")
            else:
                messages.success(request, "Goal created")
                return redirect("goal_list")
    else:
        form = GoalForm()

    return render(request, "cashflow/goal_form.html", {"form": form, "create": True})


@require_http_methods(["GET", "POST"])
def goal_update_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    goal = get_object_or_404(FinancialGoal, pk=pk, user=request.user)
    if request.method == "POST":
        form = GoalForm(request.POST, instance=goal)
        if form.is_valid():
            try:
                GoalService(request.user).update(goal, **form.cleaned_data)
            except ValueError as e:
                messages.error(request, f"Error: {e}")
            else:
                messages.success(request, "Goal updated")
                return redirect("goal_list")
    else:
        form = GoalForm(instance=goal)

    return render(request, "cashflow/goal_form.html", {"form": form, "create": False, "goal": goal})


@require_http_methods(["POST"])
def goal_delete_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    goal = get_object_or_404(FinancialGoal, pk=pk, user=request.user)
    GoalService(request.user).delete(goal)
    messages.success(request, "Goal deleted")
    return redirect("goal_list")


@require_http_methods(["GET", "POST"])
def goal_progress_view(request: TypedHttpRequest, pk: int) -> HttpResponse:
    """Update a goal's progress, pre-filled with the amount derived from its linked category"""
    service = GoalService(request.user)
    goal = get_object_or_404(service.list_goals(), pk=pk)

    if request.method == "POST":
        form = ProgressForm(request.POST)
        if form.is_valid():
            try:
                service.update_progress(goal, form.cleaned_data["current_amount"])
            except ValueError as e:
                messages.error(request, f"Error: {e}")
            else:
                messages.success(request, f"Progress updated for {goal.title}")
                return redirect("goal_list")
    else:
        form = ProgressForm(initial={"current_amount": service.suggested_progress(goal)})

    return render(
        request, "cashflow/goal_progress.html", {"form": form, "goal": goal, "progress": service.progress(goal)}
    )
