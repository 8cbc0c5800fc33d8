from django.apps import AppConfig


class ChangesConfig(AppConfig):
    name = "calm_cashflow.apps.changes"
    label = "changes"
    verbose_name = "Change feed"

    def ready(self) -> None:
        from calm_cashflow.apps.categories.models import Category
        from calm_cashflow.apps.goals.models import FinancialGoal
        from calm_cashflow.apps.transactions.models import Transaction

        from . import receivers

        receivers.connect(Category, Transaction, FinancialGoal)
