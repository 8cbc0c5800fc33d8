from django.core.management.base import BaseCommand

from calm_cashflow.apps.accounts.services import ensure_demo_user
from calm_cashflow.apps.categories.models import Category
from calm_cashflow.apps.categories.services import CategoryService
from calm_cashflow.core.constants import CategoryType

DEFAULT_CATEGORIES = [
    ("Salary", CategoryType.INCOME, "#10B981"),
    ("Freelance", CategoryType.INCOME, "#3B82F6"),
    ("Pocket Money", CategoryType.INCOME, "#8B5CF6"),
    ("Gift", CategoryType.BOTH, "#EC4899"),
    ("Food", CategoryType.EXPENSE, "#F59E0B"),
    ("Transport", CategoryType.EXPENSE, "#6366F1"),
    ("Rent", CategoryType.EXPENSE, "#EF4444"),
    ("Bills", CategoryType.EXPENSE, "#14B8A6"),
    ("Shopping", CategoryType.EXPENSE, "#F97316"),
    ("Entertainment", CategoryType.EXPENSE, "#A855F7"),
    ("Health", CategoryType.EXPENSE, "#22C55E"),
]


class Command(BaseCommand):
    help = "Set up the demo user and the default categories"

    def handle(self, *args, **options):
        user = ensure_demo_user()
        self.stdout.write(f"Using demo user {user.username}")

        service = CategoryService()
        created_count = 0
        for name, category_type, color in DEFAULT_CATEGORIES:
            if Category.objects.filter(name__iexact=name).exists():
                continue
            service.create(name=name, type=category_type, color=color)
            created_count += 1
            self.stdout.write(self.style.SUCCESS(f"Created category: {name}"))

        self.stdout.write(
            self.style.SUCCESS(
                f"\nSample data setup complete! {created_count} categories created.\n"
                f"Start the server with `python manage.py runserver` and open http://localhost:8000/\n"
            )
        )
