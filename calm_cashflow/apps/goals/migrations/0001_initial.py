import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("categories", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="FinancialGoal",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("target_amount", models.DecimalField(decimal_places=2, default=0, max_digits=15)),
                (
                    "current_amount",
                    models.DecimalField(
                        decimal_places=2, default=0, help_text="Manually entered progress", max_digits=15
                    ),
                ),
                ("target_date", models.DateField(blank=True, null=True)),
                ("category", models.CharField(default="savings", help_text="Kind of goal", max_length=50)),
                (
                    "priority",
                    models.CharField(
                        choices=[("low", "Low"), ("medium", "Medium"), ("high", "High")],
                        default="medium",
                        max_length=10,
                    ),
                ),
                ("auto_update", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "linked_category",
                    models.ForeignKey(
                        blank=True,
                        help_text="Category whose transactions feed the automatic progress",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="linked_goals",
                        to="categories.category",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="financial_goals",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "financial_goals",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
