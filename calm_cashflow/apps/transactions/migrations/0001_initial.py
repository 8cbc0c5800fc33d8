import django.db.models.deletion
import django.utils.timezone
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
            name="Transaction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=15)),
                ("type", models.CharField(choices=[("income", "Income"), ("expense", "Expense")], max_length=10)),
                ("transaction_date", models.DateField(default=django.utils.timezone.localdate)),
                ("currency", models.CharField(default="PKR", max_length=3)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("cash", "Cash"), ("credit", "Credit"), ("transfer", "Transfer")],
                        default="cash",
                        max_length=10,
                    ),
                ),
                (
                    "income_source",
                    models.CharField(
                        choices=[("wallet", "Wallet"), ("bank", "Bank"), ("digital_wallet", "Digital Wallet")],
                        default="wallet",
                        help_text="Where income landed, or where an expense or transfer was drawn from",
                        max_length=20,
                    ),
                ),
                (
                    "transfer_to_source",
                    models.CharField(
                        blank=True,
                        choices=[("wallet", "Wallet"), ("bank", "Bank"), ("digital_wallet", "Digital Wallet")],
                        help_text="Destination account of a transfer",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "category",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="transactions",
                        to="categories.category",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "transactions",
                "ordering": ["-created_at", "-id"],
            },
        ),
    ]
