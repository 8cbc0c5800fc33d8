from django.contrib import admin
from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """Admin for individual transactions"""

    list_display = ["title", "user", "type", "transaction_date", "amount", "category", "payment_method", "income_source"]
    list_filter = ["type", "payment_method", "income_source", "category"]
    search_fields = ["title", "description", "category__name", "user__username"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = (
        (None, {"fields": ("user", "title", "type", "transaction_date", "amount", "currency", "category")}),
        ("Accounts", {"fields": ("payment_method", "income_source", "transfer_to_source")}),
        ("Details", {"fields": ("description",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def get_queryset(self, request):
        """Optimize queries by selecting related objects"""
        qs = super().get_queryset(request)
        return qs.select_related("category", "user")
