from django.contrib import admin

from .models import FinancialGoal


@admin.register(FinancialGoal)
class FinancialGoalAdmin(admin.ModelAdmin):
    """Admin for savings goals"""

    list_display = ["title", "user", "current_amount", "target_amount", "priority", "auto_update", "target_date"]
    list_filter = ["priority", "auto_update", "category"]
    search_fields = ["title", "user__username", "linked_category__name"]
    readonly_fields = ["created_at", "updated_at"]

    fieldsets = (
        (None, {"fields": ("user", "title", "description", "category", "priority", "target_date")}),
        ("Progress", {"fields": ("target_amount", "current_amount", "linked_category", "auto_update")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ("collapse",)}),
    )

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related("linked_category", "user")
