from django.contrib import admin

from .models import ChangeEvent


@admin.register(ChangeEvent)
class ChangeEventAdmin(admin.ModelAdmin):
    """Read-only view of the change feed"""

    list_display = ["id", "table", "event", "row_id", "user", "created_at"]
    list_filter = ["table", "event", "created_at"]
    search_fields = ["table", "row_id", "user__username"]
    readonly_fields = ["table", "event", "row_id", "new", "old", "user", "created_at"]
