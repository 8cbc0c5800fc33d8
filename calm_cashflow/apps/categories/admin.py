from django.contrib import admin

from .models import Category


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    """Admin for transaction categories"""

    list_display = ["name", "type", "icon", "color", "created_at"]
    list_filter = ["type"]
    search_fields = ["name"]
    readonly_fields = ["created_at"]
