from django.contrib import admin

from .models import Alert


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    list_display = ("title", "priority", "category", "city", "area", "is_active", "notified_count", "created_at")
    list_filter = ("priority", "category", "is_active", "city")
    search_fields = ("title", "message", "city", "area")
    readonly_fields = ("notified_count", "created_at", "updated_at")
