from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "recipient", "kind", "priority", "title", "is_read", "created_at")
    list_filter = ("category", "priority", "is_read")
    search_fields = ("title", "message", "recipient__username")
    readonly_fields = ("created_at", "updated_at", "read_at")
