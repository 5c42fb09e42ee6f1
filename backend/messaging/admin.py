from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "complaint", "sender", "sender_role", "is_seen", "created_at")
    list_filter = ("sender_role", "is_seen")
    search_fields = ("body", "complaint__code")
    readonly_fields = ("created_at", "seen_at")
