from django.contrib import admin

from .models import Complaint, ComplaintNote, ComplaintStatusLog


class ComplaintStatusLogInline(admin.TabularInline):
    model = ComplaintStatusLog
    extra = 0
    fields = ("from_status", "to_status", "changed_by", "created_at")
    readonly_fields = fields
    can_delete = False


class ComplaintNoteInline(admin.TabularInline):
    model = ComplaintNote
    extra = 0
    fields = ("text", "author", "created_at")
    readonly_fields = ("created_at",)


@admin.register(Complaint)
class ComplaintAdmin(admin.ModelAdmin):
    list_display = ("code", "category", "priority", "status", "city", "area", "assigned_admin", "created_at")
    list_filter = ("status", "category", "priority", "state", "city")
    search_fields = ("code", "description", "city", "area")
    readonly_fields = ("code", "status", "assigned_admin", "version", "created_at", "updated_at")
    inlines = [ComplaintStatusLogInline, ComplaintNoteInline]
