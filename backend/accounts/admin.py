from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import JurisdictionHistory, User

LOCATION_FIELDSET = ("state", "district", "sub_district", "city", "area", "postal_code")


class JurisdictionHistoryInline(admin.TabularInline):
    model = JurisdictionHistory
    extra = 0
    fields = LOCATION_FIELDSET + ("created_at",)
    readonly_fields = fields
    can_delete = False


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "role", "city", "area", "is_active")
    search_fields = ("username", "email", "phone_number", "city", "area")
    list_filter = ("role", "is_active", "state", "city")
    inlines = [JurisdictionHistoryInline]
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Role & Location", {"fields": ("role", "phone_number") + LOCATION_FIELDSET}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Role & Location", {"fields": ("email", "role", "phone_number") + LOCATION_FIELDSET}),
    )
