"""
Complaints app serializers.

Contains all Request and Response serializers for the Complaints API.
Serializers handle field definitions, read/write constraints, and
field-level validation only.  Status parsing, ownership and lifecycle
rules belong in ``services.py``.

Structure
---------
1. Filter / query-param serializers
2. Read serializers (list, detail, history, notes)
3. Write serializers (create, status update, note)
"""

from __future__ import annotations

from rest_framework import serializers

from .models import (
    Complaint,
    ComplaintCategory,
    ComplaintNote,
    ComplaintPriority,
    ComplaintStatusLog,
)


def _display_name(user) -> str | None:
    if user is None:
        return None
    return user.get_full_name() or user.username


# ═══════════════════════════════════════════════════════════════════
#  1. Filter / Query-Parameter Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintFilterSerializer(serializers.Serializer):
    status = serializers.CharField(
        required=False,
        help_text="Filter by status: pending, assigned, in_progress or resolved (labels accepted).",
    )


# ═══════════════════════════════════════════════════════════════════
#  2. Read Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintStatusLogSerializer(serializers.ModelSerializer):
    """Read-only serializer for the complaint audit trail."""

    changed_by_name = serializers.SerializerMethodField()

    class Meta:
        model = ComplaintStatusLog
        fields = [
            "id",
            "from_status",
            "to_status",
            "changed_by",
            "changed_by_name",
            "created_at",
        ]
        read_only_fields = fields

    def get_changed_by_name(self, obj: ComplaintStatusLog) -> str | None:
        return _display_name(obj.changed_by)


class ComplaintNoteSerializer(serializers.ModelSerializer):
    author_name = serializers.SerializerMethodField()

    class Meta:
        model = ComplaintNote
        fields = ["id", "text", "author", "author_name", "created_at"]
        read_only_fields = fields

    def get_author_name(self, obj: ComplaintNote) -> str | None:
        return _display_name(obj.author)


class ComplaintListSerializer(serializers.ModelSerializer):
    """Compact representation for the list endpoint."""

    status_display = serializers.CharField(source="get_status_display", read_only=True)

    class Meta:
        model = Complaint
        fields = [
            "id",
            "code",
            "category",
            "priority",
            "status",
            "status_display",
            "city",
            "area",
            "assigned_admin",
            "created_at",
        ]
        read_only_fields = fields


class ComplaintDetailSerializer(serializers.ModelSerializer):
    """Full complaint as seen by its citizen, with the status history."""

    status_display = serializers.CharField(source="get_status_display", read_only=True)
    assigned_admin_name = serializers.SerializerMethodField()
    status_history = ComplaintStatusLogSerializer(source="status_logs", many=True, read_only=True)

    class Meta:
        model = Complaint
        fields = [
            "id",
            "code",
            "citizen",
            "category",
            "description",
            "priority",
            "status",
            "status_display",
            "assigned_admin",
            "assigned_admin_name",
            "state",
            "district",
            "sub_district",
            "city",
            "area",
            "postal_code",
            "full_address",
            "house_number",
            "street_number",
            "landmark",
            "latitude",
            "longitude",
            "status_history",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_assigned_admin_name(self, obj: Complaint) -> str | None:
        return _display_name(obj.assigned_admin)


class AdminComplaintDetailSerializer(ComplaintDetailSerializer):
    """Administrator view: adds the internal notes."""

    notes = ComplaintNoteSerializer(many=True, read_only=True)

    class Meta(ComplaintDetailSerializer.Meta):
        fields = ComplaintDetailSerializer.Meta.fields + ["notes"]
        read_only_fields = fields


# ═══════════════════════════════════════════════════════════════════
#  3. Write Serializers
# ═══════════════════════════════════════════════════════════════════


class ComplaintCreateSerializer(serializers.Serializer):
    """
    Validates ``POST /api/complaints/``.  State, city and area drive
    routing and are mandatory; the rest of the address is free-form.
    """

    category = serializers.ChoiceField(
        choices=ComplaintCategory.choices,
        help_text="One of: " + ", ".join(c[0] for c in ComplaintCategory.choices) + ".",
    )
    description = serializers.CharField()
    priority = serializers.ChoiceField(
        choices=ComplaintPriority.choices,
        required=False,
        default=ComplaintPriority.MEDIUM,
    )
    state = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    sub_district = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    city = serializers.CharField(max_length=100)
    area = serializers.CharField(max_length=150)
    postal_code = serializers.CharField(max_length=12, required=False, allow_blank=True, default="")
    full_address = serializers.CharField(required=False, allow_blank=True, default="")
    house_number = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    street_number = serializers.CharField(max_length=30, required=False, allow_blank=True, default="")
    landmark = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    latitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)
    longitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)


class ComplaintCreatedSerializer(serializers.ModelSerializer):
    """Response of the create endpoint."""

    class Meta:
        model = Complaint
        fields = ["id", "code", "status", "assigned_admin"]
        read_only_fields = fields


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField(
        help_text="Target status: pending, assigned, in_progress or resolved (labels accepted).",
    )


class StatusUpdateResultSerializer(serializers.ModelSerializer):
    class Meta:
        model = Complaint
        fields = ["code", "status"]
        read_only_fields = fields


class NoteCreateSerializer(serializers.Serializer):
    text = serializers.CharField(help_text="Internal note, visible to administrators only.")


class NoteCountSerializer(serializers.Serializer):
    note_count = serializers.IntegerField(read_only=True)
