"""
Accounts app serializers.

Contains all Request and Response serializers for the accounts API.
Serializers handle field definitions, read/write constraints, and
basic validation.  **No business logic** lives here - all domain
rules are delegated to ``services.py``.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth import get_user_model
from rest_framework import serializers

from .models import JurisdictionHistory

User = get_user_model()


# ═══════════════════════════════════════════════════════════════════
#  Registration
# ═══════════════════════════════════════════════════════════════════


class RegisterRequestSerializer(serializers.ModelSerializer):
    """
    Validates citizen registration data.

    City and area are required because local alerts are targeted by them.
    """

    password = serializers.CharField(
        write_only=True,
        min_length=8,
        style={"input_type": "password"},
        help_text="Minimum 8 characters.",
    )
    password_confirm = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="Must match 'password'.",
    )
    city = serializers.CharField(max_length=100)
    area = serializers.CharField(max_length=150)

    class Meta:
        model = User
        fields = [
            "username",
            "password",
            "password_confirm",
            "email",
            "phone_number",
            "first_name",
            "last_name",
            "state",
            "district",
            "sub_district",
            "city",
            "area",
            "postal_code",
        ]

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["password"] != attrs.get("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})
        return attrs


# ═══════════════════════════════════════════════════════════════════
#  Profile
# ═══════════════════════════════════════════════════════════════════


class UserDetailSerializer(serializers.ModelSerializer):
    """Read-only view of a user, including location / jurisdiction."""

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "phone_number",
            "role",
            "is_active",
            "state",
            "district",
            "sub_district",
            "city",
            "area",
            "postal_code",
            "date_joined",
        ]
        read_only_fields = fields


class MeUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "email",
            "first_name",
            "last_name",
            "phone_number",
            "state",
            "district",
            "sub_district",
            "city",
            "area",
            "postal_code",
        ]
        extra_kwargs = {field: {"required": False} for field in fields}


# ═══════════════════════════════════════════════════════════════════
#  Jurisdiction
# ═══════════════════════════════════════════════════════════════════


class JurisdictionUpdateSerializer(serializers.Serializer):
    state = serializers.CharField(max_length=100, required=False, allow_blank=True)
    district = serializers.CharField(max_length=100, required=False, allow_blank=True)
    sub_district = serializers.CharField(max_length=100, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False)
    area = serializers.CharField(max_length=150, required=False)
    postal_code = serializers.CharField(max_length=12, required=False, allow_blank=True)


class JurisdictionHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = JurisdictionHistory
        fields = [
            "id",
            "state",
            "district",
            "sub_district",
            "city",
            "area",
            "postal_code",
            "created_at",
        ]
        read_only_fields = fields
