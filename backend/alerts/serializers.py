"""
Alerts app serializers.
"""

from __future__ import annotations

from rest_framework import serializers

from core.models import NotificationPriority

from .models import Alert, AlertCategory


class AlertCreateSerializer(serializers.Serializer):
    category = serializers.ChoiceField(choices=AlertCategory.choices)
    alert_type = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    priority = serializers.ChoiceField(
        choices=NotificationPriority.choices,
        required=False,
        default=NotificationPriority.NORMAL,
    )
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    expires_at = serializers.DateTimeField(required=False, allow_null=True, default=None)


class AlertSerializer(serializers.ModelSerializer):
    class Meta:
        model = Alert
        fields = [
            "id",
            "administrator",
            "city",
            "area",
            "category",
            "alert_type",
            "priority",
            "title",
            "message",
            "is_active",
            "expires_at",
            "notified_count",
            "created_at",
        ]
        read_only_fields = fields
