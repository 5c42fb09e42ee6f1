"""
Core app serializers.

Serializers for the notification inbox.  Listing filters arrive as
query parameters and are validated by ``NotificationFilterSerializer``;
everything else is **response-only**.
"""

from __future__ import annotations

from rest_framework import serializers

from core.constants import NOTIFICATIONS_DEFAULT_LIMIT, NOTIFICATIONS_MAX_LIMIT


class NotificationFilterSerializer(serializers.Serializer):
    """Query parameters accepted by ``GET /api/core/notifications/``."""

    category = serializers.CharField(required=False, help_text="e.g. 'complaint' or 'alert'.")
    is_read = serializers.BooleanField(required=False, allow_null=True, default=None)
    limit = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=NOTIFICATIONS_MAX_LIMIT,
        default=NOTIFICATIONS_DEFAULT_LIMIT,
    )
    offset = serializers.IntegerField(required=False, min_value=0, default=0)


class NotificationSerializer(serializers.Serializer):
    """
    Read-only serializer for ``Notification`` instances.

    Used by the Notification ViewSet to list and acknowledge
    notifications for the authenticated user.
    """

    id = serializers.IntegerField(read_only=True, help_text="Notification PK.")
    kind = serializers.CharField(
        read_only=True,
        help_text="Event type, e.g. 'complaint_resolved' or 'alert_urgent'.",
    )
    category = serializers.CharField(read_only=True)
    priority = serializers.CharField(
        read_only=True,
        help_text="normal, urgent or emergency.",
    )
    title = serializers.CharField(
        read_only=True,
        help_text="Short notification title.",
    )
    message = serializers.CharField(
        read_only=True,
        help_text="Full notification message body.",
    )
    related_type = serializers.CharField(read_only=True)
    related_id = serializers.IntegerField(
        read_only=True,
        allow_null=True,
        help_text="PK of the related object (if any).",
    )
    is_read = serializers.BooleanField(
        read_only=True,
        help_text="Whether the recipient has marked this notification as read.",
    )
    read_at = serializers.DateTimeField(read_only=True, allow_null=True)
    created_at = serializers.DateTimeField(
        read_only=True,
        help_text="When the notification was created.",
    )


class NotificationListSerializer(serializers.Serializer):
    """Envelope returned by the list endpoint."""

    results = NotificationSerializer(many=True, read_only=True)
    unread_count = serializers.IntegerField(read_only=True)


class MarkAllReadSerializer(serializers.Serializer):
    updated = serializers.IntegerField(read_only=True)
