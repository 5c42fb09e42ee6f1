"""
Core app services - **Service Layer**.

Contains the notification inbox used by every authenticated user.
Views delegate all business logic to the service classes defined here,
keeping views thin and ensuring testability.

Notification *creation* lives in ``core.domain.notifications``; this
module only reads and acknowledges what has already been delivered.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from django.db.models import QuerySet
from django.utils import timezone

from core.constants import NOTIFICATIONS_DEFAULT_LIMIT, NOTIFICATIONS_MAX_LIMIT
from core.domain.exceptions import NotFound

if TYPE_CHECKING:
    from accounts.models import User
    from core.models import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Handles listing and marking notifications as read for a given user.
    """

    def __init__(self, user: User) -> None:
        self.user = user

    def _base_queryset(self) -> QuerySet:
        from core.models import Notification

        return Notification.objects.filter(recipient=self.user)

    def list_notifications(
        self,
        *,
        category: str | None = None,
        is_read: bool | None = None,
        limit: int = NOTIFICATIONS_DEFAULT_LIMIT,
        offset: int = 0,
    ) -> QuerySet:
        """Return ``self.user``'s notifications, most recent first."""
        qs = self._base_queryset()
        if category:
            qs = qs.filter(category=category)
        if is_read is not None:
            qs = qs.filter(is_read=is_read)

        limit = max(1, min(limit, NOTIFICATIONS_MAX_LIMIT))
        offset = max(0, offset)
        return qs.order_by("-created_at", "-id")[offset:offset + limit]

    def unread_count(self) -> int:
        return self._base_queryset().filter(is_read=False).count()

    def mark_as_read(self, notification_id: Any) -> Notification:
        """Mark a single notification as read."""
        from core.models import Notification

        try:
            notification = self._base_queryset().get(pk=notification_id)
        except (Notification.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Notification {notification_id} not found.")

        if not notification.is_read:
            notification.is_read = True
            notification.read_at = timezone.now()
            notification.save(update_fields=["is_read", "read_at", "updated_at"])
        return notification

    def mark_all_as_read(self) -> int:
        """Mark every unread notification as read; return how many changed."""
        now = timezone.now()
        updated = self._base_queryset().filter(is_read=False).update(
            is_read=True,
            read_at=now,
            updated_at=now,
        )
        logger.info("User %s marked %d notification(s) as read", self.user, updated)
        return updated
