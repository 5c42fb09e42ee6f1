"""
Alerts app service layer.

``AlertService.broadcast`` stores the alert and fans it out as one
notification per resident citizen of the administrator's city and area
(exact, case-insensitive match).  Priority is copied verbatim; the
notification kind is ``alert_<priority>``.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any

from django.db import transaction
from django.db.models import Case, IntegerField, Q, QuerySet, Value, When
from django.utils import timezone

from core.constants import NOTIFICATION_CATEGORY_ALERT
from core.domain.exceptions import Forbidden, NotFound, ValidationError
from core.domain.notifications import NotificationEvent, NotificationService
from core.models import NotificationPriority

from .models import Alert

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

# Emergency first when citizens list their alerts.
_PRIORITY_RANK = Case(
    When(priority=NotificationPriority.EMERGENCY, then=Value(0)),
    When(priority=NotificationPriority.URGENT, then=Value(1)),
    default=Value(2),
    output_field=IntegerField(),
)


class AlertService:

    @staticmethod
    @transaction.atomic
    def broadcast(
        administrator: User,
        *,
        category: str,
        priority: str,
        title: str,
        body: str,
        alert_type: str = "",
        expires_at: datetime | None = None,
    ) -> Alert:
        """
        Publish an alert to the residents of ``administrator``'s area.

        The returned alert carries ``notified_count``.

        Raises:
            Forbidden:       ``administrator`` is not an administrator.
            ValidationError: Blank title/body, or the administrator has
                             no city/area to broadcast to.
        """
        from accounts.services import DirectoryService

        if not getattr(administrator, "is_administrator", False):
            raise Forbidden("Only administrators can broadcast alerts.")

        title = (title or "").strip()
        body = (body or "").strip()
        if not title or not body:
            raise ValidationError("Alert title and message are required.")

        city = (administrator.city or "").strip()
        area = (administrator.area or "").strip()
        if not city or not area:
            raise ValidationError("Set your city and area before broadcasting alerts.")

        alert = Alert.objects.create(
            administrator=administrator,
            city=city,
            area=area,
            category=category,
            alert_type=alert_type or "",
            priority=priority,
            title=title,
            message=body,
            expires_at=expires_at,
        )

        residents = DirectoryService.residents_in(city, area).values_list("pk", flat=True)
        events = [
            NotificationEvent(
                recipient_id=resident_id,
                kind=f"alert_{priority}",
                title=title,
                message=body,
                category=NOTIFICATION_CATEGORY_ALERT,
                priority=priority,
                related_type="alert",
                related_id=alert.pk,
            )
            for resident_id in residents
        ]
        if events:
            NotificationService.emit(events)

        alert.notified_count = len(events)
        alert.save(update_fields=["notified_count", "updated_at"])

        logger.info(
            "Alert %s [%s] broadcast by %s to %d resident(s) of %s/%s",
            alert.pk,
            priority,
            administrator,
            len(events),
            city,
            area,
        )
        return alert

    @staticmethod
    def list_for_user(user: User) -> QuerySet:
        """
        Administrators see every alert they published.  Citizens see the
        active, unexpired alerts for their own city and area.
        """
        if getattr(user, "is_administrator", False):
            return Alert.objects.filter(administrator=user).order_by("-created_at", "-id")

        city = (user.city or "").strip()
        area = (user.area or "").strip()
        if not city or not area:
            return Alert.objects.none()

        now = timezone.now()
        return (
            Alert.objects
            .filter(is_active=True, city__iexact=city, area__iexact=area)
            .filter(Q(expires_at__isnull=True) | Q(expires_at__gt=now))
            .annotate(priority_rank=_PRIORITY_RANK)
            .order_by("priority_rank", "-created_at", "-id")
        )

    @staticmethod
    def delete_alert(alert_id: Any, administrator: User) -> None:
        """
        Raises:
            NotFound:  No such alert.
            Forbidden: The alert belongs to someone else.
        """
        try:
            alert = Alert.objects.get(pk=alert_id)
        except (Alert.DoesNotExist, ValueError, TypeError):
            raise NotFound(f"Alert {alert_id} not found.")
        if alert.administrator_id != administrator.pk:
            raise Forbidden("You can only delete your own alerts.")
        alert.delete()
        logger.info("Alert %s deleted by %s", alert_id, administrator)
