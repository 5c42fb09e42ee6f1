"""
core.domain.notifications - Notification event building and dispatch.

Centralises notification creation so every app uses one consistent
entry-point rather than directly constructing ``Notification`` objects.

Design decisions
----------------
* **Events first** - services describe *what* should be said as
  ``NotificationEvent`` values.  Persisting them is the dispatcher's job.
* **Dispatched after commit** - ``NotificationService.emit`` schedules
  delivery with ``transaction.on_commit`` so a rolled-back mutation never
  notifies anybody, and a delivery failure never rolls back a mutation.
  Failures are logged and dropped.
* **One row per recipient** - a broadcast becomes N events, persisted
  with a single ``bulk_create``.

Usage::

    from core.domain.notifications import NotificationService

    event = NotificationService.build(
        "complaint_resolved",
        recipient_id=complaint.citizen_id,
        context={"code": complaint.code, "status": "Resolved"},
        related_type="complaint",
        related_id=complaint.pk,
    )
    NotificationService.emit([event])
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Iterable

from django.db import transaction

logger = logging.getLogger(__name__)

# ── Event-type → human-readable templates ───────────────────────────
# Templates are ``str.format`` strings interpolated with the event context.
_EVENT_TEMPLATES: dict[str, tuple[str, str]] = {
    # event_type: (title_template, message_template)
    "complaint_submitted":   ("Complaint Submitted",   "Your complaint {code} has been submitted successfully. Status: {status}"),
    "complaint_assigned":    ("Complaint Assigned",    "Your complaint {code} has been assigned to an admin. Status: {status}"),
    "complaint_in_progress": ("Complaint In Progress", "Your complaint {code} is now being worked on. Status: {status}"),
    "complaint_resolved":    ("Complaint Resolved",    "Your complaint {code} has been resolved. Status: {status}"),
}


@dataclass(frozen=True)
class NotificationEvent:
    """A single notification addressed to one recipient."""

    recipient_id: int
    kind: str
    title: str
    message: str
    category: str = "complaint"
    priority: str = "normal"
    related_type: str = ""
    related_id: int | None = None


class NotificationService:
    """
    Stateless helper for building and dispatching notifications.

    All methods are classmethods - no instance state is needed.
    """

    @classmethod
    def build(
        cls,
        event_type: str,
        *,
        recipient_id: int,
        context: dict[str, Any] | None = None,
        category: str = "complaint",
        priority: str = "normal",
        related_type: str = "",
        related_id: int | None = None,
    ) -> NotificationEvent:
        """
        Render ``event_type``'s template into a ``NotificationEvent``.

        Unknown event types fall back to a title derived from the key.
        """
        title, message = _EVENT_TEMPLATES.get(
            event_type,
            (event_type.replace("_", " ").title(), f"Event: {event_type}"),
        )
        context = context or {}
        return NotificationEvent(
            recipient_id=recipient_id,
            kind=event_type,
            title=title.format(**context),
            message=message.format(**context),
            category=category,
            priority=priority,
            related_type=related_type,
            related_id=related_id,
        )

    @classmethod
    def emit(cls, events: Iterable[NotificationEvent]) -> int:
        """
        Schedule delivery of ``events`` once the current transaction
        commits (immediately when no transaction is open).

        Returns:
            The number of events scheduled.
        """
        events = list(events)
        if not events:
            logger.warning("NotificationService.emit called with no events")
            return 0

        transaction.on_commit(lambda: cls._deliver(events))
        return len(events)

    @classmethod
    def _deliver(cls, events: list[NotificationEvent]) -> None:
        from core.models import Notification  # lazy import - avoids circular deps

        try:
            Notification.objects.bulk_create(
                [Notification(**asdict(event)) for event in events]
            )
        except Exception:
            # Notification delivery never fails the originating operation.
            logger.exception(
                "Failed to deliver %d notification(s) [%s]",
                len(events),
                ", ".join(sorted({e.kind for e in events})),
            )
            return

        logger.info(
            "Delivered %d notification(s) [%s]",
            len(events),
            ", ".join(sorted({e.kind for e in events})),
        )
