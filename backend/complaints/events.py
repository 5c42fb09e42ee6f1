"""
complaints.events - Which lifecycle moments tell the citizen something.

Only four moments notify: submission, creation-time assignment, and
entering *In Progress* or *Resolved*.  Lazy claims and explicit moves
back to *Assigned* stay silent.
"""

from __future__ import annotations

from core.constants import NOTIFICATION_CATEGORY_COMPLAINT
from core.domain.notifications import NotificationEvent, NotificationService

from .models import Complaint, ComplaintStatus

STATUS_EVENT_TYPES: dict[str, str] = {
    ComplaintStatus.IN_PROGRESS: "complaint_in_progress",
    ComplaintStatus.RESOLVED: "complaint_resolved",
}


def _citizen_event(complaint: Complaint, event_type: str, status: str) -> NotificationEvent:
    return NotificationService.build(
        event_type,
        recipient_id=complaint.citizen_id,
        context={
            "code": complaint.code,
            "status": ComplaintStatus(status).label,
        },
        category=NOTIFICATION_CATEGORY_COMPLAINT,
        related_type="complaint",
        related_id=complaint.pk,
    )


def submitted_event(complaint: Complaint) -> NotificationEvent:
    return _citizen_event(complaint, "complaint_submitted", ComplaintStatus.PENDING)


def assigned_event(complaint: Complaint) -> NotificationEvent:
    return _citizen_event(complaint, "complaint_assigned", ComplaintStatus.ASSIGNED)


def status_change_events(complaint: Complaint, target_status: str) -> list[NotificationEvent]:
    """Events for a transition into ``target_status`` (possibly none)."""
    event_type = STATUS_EVENT_TYPES.get(target_status)
    if event_type is None:
        return []
    return [_citizen_event(complaint, event_type, target_status)]
