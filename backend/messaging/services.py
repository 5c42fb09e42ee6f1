"""
Messaging app service layer.

Who may talk on a complaint's thread depends on its lifecycle:

* The **citizen** may read their own complaint's thread at any time, and
  post once an administrator owns it and it is Assigned, In Progress or
  Resolved.
* The **administrator** may read and post only on complaints they own in
  one of those statuses.  Opening or posting on an unassigned complaint
  inside their jurisdiction claims it first.

Reading a thread marks everything the *other* side wrote as seen, in one
batch with a single timestamp.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db.models import Count
from django.utils import timezone

from accounts.models import UserRole
from complaints.models import Complaint, ComplaintStatus
from complaints.services import ComplaintAssignmentService, ComplaintQueryService
from core.domain.exceptions import Forbidden, ValidationError
from core.domain.transactions import lock_for_update, retry_on_conflict

from .models import Message

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

MESSAGING_STATUSES: frozenset[str] = frozenset({
    ComplaintStatus.ASSIGNED,
    ComplaintStatus.IN_PROGRESS,
    ComplaintStatus.RESOLVED,
})


class MessageGate:
    """Pure yes/no answers; no claims, no writes."""

    @staticmethod
    def can_post(complaint: Complaint, actor: User) -> bool:
        if actor.is_citizen:
            return (
                complaint.citizen_id == actor.pk
                and complaint.assigned_admin_id is not None
                and complaint.status in MESSAGING_STATUSES
            )
        if actor.is_administrator:
            return (
                complaint.assigned_admin_id == actor.pk
                and complaint.status in MESSAGING_STATUSES
            )
        return False

    @staticmethod
    def can_read(complaint: Complaint, actor: User) -> bool:
        if actor.is_citizen:
            return complaint.citizen_id == actor.pk
        return MessageGate.can_post(complaint, actor)


class MessagingService:

    @staticmethod
    def _check_role(actor: User, actor_role: str) -> None:
        if actor_role != actor.role:
            raise Forbidden(f"You cannot act as {actor_role}.")

    @staticmethod
    def _open(code: str, actor: User) -> Complaint:
        complaint = lock_for_update(Complaint, code=code)
        if actor.is_administrator:
            ComplaintAssignmentService.ensure_assigned(complaint, actor)
        return complaint

    # ── Posting ──────────────────────────────────────────────────────

    @staticmethod
    def send_message(code: str, actor: User, actor_role: str, text: str) -> Message:
        """
        Post ``text`` on complaint ``code``'s thread.

        Raises:
            ValidationError: ``text`` is blank.
            NotFound:        No such complaint.
            Forbidden:       ``actor`` may not post here (including an
                             administrator outside the jurisdiction, or a
                             citizen whose complaint has no owner yet).
        """
        MessagingService._check_role(actor, actor_role)
        text = (text or "").strip()
        if not text:
            raise ValidationError("Message text is required.")
        return retry_on_conflict(MessagingService._send, code, actor, text)

    @staticmethod
    def _send(code: str, actor: User, text: str) -> Message:
        complaint = MessagingService._open(code, actor)
        if not MessageGate.can_post(complaint, actor):
            raise Forbidden("Messaging is not available for this complaint.")

        message = Message.objects.create(
            complaint=complaint,
            sender=actor,
            sender_role=actor.role,
            body=text,
        )
        logger.info("Message %s posted on %s by %s", message.pk, complaint.code, actor)
        return message

    # ── Reading ──────────────────────────────────────────────────────

    @staticmethod
    def read_thread(code: str, actor: User, actor_role: str) -> list[Message]:
        """
        Return the whole thread, oldest first, after marking the other
        side's unseen messages as seen.

        Raises:
            NotFound:  No such complaint.
            Forbidden: ``actor`` may not read this thread.
        """
        MessagingService._check_role(actor, actor_role)
        return retry_on_conflict(MessagingService._read, code, actor)

    @staticmethod
    def _read(code: str, actor: User) -> list[Message]:
        complaint = MessagingService._open(code, actor)
        if not MessageGate.can_read(complaint, actor):
            raise Forbidden("You cannot read messages for this complaint.")

        marked = (
            complaint.messages
            .filter(is_seen=False)
            .exclude(sender_role=actor.role)
            .update(is_seen=True, seen_at=timezone.now())
        )
        if marked:
            logger.info("%d message(s) on %s marked seen by %s", marked, complaint.code, actor)

        return list(complaint.messages.select_related("sender").order_by("created_at", "id"))

    # ── Counters ─────────────────────────────────────────────────────

    @staticmethod
    def unread_counts(actor: User) -> dict[str, int]:
        """
        ``{complaint code: unseen messages from the other side}`` over the
        complaints ``actor`` can see.  Complaints with nothing unread are
        omitted.
        """
        other_side = (
            UserRole.ADMINISTRATOR if actor.is_citizen else UserRole.CITIZEN
        )
        visible = ComplaintQueryService.visible_queryset(actor)
        rows = (
            Message.objects
            .filter(complaint__in=visible, is_seen=False, sender_role=other_side)
            .values("complaint__code")
            .annotate(unread=Count("id"))
        )
        return {row["complaint__code"]: row["unread"] for row in rows}
