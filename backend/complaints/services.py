"""
Complaints app service layer.

All business logic for the complaint lifecycle lives here.  Views are
thin wrappers that validate input, call a service method, and serialise
the result.

Lifecycle
---------
::

    PENDING ──► ASSIGNED ──► IN_PROGRESS ──► RESOLVED
       │                                        ▲
       └──────────────── (implicit ASSIGNED) ───┘

* Any status may be requested from any non-resolved status.
* Requesting the current status is a no-op: no history, no notification.
* RESOLVED is terminal.
* Leaving PENDING for IN_PROGRESS or RESOLVED first records an implicit
  ASSIGNED history row, so the trail always shows who took the complaint.
* Entering IN_PROGRESS or RESOLVED notifies the citizen.

Ownership
---------
At creation the location matcher (``complaints.routing``) picks an
owner from the active administrators.  If nobody could be picked the
complaint stays unassigned until an administrator whose jurisdiction
covers it acts on it (status change, note, message); that first action
*claims* it.  ``ComplaintAssignmentService.ensure_assigned`` is the one
gate every administrator action goes through.

Concurrency
-----------
Every public operation re-reads the complaint under ``select_for_update``
inside ``transaction.atomic`` and writes owner/status through
``guarded_update``.  A lost race raises ``Conflict``; the operation is
retried once from scratch (``retry_on_conflict``), which normally turns
into a clean ``NotFound`` / ``Forbidden`` for the loser.
"""

from __future__ import annotations

import logging
import random
import time
from typing import TYPE_CHECKING, Any, Iterable

from django.db import transaction
from django.db.models import Q, QuerySet

from core.constants import COMPLAINT_CODE_PREFIX, COMPLAINT_CODE_RANDOM_DIGITS
from core.domain.exceptions import (
    Forbidden,
    InvalidStatus,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from core.domain.notifications import NotificationService
from core.domain.transactions import guarded_update, lock_for_update, retry_on_conflict

from .events import assigned_event, status_change_events, submitted_event
from .models import Complaint, ComplaintNote, ComplaintStatus, ComplaintStatusLog
from .routing import jurisdiction_matches, select_administrator

if TYPE_CHECKING:
    from accounts.models import User

logger = logging.getLogger(__name__)

REQUIRED_LOCATION_FIELDS: tuple[str, ...] = ("state", "city", "area")

COMPLAINT_FIELDS: tuple[str, ...] = (
    "category",
    "description",
    "priority",
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
)


# ═══════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════


def _status_key(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch not in "_- ")


def parse_status(value: Any) -> str:
    """
    Resolve a status given by value (``in_progress``), display label
    (``In Progress``) or joined name (``InProgress``), case-insensitively.

    Raises:
        InvalidStatus: Nothing matches.
    """
    key = _status_key(str(value or "").strip())
    if key:
        for choice in ComplaintStatus:
            if key in (_status_key(choice.value), _status_key(choice.label)):
                return choice.value
    raise InvalidStatus(value=str(value))


def generate_complaint_code() -> str:
    suffix = random.randint(0, 10 ** COMPLAINT_CODE_RANDOM_DIGITS - 1)
    millis = int(time.time() * 1000)
    return f"{COMPLAINT_CODE_PREFIX}{millis}{suffix:0{COMPLAINT_CODE_RANDOM_DIGITS}d}"


def _require_administrator(user: User) -> None:
    if not getattr(user, "is_administrator", False):
        raise Forbidden("Only administrators can perform this action.")


# ═══════════════════════════════════════════════════════════════════
#  Lifecycle
# ═══════════════════════════════════════════════════════════════════


class ComplaintLifecycleService:
    """Legal status moves plus their audit trail and notifications."""

    @staticmethod
    def transition(complaint: Complaint, target_status: str, actor: User) -> Complaint:
        """
        Move ``complaint`` to ``target_status`` on behalf of ``actor``.

        ``complaint`` must be freshly read inside the caller's atomic
        block.  Returns the same instance, updated in place.

        Raises:
            InvalidTransition: ``complaint`` is already resolved.
            Conflict:          ``complaint`` changed since it was read.
        """
        current = complaint.status
        if target_status == current:
            return complaint

        if current == ComplaintStatus.RESOLVED:
            raise InvalidTransition(
                current=current,
                target=target_status,
                reason="Resolved complaints are closed.",
            )

        steps: list[tuple[str, str]] = []
        if current == ComplaintStatus.PENDING and target_status in (
            ComplaintStatus.IN_PROGRESS,
            ComplaintStatus.RESOLVED,
        ):
            steps.append((current, ComplaintStatus.ASSIGNED))
            current = ComplaintStatus.ASSIGNED
        steps.append((current, target_status))

        guarded_update(complaint, status=target_status)
        for from_status, to_status in steps:
            ComplaintStatusLog.objects.create(
                complaint=complaint,
                from_status=from_status,
                to_status=to_status,
                changed_by=actor,
            )

        events = status_change_events(complaint, target_status)
        if events:
            NotificationService.emit(events)

        logger.info(
            "Complaint %s moved to %s by %s",
            complaint.code,
            target_status,
            actor,
        )
        return complaint


# ═══════════════════════════════════════════════════════════════════
#  Assignment
# ═══════════════════════════════════════════════════════════════════


class ComplaintAssignmentService:

    @staticmethod
    def assign_on_creation(complaint: Complaint, candidates: Iterable[User]) -> User | None:
        """
        Give a brand-new complaint to the best-matching administrator.

        Uses every tier including the any-active-administrator fallback.
        Returns the chosen administrator, or ``None`` when there are no
        active administrators at all.
        """
        administrator = select_administrator(complaint, candidates)
        if administrator is None:
            logger.warning(
                "No active administrator available for complaint %s; left unassigned",
                complaint.code,
            )
            return None

        guarded_update(complaint, assigned_admin=administrator)
        ComplaintLifecycleService.transition(complaint, ComplaintStatus.ASSIGNED, administrator)
        logger.info("Complaint %s assigned to %s at creation", complaint.code, administrator)
        return administrator

    @staticmethod
    def ensure_assigned(complaint: Complaint, administrator: User) -> Complaint:
        """
        Make sure ``administrator`` owns ``complaint``, claiming it if it
        is unassigned and inside their jurisdiction.

        A claim moves a pending complaint to *Assigned* without notifying
        the citizen.  Nothing is written when the claim is refused.

        Raises:
            Forbidden: Owned by someone else, outside the jurisdiction,
                       or ``administrator`` is not an administrator.
            Conflict:  Another administrator claimed it first.
        """
        _require_administrator(administrator)

        if complaint.assigned_admin_id is not None:
            if complaint.assigned_admin_id == administrator.pk:
                return complaint
            raise Forbidden("This complaint is assigned to another administrator.")

        if not administrator.is_active or not jurisdiction_matches(administrator, complaint):
            raise Forbidden("This complaint is outside your jurisdiction.")

        guarded_update(complaint, assigned_admin=administrator)
        if complaint.status == ComplaintStatus.PENDING:
            ComplaintLifecycleService.transition(complaint, ComplaintStatus.ASSIGNED, administrator)

        logger.info("Complaint %s claimed by %s", complaint.code, administrator)
        return complaint

    @staticmethod
    def lock_for_administrator(code: str, administrator: User) -> Complaint:
        """
        Lock complaint ``code`` and make sure ``administrator`` owns it.

        Must run inside ``transaction.atomic``.  A complaint the
        administrator may not act on is reported as missing.
        """
        _require_administrator(administrator)
        complaint = lock_for_update(Complaint, code=code)
        try:
            return ComplaintAssignmentService.ensure_assigned(complaint, administrator)
        except Forbidden:
            raise NotFound(f"Complaint {code} not found.") from None


# ═══════════════════════════════════════════════════════════════════
#  Creation
# ═══════════════════════════════════════════════════════════════════


class ComplaintCreationService:

    @staticmethod
    @transaction.atomic
    def create_complaint(citizen: User, validated_data: dict[str, Any]) -> Complaint:
        """
        File a new complaint for ``citizen`` and route it.

        Steps
        -----
        1. Check required fields (description, state, city, area).
        2. Insert the complaint as *Pending* with its first history row.
        3. Queue the "submitted" notification.
        4. Pick an owner from the active administrators; on success the
           complaint becomes *Assigned* and an "assigned" notification is
           queued as well.

        Raises:
            Forbidden:       ``citizen`` is not a citizen.
            ValidationError: A required field is missing.
        """
        from accounts.services import DirectoryService

        if not getattr(citizen, "is_citizen", False):
            raise Forbidden("Only citizens can file complaints.")

        data = {field: validated_data[field] for field in COMPLAINT_FIELDS if field in validated_data}
        for field in ("description",) + REQUIRED_LOCATION_FIELDS:
            value = data.get(field)
            if isinstance(value, str):
                value = value.strip()
                data[field] = value
            if not value:
                raise ValidationError(f"'{field}' is required.")

        complaint = Complaint.objects.create(
            code=generate_complaint_code(),
            citizen=citizen,
            status=ComplaintStatus.PENDING,
            **data,
        )
        ComplaintStatusLog.objects.create(
            complaint=complaint,
            from_status="",
            to_status=ComplaintStatus.PENDING,
            changed_by=citizen,
        )
        logger.info("Complaint %s filed by %s (%s/%s)", complaint.code, citizen, complaint.city, complaint.area)

        events = [submitted_event(complaint)]
        administrator = ComplaintAssignmentService.assign_on_creation(
            complaint,
            DirectoryService.active_administrators(),
        )
        if administrator is not None:
            events.append(assigned_event(complaint))
        NotificationService.emit(events)
        return complaint


# ═══════════════════════════════════════════════════════════════════
#  Administrator workflow
# ═══════════════════════════════════════════════════════════════════


class ComplaintWorkflowService:
    """Status changes and internal notes made by administrators."""

    @staticmethod
    def update_status(code: str, administrator: User, target_status: Any) -> Complaint:
        """
        Change the status of complaint ``code``.

        Raises:
            InvalidStatus:     ``target_status`` is not a known status.
            NotFound:          No such complaint, or not visible to
                               ``administrator``.
            InvalidTransition: The complaint is resolved.
            Conflict:          Lost two races in a row.
        """
        target = parse_status(target_status)
        return retry_on_conflict(ComplaintWorkflowService._update_status, code, administrator, target)

    @staticmethod
    def _update_status(code: str, administrator: User, target: str) -> Complaint:
        complaint = ComplaintAssignmentService.lock_for_administrator(code, administrator)
        return ComplaintLifecycleService.transition(complaint, target, administrator)

    @staticmethod
    def add_note(code: str, administrator: User, text: str) -> int:
        """
        Append an internal note and return how many notes the complaint
        now has.

        Raises:
            ValidationError: ``text`` is blank.
            NotFound:        No such complaint, or not visible to
                             ``administrator``.
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Note text is required.")
        return retry_on_conflict(ComplaintWorkflowService._add_note, code, administrator, text)

    @staticmethod
    def _add_note(code: str, administrator: User, text: str) -> int:
        complaint = ComplaintAssignmentService.lock_for_administrator(code, administrator)
        ComplaintNote.objects.create(complaint=complaint, author=administrator, text=text)
        count = complaint.notes.count()
        logger.info("Note added to complaint %s by %s (%d total)", complaint.code, administrator, count)
        return count


# ═══════════════════════════════════════════════════════════════════
#  Queries
# ═══════════════════════════════════════════════════════════════════


class ComplaintQueryService:
    """Read-only access scoped to what the caller may see."""

    @staticmethod
    def is_visible(complaint: Complaint, user: User) -> bool:
        """
        Citizens see their own complaints.  Administrators see what they
        own plus unassigned complaints they could claim.
        """
        if getattr(user, "is_administrator", False):
            if complaint.assigned_admin_id is not None:
                return complaint.assigned_admin_id == user.pk
            return jurisdiction_matches(user, complaint)
        return complaint.citizen_id == user.pk

    @staticmethod
    def visible_queryset(user: User) -> QuerySet:
        qs = Complaint.objects.select_related("citizen", "assigned_admin")
        if not getattr(user, "is_administrator", False):
            return qs.filter(citizen=user)

        # Every match tier includes the city.
        city = (user.city or "").strip()
        if not city:
            return qs.filter(assigned_admin=user)

        candidates = Complaint.objects.filter(
            assigned_admin__isnull=True,
            city__iexact=city,
        ).only("pk", "state", "district", "sub_district", "city", "area")
        claimable = [c.pk for c in candidates if jurisdiction_matches(user, c)]
        return qs.filter(Q(assigned_admin=user) | Q(pk__in=claimable))

    @staticmethod
    def list_for_user(user: User, status: str | None = None) -> QuerySet:
        qs = ComplaintQueryService.visible_queryset(user)
        if status:
            qs = qs.filter(status=parse_status(status))
        return qs.order_by("-created_at", "-id")

    @staticmethod
    def get_detail(code: str, user: User) -> Complaint:
        """
        Raises:
            NotFound: Missing or not visible to ``user``.
        """
        try:
            complaint = (
                Complaint.objects
                .select_related("citizen", "assigned_admin")
                .get(code=code)
            )
        except Complaint.DoesNotExist:
            raise NotFound(f"Complaint {code} not found.")
        if not ComplaintQueryService.is_visible(complaint, user):
            raise NotFound(f"Complaint {code} not found.")
        return complaint

    @staticmethod
    def status_history(code: str, user: User) -> QuerySet:
        complaint = ComplaintQueryService.get_detail(code, user)
        return complaint.status_logs.select_related("changed_by").order_by("created_at", "id")
