"""
Complaints app models.

A complaint is filed by a citizen, routed to exactly one administrator
(its *owner*) and driven through a four-step status lifecycle.  Every
status change leaves an immutable ``ComplaintStatusLog`` row; internal
notes are kept in ``ComplaintNote``.  Nothing here is ever deleted by the
application.
"""

from django.conf import settings
from django.db import models

from core.models import LocationFields, TimeStampedModel


class ComplaintStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ASSIGNED = "assigned", "Assigned"
    IN_PROGRESS = "in_progress", "In Progress"
    RESOLVED = "resolved", "Resolved"


class ComplaintCategory(models.TextChoices):
    GARBAGE = "garbage", "Garbage"
    WATER = "water", "Water"
    POWER = "power", "Power"
    ROAD = "road", "Road"
    DRAINAGE = "drainage", "Drainage"
    STREETLIGHT = "streetlight", "Streetlight"
    OTHER = "other", "Other"


class ComplaintPriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"


class Complaint(TimeStampedModel, LocationFields):
    """
    A citizen-reported municipal issue.

    ``code`` is the public reference shown to citizens; the numeric PK is
    internal.  ``assigned_admin`` and ``status`` are only written through
    ``core.domain.transactions.guarded_update``, which bumps ``version``
    so that two administrators racing for the same complaint cannot both
    win.
    """

    code = models.CharField(
        max_length=32,
        unique=True,
        editable=False,
        verbose_name="Complaint Code",
    )
    citizen = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="complaints",
        verbose_name="Citizen",
    )
    category = models.CharField(
        max_length=20,
        choices=ComplaintCategory.choices,
        verbose_name="Category",
    )
    description = models.TextField(verbose_name="Description")
    priority = models.CharField(
        max_length=10,
        choices=ComplaintPriority.choices,
        default=ComplaintPriority.MEDIUM,
        verbose_name="Priority",
    )
    status = models.CharField(
        max_length=20,
        choices=ComplaintStatus.choices,
        default=ComplaintStatus.PENDING,
        db_index=True,
        verbose_name="Status",
    )
    assigned_admin = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="assigned_complaints",
        verbose_name="Assigned Administrator",
    )
    version = models.PositiveIntegerField(default=0, verbose_name="Version")

    # ── Address detail (not used for routing) ───────────────────────
    full_address = models.TextField(blank=True, default="", verbose_name="Full Address")
    house_number = models.CharField(max_length=30, blank=True, default="", verbose_name="House Number")
    street_number = models.CharField(max_length=30, blank=True, default="", verbose_name="Street Number")
    landmark = models.CharField(max_length=150, blank=True, default="", verbose_name="Landmark")
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True, verbose_name="Latitude")
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True, verbose_name="Longitude")

    class Meta:
        verbose_name = "Complaint"
        verbose_name_plural = "Complaints"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["assigned_admin", "status"], name="complaint_owner_status_idx"),
        ]

    def __str__(self):
        return f"{self.code} [{self.get_status_display()}]"


class ComplaintStatusLog(TimeStampedModel):
    """
    Immutable audit trail of every status a complaint has held.

    The first row (written at creation) has an empty ``from_status``.
    The latest row's ``to_status`` always equals the complaint's status.
    """

    complaint = models.ForeignKey(
        Complaint,
        on_delete=models.CASCADE,
        related_name="status_logs",
        verbose_name="Complaint",
    )
    from_status = models.CharField(
        max_length=20,
        choices=ComplaintStatus.choices,
        blank=True,
        default="",
        verbose_name="Previous Status",
    )
    to_status = models.CharField(
        max_length=20,
        choices=ComplaintStatus.choices,
        verbose_name="New Status",
    )
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="complaint_status_changes",
        verbose_name="Changed By",
    )

    class Meta:
        verbose_name = "Complaint Status Log"
        verbose_name_plural = "Complaint Status Logs"
        ordering = ["created_at", "id"]

    def __str__(self):
        return (
            f"Complaint #{self.complaint_id}: "
            f"{self.from_status or '-'} → {self.to_status}"
        )


class ComplaintNote(TimeStampedModel):
    """Administrator-only working note attached to a complaint."""

    complaint = models.ForeignKey(
        Complaint,
        on_delete=models.CASCADE,
        related_name="notes",
        verbose_name="Complaint",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="complaint_notes",
        verbose_name="Author",
    )
    text = models.TextField(verbose_name="Note")

    class Meta:
        verbose_name = "Complaint Note"
        verbose_name_plural = "Complaint Notes"
        ordering = ["created_at", "id"]

    def __str__(self):
        return f"Note on #{self.complaint_id} by {self.author_id}"
