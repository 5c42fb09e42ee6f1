"""
Core app models.

Provides abstract base models and shared utilities used across the project.
"""

from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    """
    Abstract base model that provides self-updating ``created_at`` and
    ``updated_at`` timestamp fields for every concrete child model.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name="Created At",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name="Updated At",
    )

    class Meta:
        abstract = True


class LocationFields(models.Model):
    """
    Abstract set of administrative-region fields.

    Shared by complaints (where the issue is), administrators (their
    jurisdiction) and citizens (where they live).  The field names are
    the ones the location matcher in ``complaints.routing`` reads.
    """

    state = models.CharField(max_length=100, blank=True, default="", verbose_name="State")
    district = models.CharField(max_length=100, blank=True, default="", verbose_name="District")
    sub_district = models.CharField(
        max_length=100,
        blank=True,
        default="",
        verbose_name="Sub-district",
        help_text="Mandal / tehsil / block.",
    )
    city = models.CharField(max_length=100, blank=True, default="", verbose_name="City")
    area = models.CharField(max_length=150, blank=True, default="", verbose_name="Area")
    postal_code = models.CharField(max_length=12, blank=True, default="", verbose_name="Postal Code")

    class Meta:
        abstract = True


class NotificationPriority(models.TextChoices):
    NORMAL = "normal", "Normal"
    URGENT = "urgent", "Urgent"
    EMERGENCY = "emergency", "Emergency"


class Notification(TimeStampedModel):
    """
    System notification delivered to a user about their complaint's
    lifecycle or a local alert broadcast.

    ``related_type`` / ``related_id`` point at the object that triggered
    the notification (e.g. ``("complaint", 17)``) without a hard FK, so
    notifications outlive whatever produced them.
    """

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        verbose_name="Recipient",
    )
    kind = models.CharField(
        max_length=50,
        verbose_name="Kind",
        help_text="Event type, e.g. complaint_resolved or alert_urgent.",
    )
    category = models.CharField(max_length=30, default="complaint", verbose_name="Category")
    priority = models.CharField(
        max_length=10,
        choices=NotificationPriority.choices,
        default=NotificationPriority.NORMAL,
        verbose_name="Priority",
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    message = models.TextField(verbose_name="Message")
    related_type = models.CharField(max_length=30, blank=True, default="", verbose_name="Related Type")
    related_id = models.PositiveBigIntegerField(null=True, blank=True, verbose_name="Related Object ID")
    is_read = models.BooleanField(default=False, verbose_name="Read")
    read_at = models.DateTimeField(null=True, blank=True, verbose_name="Read At")

    class Meta:
        verbose_name = "Notification"
        verbose_name_plural = "Notifications"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notification_inbox_idx"),
        ]

    def __str__(self):
        return f"[{self.recipient}] {self.title}"
