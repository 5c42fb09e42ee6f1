"""
Alerts app models.

An alert is a local announcement an administrator broadcasts to every
citizen living in the administrator's city and area.  ``city`` / ``area``
are copied from the administrator at broadcast time, so a later
jurisdiction change does not move old alerts.
"""

from django.conf import settings
from django.db import models

from core.models import NotificationPriority, TimeStampedModel


class AlertCategory(models.TextChoices):
    WEATHER = "weather", "Weather"
    FIRE_DISASTER = "fire_disaster", "Fire / Disaster"
    EMERGENCY_SAFETY = "emergency_safety", "Emergency Safety"
    TRAFFIC_TRANSPORT = "traffic_transport", "Traffic / Transport"
    NATURAL_DISASTER = "natural_disaster", "Natural Disaster"
    PUBLIC_SAFETY_LAW = "public_safety_law", "Public Safety / Law"
    HEALTH_DISEASE = "health_disease", "Health / Disease"
    UTILITY_EMERGENCY = "utility_emergency", "Utility Emergency"
    COMMUNITY_AUTHORITY = "community_authority", "Community / Authority"


class Alert(TimeStampedModel):
    administrator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="alerts",
        verbose_name="Administrator",
    )
    city = models.CharField(max_length=100, verbose_name="City")
    area = models.CharField(max_length=150, verbose_name="Area")
    category = models.CharField(
        max_length=30,
        choices=AlertCategory.choices,
        verbose_name="Category",
    )
    alert_type = models.CharField(
        max_length=100,
        blank=True,
        default="",
        verbose_name="Alert Type",
        help_text="Free-form sub-type within the category, e.g. 'flood'.",
    )
    priority = models.CharField(
        max_length=10,
        choices=NotificationPriority.choices,
        default=NotificationPriority.NORMAL,
        verbose_name="Priority",
    )
    title = models.CharField(max_length=255, verbose_name="Title")
    message = models.TextField(verbose_name="Message")
    is_active = models.BooleanField(default=True, verbose_name="Active")
    expires_at = models.DateTimeField(null=True, blank=True, verbose_name="Expires At")
    notified_count = models.PositiveIntegerField(default=0, verbose_name="Residents Notified")

    class Meta:
        verbose_name = "Alert"
        verbose_name_plural = "Alerts"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["city", "area", "is_active"], name="alert_locality_idx"),
        ]

    def __str__(self):
        return f"[{self.priority}] {self.title} ({self.city}/{self.area})"
