"""
Accounts app models.

Defines the custom User model that extends Django's ``AbstractUser``.
Every user is either a **citizen** (files complaints, receives alerts for
the area they live in) or an **administrator** (owns complaints inside
their jurisdiction).  Both carry the shared location fields; for an
administrator those fields *are* the jurisdiction.
"""

from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models

from core.models import LocationFields, TimeStampedModel


class UserRole(models.TextChoices):
    CITIZEN = "citizen", "Citizen"
    ADMINISTRATOR = "administrator", "Administrator"


class User(AbstractUser, LocationFields):
    """
    Custom user model for the civic complaints platform.

    ``is_active`` doubles as the administrator availability flag: inactive
    administrators are never picked by the location matcher.
    """

    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.CITIZEN,
        db_index=True,
        verbose_name="Role",
    )
    phone_number = models.CharField(
        max_length=15,
        blank=True,
        default="",
        verbose_name="Phone Number",
    )

    class Meta:
        verbose_name = "User"
        verbose_name_plural = "Users"

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    # ── Helper predicates for role checks ────────────────────────────

    @property
    def is_citizen(self) -> bool:
        return self.role == UserRole.CITIZEN

    @property
    def is_administrator(self) -> bool:
        return self.role == UserRole.ADMINISTRATOR


class JurisdictionHistory(TimeStampedModel, LocationFields):
    """
    Snapshot of an administrator's jurisdiction taken right before it
    was replaced.  Rows are append-only.
    """

    administrator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="jurisdiction_history",
        verbose_name="Administrator",
    )

    class Meta:
        verbose_name = "Jurisdiction History Entry"
        verbose_name_plural = "Jurisdiction History"
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"{self.administrator_id}: {self.city}/{self.area} until {self.created_at:%Y-%m-%d}"
