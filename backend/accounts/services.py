"""
Accounts Service Layer.

This module is the **single source of truth** for all business logic
within the ``accounts`` app.  Views must remain *thin*: they validate
input through serializers, call a service method, and return the result
wrapped in a DRF ``Response``.

Architecture
------------
- ``UserRegistrationService``  - citizen sign-up.
- ``DirectoryService``         - read-only lookups other apps consume:
                                 active administrators and residents.
- ``JurisdictionService``      - administrator jurisdiction changes,
                                 with history.
- ``CurrentUserService``       - "Me" endpoint helpers.
"""

from __future__ import annotations

import logging
from typing import Any

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from core.domain.exceptions import Forbidden, ValidationError

from .models import JurisdictionHistory, UserRole

User = get_user_model()
logger = logging.getLogger(__name__)

LOCATION_FIELDS: tuple[str, ...] = (
    "state",
    "district",
    "sub_district",
    "city",
    "area",
    "postal_code",
)


# ═══════════════════════════════════════════════════════════════════
#  Registration Service
# ═══════════════════════════════════════════════════════════════════


class UserRegistrationService:
    """Creates citizen accounts.  Administrators are provisioned by staff."""

    @staticmethod
    @transaction.atomic
    def register_user(validated_data: dict[str, Any]) -> User:
        """
        Create a citizen.  ``password`` is hashed by ``create_user``;
        ``password_confirm`` has already been consumed by the serializer.
        """
        data = dict(validated_data)
        data.pop("password_confirm", None)
        password = data.pop("password")
        data["role"] = UserRole.CITIZEN

        user = User.objects.create_user(password=password, **data)
        logger.info("Registered citizen %s (%s/%s)", user.username, user.city, user.area)
        return user


# ═══════════════════════════════════════════════════════════════════
#  Directory Service
# ═══════════════════════════════════════════════════════════════════


class DirectoryService:
    """
    Read-only lookups over users that the complaint engine and the alert
    broadcaster depend on.  Nothing here mutates state.
    """

    @staticmethod
    def active_administrators() -> list[User]:
        """Snapshot of every active administrator, ordered by primary key."""
        return list(
            User.objects
            .filter(role=UserRole.ADMINISTRATOR, is_active=True)
            .order_by("pk")
        )

    @staticmethod
    def residents_in(city: str, area: str) -> QuerySet:
        """
        Active citizens whose profile city and area equal ``city`` /
        ``area`` case-insensitively.  Blank inputs match nobody.
        """
        city = (city or "").strip()
        area = (area or "").strip()
        if not city or not area:
            return User.objects.none()
        return (
            User.objects
            .filter(
                role=UserRole.CITIZEN,
                is_active=True,
                city__iexact=city,
                area__iexact=area,
            )
            .order_by("pk")
        )


# ═══════════════════════════════════════════════════════════════════
#  Jurisdiction Service
# ═══════════════════════════════════════════════════════════════════


class JurisdictionService:

    @staticmethod
    @transaction.atomic
    def update_jurisdiction(administrator: User, validated_data: dict[str, Any]) -> User:
        """
        Replace an administrator's jurisdiction.

        The previous jurisdiction is archived as a ``JurisdictionHistory``
        row before the new values are written.  Complaints already owned
        by the administrator keep their owner.

        Raises:
            Forbidden:       ``administrator`` is not an administrator.
            ValidationError: The new jurisdiction has no city or area.
        """
        if not administrator.is_administrator:
            raise Forbidden("Only administrators have a jurisdiction.")

        changes = {
            field: validated_data.get(field, getattr(administrator, field))
            for field in LOCATION_FIELDS
        }
        if not changes["city"] or not changes["area"]:
            raise ValidationError("A jurisdiction needs at least a city and an area.")

        JurisdictionHistory.objects.create(
            administrator=administrator,
            **{field: getattr(administrator, field) for field in LOCATION_FIELDS},
        )
        for field, value in changes.items():
            setattr(administrator, field, value)
        administrator.save(update_fields=list(LOCATION_FIELDS))

        logger.info(
            "Administrator %s jurisdiction moved to %s/%s",
            administrator.username,
            administrator.city,
            administrator.area,
        )
        return administrator

    @staticmethod
    def history(administrator: User) -> QuerySet:
        return JurisdictionHistory.objects.filter(administrator=administrator)


# ═══════════════════════════════════════════════════════════════════
#  Current User Service
# ═══════════════════════════════════════════════════════════════════


class CurrentUserService:

    @staticmethod
    def get_profile(user: User) -> User:
        return user

    @staticmethod
    def update_profile(user: User, validated_data: dict[str, Any]) -> User:
        """
        Update contact and address fields of the caller's own profile.

        Administrators must use ``JurisdictionService`` for location
        changes so that history is recorded; location keys are ignored
        here for them.
        """
        allowed = {"first_name", "last_name", "email", "phone_number"}
        if user.is_citizen:
            allowed |= set(LOCATION_FIELDS)

        update_fields = []
        for field, value in validated_data.items():
            if field in allowed:
                setattr(user, field, value)
                update_fields.append(field)
        if update_fields:
            user.save(update_fields=update_fields)
        return user
