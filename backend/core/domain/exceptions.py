"""
core.domain.exceptions - Domain-specific exception hierarchy.

These exceptions represent business-rule violations inside service layers.
They are deliberately **not** DRF exceptions so that the domain layer stays
framework-agnostic.  The global DRF exception handler in
``core.domain.exception_handler`` maps them to HTTP responses.

Mapping cheatsheet
------------------
┌─────────────────────┬──────┐
│ Domain Exception    │ Code │
├─────────────────────┼──────┤
│ DomainError         │ 400  │
│ ValidationError     │ 400  │
│ InvalidStatus       │ 400  │
│ Forbidden           │ 403  │
│ NotFound            │ 404  │
│ Conflict            │ 409  │
│ InvalidTransition   │ 409  │
└─────────────────────┴──────┘

Recommended usage inside a service::

    from core.domain.exceptions import Forbidden

    if complaint.assigned_admin_id not in (None, admin.pk):
        raise Forbidden("Complaint is owned by another administrator.")
"""

from __future__ import annotations


class DomainError(Exception):
    """
    Base class for all domain / business-rule errors.

    Catch this at the view boundary and convert to a 400 Bad Request.
    """

    def __init__(self, message: str = "A business rule was violated.") -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(DomainError):
    """
    Input failed a business-level check (missing description, empty note,
    incomplete location).  Maps to HTTP 400.
    """

    def __init__(self, message: str = "The submitted data is invalid.") -> None:
        super().__init__(message)


class InvalidStatus(DomainError):
    """Unknown complaint status requested.  Maps to HTTP 400."""

    def __init__(self, message: str | None = None, *, value: str | None = None) -> None:
        if message is None:
            message = f"Unknown complaint status '{value}'." if value else "Unknown complaint status."
        super().__init__(message)
        self.value = value


class Forbidden(DomainError):
    """
    The actor may not perform this operation on the resource: wrong role,
    someone else's complaint, or a claim outside the administrator's
    jurisdiction.

    Maps to HTTP 403.
    """

    def __init__(self, message: str = "You do not have permission to perform this action.") -> None:
        super().__init__(message)


class NotFound(DomainError):
    """
    The requested resource does not exist (or is not visible to the
    requesting user).

    Maps to HTTP 404.
    """

    def __init__(self, message: str = "The requested resource was not found.") -> None:
        super().__init__(message)


class Conflict(DomainError):
    """
    The operation conflicts with the current state of the resource.

    Raised on optimistic-lock failure: the record changed between read
    and guarded write.  Maps to HTTP 409.
    """

    def __init__(self, message: str = "The operation conflicts with the current state.") -> None:
        super().__init__(message)


class InvalidTransition(Conflict):
    """
    A state-machine transition that is not allowed from the current status.

    Maps to HTTP 409.

    Example::

        raise InvalidTransition(
            current="resolved",
            target="in_progress",
            reason="Resolved complaints are closed.",
        )
    """

    def __init__(
        self,
        message: str | None = None,
        *,
        current: str | None = None,
        target: str | None = None,
        reason: str | None = None,
    ) -> None:
        if message is None:
            parts = ["Invalid state transition"]
            if current and target:
                parts.append(f"from '{current}' to '{target}'")
            message = " ".join(parts) + "."
            if reason:
                message = f"{message} {reason}"
        super().__init__(message)
        self.current = current
        self.target = target
        self.reason = reason
