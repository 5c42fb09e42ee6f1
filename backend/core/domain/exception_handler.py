"""
core.domain.exception_handler - turns service-layer refusals into HTTP.

Complaint, messaging and alert services raise ``core.domain.exceptions``
and never build responses themselves.  This handler is the only place
those errors meet HTTP:

    =====================  ====  ===========================================
    Exception              HTTP  Typical source
    =====================  ====  ===========================================
    Forbidden              403   citizen calling an administrator action,
                                 messaging gate closed, foreign alert
    NotFound               404   unknown complaint code, complaint owned by
                                 another administrator
    InvalidTransition      409   status change on a resolved complaint
    Conflict               409   lost the optimistic-lock race twice
    InvalidStatus          400   status name outside the lifecycle
    ValidationError        400   blank note/message, missing location
    DomainError            400   anything else from the service layer
    =====================  ====  ===========================================

Wired in through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]`` in settings.
"""

from __future__ import annotations

import logging

from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_default_handler

from core.domain.exceptions import (
    Conflict,
    DomainError,
    Forbidden,
    InvalidStatus,
    InvalidTransition,
    NotFound,
    ValidationError as DomainValidationError,
)

logger = logging.getLogger(__name__)

# Subclasses before their bases; the first isinstance hit wins.
_STATUS_MAP: tuple[tuple[type[DomainError], int], ...] = (
    (Forbidden, 403),
    (NotFound, 404),
    (InvalidTransition, 409),
    (Conflict, 409),
    (InvalidStatus, 400),
    (DomainValidationError, 400),
    (DomainError, 400),
)


def _status_for(exc: DomainError) -> int:
    for exc_class, status_code in _STATUS_MAP:
        if isinstance(exc, exc_class):
            return status_code
    return 400


def domain_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    Serializer errors, authentication failures and the like keep DRF's own
    responses.  Domain errors become ``{"detail": <message>}`` with the
    status from the table above; anything else is left for Django to
    report as a 500.
    """
    response = drf_default_handler(exc, context)
    if response is not None or not isinstance(exc, DomainError):
        return response

    status_code = _status_for(exc)
    view = context.get("view")
    logger.warning(
        "%s refused by %s (%d): %s",
        type(exc).__name__,
        type(view).__name__ if view is not None else "unknown view",
        status_code,
        exc,
    )
    return Response({"detail": str(exc)}, status=status_code)
