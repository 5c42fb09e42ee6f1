"""
Unit tests for ``core.domain.exception_handler``.
"""

from __future__ import annotations

from unittest import mock

import pytest
from rest_framework import exceptions as drf_exceptions

from core.domain.exception_handler import domain_exception_handler
from core.domain.exceptions import (
    Conflict,
    DomainError,
    Forbidden,
    InvalidStatus,
    InvalidTransition,
    NotFound,
    ValidationError,
)


@pytest.mark.parametrize("exc,expected_status", [
    (Forbidden("no"), 403),
    (NotFound("gone"), 404),
    (Conflict("race"), 409),
    (InvalidTransition(current="resolved", target="assigned"), 409),
    (InvalidStatus(value="closed"), 400),
    (ValidationError("'city' is required."), 400),
    (DomainError("generic"), 400),
])
def test_domain_exceptions_map_to_status(exc, expected_status):
    response = domain_exception_handler(exc, {"view": None})
    assert response is not None
    assert response.status_code == expected_status
    assert response.data == {"detail": str(exc)}


def test_drf_exceptions_use_default_handler():
    response = domain_exception_handler(drf_exceptions.NotAuthenticated(), {"view": None})
    assert response.status_code == 401


def test_unknown_exceptions_are_left_alone():
    assert domain_exception_handler(RuntimeError("boom"), {"view": None}) is None


def test_refusal_is_logged_with_view_name():
    class ComplaintViewSet:
        pass

    with mock.patch("core.domain.exception_handler.logger") as logger:
        domain_exception_handler(NotFound("Complaint URB1 not found."), {"view": ComplaintViewSet()})

    args = logger.warning.call_args.args
    assert args[1:4] == ("NotFound", "ComplaintViewSet", 404)
