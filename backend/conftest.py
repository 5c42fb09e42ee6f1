"""
Root conftest.py - shared pytest fixtures.

Provides:
  - ``api_client``:    an unauthenticated DRF ``APIClient``.
  - ``create_user``:   factory for citizens (the default) and administrators,
                       with location fields passed straight through.
  - ``create_admin``:  ``create_user`` preset to the administrator role.
  - ``authenticate``:  puts a JWT bearer token for a user on ``api_client``.

Class-based ``TestCase`` suites build their data in ``setUpTestData``
instead; these fixtures serve the function-style pytest tests.
"""

from __future__ import annotations

import itertools

import pytest
from rest_framework.test import APIClient


@pytest.fixture()
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture()
def create_user(db):
    """
    Usage::

        def test_something(create_user):
            citizen = create_user(city="Austin", area="Downtown")
            admin = create_user(role="administrator", state="TX", city="Austin")
    """
    from accounts.models import User, UserRole

    counter = itertools.count(1)

    def _factory(
        *,
        username: str | None = None,
        password: str = "TestPass123!",
        role: str = UserRole.CITIZEN,
        **fields,
    ) -> User:
        if username is None:
            username = f"{role}{next(counter)}"
        fields.setdefault("email", f"{username}@city.test")
        return User.objects.create_user(
            username=username,
            password=password,
            role=role,
            **fields,
        )

    return _factory


@pytest.fixture()
def create_admin(create_user):
    from accounts.models import UserRole

    def _factory(**fields):
        return create_user(role=UserRole.ADMINISTRATOR, **fields)

    return _factory


@pytest.fixture()
def authenticate(api_client):
    """
    ``authenticate(user)`` logs ``api_client`` in as ``user`` and returns
    the client::

        def test_me(create_user, authenticate):
            client = authenticate(create_user())
            assert client.get("/api/accounts/me/").status_code == 200
    """
    from rest_framework_simplejwt.tokens import AccessToken

    def _login(user) -> APIClient:
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
        return api_client

    return _login
