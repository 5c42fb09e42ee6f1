"""
Accounts app URL configuration.

All routes are namespaced under ``accounts`` and included in the
project-level ``urls.py`` as::

    path('api/accounts/', include('accounts.urls')),

Endpoint Map
------------
Authentication
    POST   /register/                   → RegisterView
    POST   /token/                      → TokenObtainPairView (SimpleJWT)
    POST   /token/refresh/              → TokenRefreshView (SimpleJWT)

Current User Profile ("Me")
    GET    /me/                         → MeView  (retrieve)
    PATCH  /me/                         → MeView  (partial update)

Administrator Jurisdiction
    GET    /jurisdiction/               → JurisdictionView (history)
    PATCH  /jurisdiction/               → JurisdictionView (update)
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from .views import JurisdictionView, MeView, RegisterView

app_name = "accounts"

urlpatterns = [
    # ── Authentication ───────────────────────────────────────────────
    path("register/", RegisterView.as_view(), name="register"),
    path("token/", TokenObtainPairView.as_view(), name="token-obtain"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),

    # ── Profile ──────────────────────────────────────────────────────
    path("me/", MeView.as_view(), name="me"),
    path("jurisdiction/", JurisdictionView.as_view(), name="jurisdiction"),
]
