"""
Messaging app URL configuration.

Threads hang off complaints, so they are registered on a nested router
built on top of ``complaints.urls.router``:

    /api/complaints/{complaint_code}/messages/   → read / post
    /api/messages/unread-counts/                 → unread counters

Then in the top-level ``backend/urls.py``::

    path("api/", include("messaging.urls")),
"""

from django.urls import path
from rest_framework_nested import routers as nested_routers

from complaints.urls import router as complaints_router

from .views import ComplaintMessageViewSet, UnreadCountsView

# ── Nested router: messages ──────────────────────────────────────────────────
# Parent lookup kwarg → complaint_code (ComplaintViewSet.lookup_field = "code")
messages_router = nested_routers.NestedSimpleRouter(
    parent_router=complaints_router,
    parent_prefix=r"complaints",
    lookup="complaint",
)
messages_router.register(
    prefix=r"messages",
    viewset=ComplaintMessageViewSet,
    basename="complaint-message",
)

urlpatterns = [
    path("messages/unread-counts/", UnreadCountsView.as_view(), name="message-unread-counts"),
    *messages_router.urls,
]
