"""
Complaints app URL configuration.

Route Hierarchy
---------------
  /api/complaints/                         → list / create
  /api/complaints/{code}/                  → retrieve

  ── Workflow @actions ──────────────────────────────────────────
  POST /api/complaints/{code}/status/      → administrator changes status
  POST /api/complaints/{code}/notes/       → administrator adds internal note
  GET  /api/complaints/{code}/history/     → status audit trail

  ── Nested (drf-nested-routers, see ``messaging.urls``) ────────
  GET/POST /api/complaints/{complaint_code}/messages/
"""

from rest_framework.routers import DefaultRouter

from .views import ComplaintViewSet

router = DefaultRouter()
router.register(
    prefix=r"complaints",
    viewset=ComplaintViewSet,
    basename="complaint",
)

urlpatterns = router.urls
