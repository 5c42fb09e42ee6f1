"""
Alerts app URL configuration.

    /api/alerts/          → list / broadcast
    /api/alerts/{id}/     → delete
"""

from rest_framework.routers import DefaultRouter

from .views import AlertViewSet

router = DefaultRouter()
router.register(
    prefix=r"alerts",
    viewset=AlertViewSet,
    basename="alert",
)

urlpatterns = router.urls
