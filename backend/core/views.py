"""
Core app views - **Thin Views**.

Each view delegates all business logic to the corresponding service in
``core.services``.  Views are responsible only for:

1. Extracting and validating query parameters from the request.
2. Calling the service with the authenticated user and parameters.
3. Serialising the result and returning an HTTP ``Response``.
"""

from __future__ import annotations

from drf_spectacular.utils import (
    OpenApiParameter,
    OpenApiResponse,
    extend_schema,
)
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import (
    MarkAllReadSerializer,
    NotificationFilterSerializer,
    NotificationListSerializer,
    NotificationSerializer,
)
from .services import NotificationService


class NotificationViewSet(viewsets.ViewSet):
    """
    **Notification API** - inbox for the authenticated user.

    Endpoints
    ---------
    GET  /api/core/notifications/              → list notifications (+ unread count)
    POST /api/core/notifications/{id}/read/    → mark a notification as read
    POST /api/core/notifications/read-all/     → mark every notification as read

    **Authentication**: Required (``IsAuthenticated``).
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List notifications",
        description="Return the authenticated user's notifications, newest first.",
        parameters=[
            OpenApiParameter(name="category", type=str, required=False, description="Filter by category."),
            OpenApiParameter(name="is_read", type=bool, required=False, description="Filter by read state."),
            OpenApiParameter(name="limit", type=int, required=False, description="Page size (max 100)."),
            OpenApiParameter(name="offset", type=int, required=False, description="Rows to skip."),
        ],
        responses={200: OpenApiResponse(response=NotificationListSerializer, description="Notification list.")},
        tags=["Notifications"],
    )
    def list(self, request: Request) -> Response:
        filters = NotificationFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)

        service = NotificationService(user=request.user)
        notifications = service.list_notifications(**filters.validated_data)
        payload = {
            "results": notifications,
            "unread_count": service.unread_count(),
        }
        return Response(NotificationListSerializer(payload).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="read")
    @extend_schema(
        summary="Mark notification as read",
        description="Mark a single notification as read by ID.",
        request=None,
        responses={
            200: OpenApiResponse(response=NotificationSerializer, description="Updated notification."),
            404: OpenApiResponse(description="Not one of your notifications."),
        },
        tags=["Notifications"],
    )
    def mark_as_read(self, request: Request, pk: str = None) -> Response:
        """
        **POST /api/core/notifications/{id}/read/**

        Delegates to ``NotificationService.mark_as_read()``.
        """
        service = NotificationService(user=request.user)
        notification = service.mark_as_read(notification_id=pk)
        serializer = NotificationSerializer(notification)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"], url_path="read-all")
    @extend_schema(
        summary="Mark all notifications as read",
        request=None,
        responses={200: OpenApiResponse(response=MarkAllReadSerializer, description="Number of notifications updated.")},
        tags=["Notifications"],
    )
    def mark_all_as_read(self, request: Request) -> Response:
        updated = NotificationService(user=request.user).mark_all_as_read()
        return Response(MarkAllReadSerializer({"updated": updated}).data, status=status.HTTP_200_OK)
