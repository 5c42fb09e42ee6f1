"""
Alerts app views.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response

from .serializers import AlertCreateSerializer, AlertSerializer
from .services import AlertService


class AlertViewSet(viewsets.ViewSet):
    """
    GET    /api/alerts/        → administrator: own alerts; citizen: local active alerts
    POST   /api/alerts/        → administrator broadcasts an alert
    DELETE /api/alerts/{id}/   → administrator deletes one of their alerts
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List alerts",
        responses={200: OpenApiResponse(response=AlertSerializer(many=True), description="Alerts.")},
        tags=["Alerts"],
    )
    def list(self, request: Request) -> Response:
        alerts = AlertService.list_for_user(request.user)
        return Response(AlertSerializer(alerts, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Broadcast alert",
        description="Notifies every citizen whose city and area match the administrator's.",
        request=AlertCreateSerializer,
        responses={
            201: OpenApiResponse(response=AlertSerializer, description="Alert stored; see notified_count."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Caller is not an administrator."),
        },
        tags=["Alerts"],
    )
    def create(self, request: Request) -> Response:
        serializer = AlertCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        alert = AlertService.broadcast(
            request.user,
            category=data["category"],
            priority=data["priority"],
            title=data["title"],
            body=data["message"],
            alert_type=data.get("alert_type", ""),
            expires_at=data.get("expires_at"),
        )
        return Response(AlertSerializer(alert).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Delete alert",
        responses={
            204: OpenApiResponse(description="Deleted."),
            403: OpenApiResponse(description="Not your alert."),
            404: OpenApiResponse(description="Not found."),
        },
        tags=["Alerts"],
    )
    def destroy(self, request: Request, pk: str = None) -> Response:
        AlertService.delete_alert(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)
