"""
Messaging app views.

Thin wrappers around ``MessagingService``.  The acting role is always the
authenticated user's own role.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import MessageCreateSerializer, MessageSerializer, UnreadCountsSerializer
from .services import MessagingService


class ComplaintMessageViewSet(viewsets.ViewSet):
    """
    GET  /api/complaints/{complaint_code}/messages/ → read (and mark seen)
    POST /api/complaints/{complaint_code}/messages/ → post a message
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Read message thread",
        description="Returns the thread oldest first and marks the other side's messages as seen.",
        responses={
            200: OpenApiResponse(response=MessageSerializer(many=True), description="Thread."),
            403: OpenApiResponse(description="Messaging not available."),
            404: OpenApiResponse(description="Complaint not found."),
        },
        tags=["Messages"],
    )
    def list(self, request: Request, complaint_code: str = None) -> Response:
        messages = MessagingService.read_thread(complaint_code, request.user, request.user.role)
        return Response(MessageSerializer(messages, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Post message",
        request=MessageCreateSerializer,
        responses={
            201: OpenApiResponse(response=MessageSerializer, description="Message posted."),
            403: OpenApiResponse(description="Messaging not available."),
            404: OpenApiResponse(description="Complaint not found."),
        },
        tags=["Messages"],
    )
    def create(self, request: Request, complaint_code: str = None) -> Response:
        serializer = MessageCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        message = MessagingService.send_message(
            complaint_code,
            request.user,
            request.user.role,
            serializer.validated_data["body"],
        )
        return Response(MessageSerializer(message).data, status=status.HTTP_201_CREATED)


class UnreadCountsView(APIView):
    """GET /api/messages/unread-counts/"""

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Unread message counts",
        responses={200: OpenApiResponse(response=UnreadCountsSerializer, description="Per-complaint counts.")},
        tags=["Messages"],
    )
    def get(self, request: Request) -> Response:
        counts = MessagingService.unread_counts(request.user)
        payload = {"counts": counts, "total": sum(counts.values())}
        return Response(UnreadCountsSerializer(payload).data, status=status.HTTP_200_OK)
