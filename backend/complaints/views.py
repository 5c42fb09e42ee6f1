"""
Complaints app ViewSets.

Architecture: Views are intentionally thin.
Every view follows the strict three-step pattern:

    1. Parse / validate input via a serializer.
    2. Delegate all business logic to the appropriate service class.
    3. Serialize the result and return a DRF ``Response``.

Complaints are addressed by their public ``code`` rather than the PK.
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
    AdminComplaintDetailSerializer,
    ComplaintCreatedSerializer,
    ComplaintCreateSerializer,
    ComplaintDetailSerializer,
    ComplaintFilterSerializer,
    ComplaintListSerializer,
    ComplaintStatusLogSerializer,
    NoteCountSerializer,
    NoteCreateSerializer,
    StatusUpdateResultSerializer,
    StatusUpdateSerializer,
)
from .services import (
    ComplaintCreationService,
    ComplaintQueryService,
    ComplaintWorkflowService,
)


class ComplaintViewSet(viewsets.ViewSet):
    """
    Central ViewSet for the complaints app.

    Permission Strategy
    -------------------
    The base permission is ``IsAuthenticated``.  Role and ownership checks
    (citizen vs administrator, owner vs claimable) are enforced inside the
    service layer, never in the view.
    """

    permission_classes = [IsAuthenticated]
    lookup_field = "code"

    @extend_schema(
        summary="List complaints",
        description=(
            "Citizens get their own complaints.  Administrators get complaints "
            "they own plus unassigned complaints inside their jurisdiction."
        ),
        parameters=[
            OpenApiParameter(name="status", type=str, location=OpenApiParameter.QUERY, description="Filter by status."),
        ],
        responses={200: OpenApiResponse(response=ComplaintListSerializer(many=True), description="Complaints.")},
        tags=["Complaints"],
    )
    def list(self, request: Request) -> Response:
        filters = ComplaintFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        complaints = ComplaintQueryService.list_for_user(
            request.user,
            status=filters.validated_data.get("status"),
        )
        serializer = ComplaintListSerializer(complaints, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="File a complaint",
        description="Citizen files a complaint; it is routed to an administrator immediately when possible.",
        request=ComplaintCreateSerializer,
        responses={
            201: OpenApiResponse(response=ComplaintCreatedSerializer, description="Complaint filed."),
            400: OpenApiResponse(description="Validation error."),
            403: OpenApiResponse(description="Caller is not a citizen."),
        },
        tags=["Complaints"],
    )
    def create(self, request: Request) -> Response:
        """
        POST /api/complaints/

        Steps
        -----
        1. Validate ``request.data`` with ``ComplaintCreateSerializer``.
        2. Delegate to ``ComplaintCreationService.create_complaint``.
        3. Return HTTP 201 with code, status and owner.
        """
        serializer = ComplaintCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = ComplaintCreationService.create_complaint(request.user, serializer.validated_data)
        return Response(ComplaintCreatedSerializer(complaint).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Complaint detail",
        responses={
            200: OpenApiResponse(response=ComplaintDetailSerializer, description="Complaint."),
            404: OpenApiResponse(description="Not found or not visible."),
        },
        tags=["Complaints"],
    )
    def retrieve(self, request: Request, code: str = None) -> Response:
        complaint = ComplaintQueryService.get_detail(code, request.user)
        if request.user.is_administrator:
            serializer = AdminComplaintDetailSerializer(complaint)
        else:
            serializer = ComplaintDetailSerializer(complaint)
        return Response(serializer.data, status=status.HTTP_200_OK)

    # ── Administrator @actions ────────────────────────────────────────

    @action(detail=True, methods=["post"], url_path="status")
    @extend_schema(
        summary="Update complaint status",
        description=(
            "Administrator moves the complaint to a new status.  An unassigned "
            "complaint inside the caller's jurisdiction is claimed first."
        ),
        request=StatusUpdateSerializer,
        responses={
            200: OpenApiResponse(response=StatusUpdateResultSerializer, description="New status."),
            400: OpenApiResponse(description="Unknown status."),
            404: OpenApiResponse(description="Not found or not visible."),
            409: OpenApiResponse(description="Resolved, or concurrent update."),
        },
        tags=["Complaints – Workflow"],
    )
    def update_status(self, request: Request, code: str = None) -> Response:
        """
        POST /api/complaints/{code}/status/

        Steps
        -----
        1. Validate ``request.data`` with ``StatusUpdateSerializer``.
        2. Delegate to ``ComplaintWorkflowService.update_status``.
        3. Return HTTP 200 with the code and new status.
        """
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        complaint = ComplaintWorkflowService.update_status(
            code,
            request.user,
            serializer.validated_data["status"],
        )
        return Response(StatusUpdateResultSerializer(complaint).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="notes")
    @extend_schema(
        summary="Add internal note",
        request=NoteCreateSerializer,
        responses={
            201: OpenApiResponse(response=NoteCountSerializer, description="Number of notes on the complaint."),
            404: OpenApiResponse(description="Not found or not visible."),
        },
        tags=["Complaints – Workflow"],
    )
    def add_note(self, request: Request, code: str = None) -> Response:
        serializer = NoteCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        count = ComplaintWorkflowService.add_note(code, request.user, serializer.validated_data["text"])
        return Response(NoteCountSerializer({"note_count": count}).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["get"], url_path="history")
    @extend_schema(
        summary="Status history",
        responses={200: OpenApiResponse(response=ComplaintStatusLogSerializer(many=True), description="Audit trail.")},
        tags=["Complaints"],
    )
    def history(self, request: Request, code: str = None) -> Response:
        logs = ComplaintQueryService.status_history(code, request.user)
        return Response(ComplaintStatusLogSerializer(logs, many=True).data, status=status.HTTP_200_OK)
