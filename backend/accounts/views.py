"""
Accounts app views.

Thin views: validate with a serializer, delegate to ``services.py``,
serialise the result.
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import (
    JurisdictionHistorySerializer,
    JurisdictionUpdateSerializer,
    MeUpdateSerializer,
    RegisterRequestSerializer,
    UserDetailSerializer,
)
from .services import CurrentUserService, JurisdictionService, UserRegistrationService


class RegisterView(APIView):
    """
    POST /api/accounts/register/ → create a citizen account.
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register citizen",
        request=RegisterRequestSerializer,
        responses={
            201: OpenApiResponse(response=UserDetailSerializer, description="Account created."),
            400: OpenApiResponse(description="Validation error."),
        },
        tags=["Accounts"],
    )
    def post(self, request: Request) -> Response:
        serializer = RegisterRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserRegistrationService.register_user(serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_201_CREATED)


class MeView(APIView):
    """
    GET  /api/accounts/me/  → Retrieve current user profile.
    PATCH /api/accounts/me/ → Update own profile fields.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Current user profile",
        responses={200: OpenApiResponse(response=UserDetailSerializer, description="Profile.")},
        tags=["Accounts"],
    )
    def get(self, request: Request) -> Response:
        user = CurrentUserService.get_profile(request.user)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update own profile",
        description="Administrators cannot change location fields here; use /jurisdiction/.",
        request=MeUpdateSerializer,
        responses={200: OpenApiResponse(response=UserDetailSerializer, description="Updated profile.")},
        tags=["Accounts"],
    )
    def patch(self, request: Request) -> Response:
        serializer = MeUpdateSerializer(instance=request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = CurrentUserService.update_profile(request.user, serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)


class JurisdictionView(APIView):
    """
    GET   /api/accounts/jurisdiction/ → previous jurisdictions, newest first.
    PATCH /api/accounts/jurisdiction/ → move the administrator's jurisdiction.
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Jurisdiction history",
        responses={200: OpenApiResponse(response=JurisdictionHistorySerializer(many=True), description="History.")},
        tags=["Accounts"],
    )
    def get(self, request: Request) -> Response:
        history = JurisdictionService.history(request.user)
        return Response(JurisdictionHistorySerializer(history, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        summary="Update jurisdiction",
        request=JurisdictionUpdateSerializer,
        responses={
            200: OpenApiResponse(response=UserDetailSerializer, description="New jurisdiction."),
            403: OpenApiResponse(description="Caller is not an administrator."),
        },
        tags=["Accounts"],
    )
    def patch(self, request: Request) -> Response:
        serializer = JurisdictionUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = JurisdictionService.update_jurisdiction(request.user, serializer.validated_data)
        return Response(UserDetailSerializer(user).data, status=status.HTTP_200_OK)
