# users/views/auth.py
"""
USER AUTH VIEWS

- Register: public, throttled, always creates role="user".
- Login/refresh are SimpleJWT views mounted in backend/urls.py.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView

from core.api.responses import envelope
from permissions.roles import ROLE_USER
from users.serializers import RegisterSerializer, UserSerializer

logger = logging.getLogger("erp.users")

User = get_user_model()


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"
    serializer_class = RegisterSerializer

    @extend_schema(
        tags=["auth"],
        request=RegisterSerializer,
        responses={201: UserSerializer},
        description="Register a new user account (role: user)",
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = serializer.validated_data

        user = User.objects.create_user(
            email=data["email"],
            password=data["password"],
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
            role=ROLE_USER,
        )

        logger.info("User registered", extra={"user_id": str(user.id)})

        return envelope(
            UserSerializer(user).data,
            status=status.HTTP_201_CREATED,
            message="User registered successfully",
        )
