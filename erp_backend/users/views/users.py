# users/views/users.py

"""
USER ADMINISTRATION (admin-only)

- GET   /api/users/            list (filter by role / is_active, search by name/email)
- GET   /api/users/<uuid>/     retrieve
- PATCH /api/users/<uuid>/     change role / active flag / names

Users are never hard-deleted: deactivate with is_active=false.
"""

import logging

from django.contrib.auth import get_user_model
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, viewsets
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin
from core.api.responses import envelope
from permissions.roles import CAP_USERS_MANAGE, HasCapability
from users.serializers import UserAdminUpdateSerializer, UserSerializer

logger = logging.getLogger("erp.users")

User = get_user_model()


@extend_schema_view(
    list=extend_schema(tags=["users"]),
    retrieve=extend_schema(tags=["users"]),
    partial_update=extend_schema(
        tags=["users"], request=UserAdminUpdateSerializer, responses=UserSerializer
    ),
)
class UserAdminViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    queryset = User.objects.all().order_by("email")
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_USERS_MANAGE
    http_method_names = ["get", "patch", "head", "options"]
    filterset_fields = ["role", "is_active"]
    search_fields = ["email", "first_name", "last_name"]

    def get_serializer_class(self):
        if self.action in {"update", "partial_update"}:
            return UserAdminUpdateSerializer
        return UserSerializer

    def perform_update(self, serializer):
        user = serializer.save()
        logger.info(
            "User updated by admin",
            extra={
                "user_id": str(user.id),
                "role": user.role,
                "admin_id": str(self.request.user.id),
            },
        )

    def partial_update(self, request, *args, **kwargs):
        user = self.get_object()
        serializer = self.get_serializer(user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)
        return envelope(UserSerializer(user).data)
