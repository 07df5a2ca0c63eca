# maintenance/api/views.py

"""
MAINTENANCE ENDPOINTS (mounted under /api/maintenance/)

- equipment/                    master data; DELETE retires
- orders/                       list / create / PATCH while open
- orders/<id>/assign|start|complete|cancel/
- schedules/                    recurring plans; DELETE deactivates
- history/                      read-only ledger
- dashboard/
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from core.api.responses import envelope
from maintenance.api.serializers import (
    AssignMaintenanceOrderSerializer,
    CompleteMaintenanceOrderSerializer,
    EquipmentSerializer,
    MaintenanceHistorySerializer,
    MaintenanceOrderCreateSerializer,
    MaintenanceOrderSerializer,
    MaintenanceOrderUpdateSerializer,
    MaintenanceScheduleSerializer,
)
from maintenance.filters import (
    EquipmentFilter,
    MaintenanceHistoryFilter,
    MaintenanceOrderFilter,
    MaintenanceScheduleFilter,
)
from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder, MaintenanceSchedule
from maintenance.services.order_service import (
    assign_maintenance_order,
    cancel_maintenance_order,
    complete_maintenance_order,
    create_maintenance_order,
    start_maintenance_order,
    update_maintenance_order,
)
from maintenance.services.reports import maintenance_dashboard
from permissions.roles import CAP_MAINTENANCE_MANAGE, CAP_MAINTENANCE_VIEW, HasActionCapability, HasCapability


@extend_schema_view(
    list=extend_schema(tags=["maintenance"]),
    retrieve=extend_schema(tags=["maintenance"]),
    create=extend_schema(tags=["maintenance"]),
    update=extend_schema(tags=["maintenance"]),
    partial_update=extend_schema(tags=["maintenance"]),
    destroy=extend_schema(tags=["maintenance"]),
)
class EquipmentViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = EquipmentSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = EquipmentFilter
    search_fields = ["code", "name", "serial_number", "manufacturer"]
    ordering_fields = ["code", "name", "purchase_date"]

    action_capabilities = {
        "list": CAP_MAINTENANCE_VIEW,
        "retrieve": CAP_MAINTENANCE_VIEW,
        "create": CAP_MAINTENANCE_MANAGE,
        "update": CAP_MAINTENANCE_MANAGE,
        "partial_update": CAP_MAINTENANCE_MANAGE,
        "destroy": CAP_MAINTENANCE_MANAGE,
    }

    soft_delete_field = "status"
    soft_delete_value = Equipment.STATUS_RETIRED

    def get_queryset(self):
        return Equipment.objects.all().order_by("code")


@extend_schema_view(
    list=extend_schema(tags=["maintenance"]),
    retrieve=extend_schema(tags=["maintenance"]),
)
class MaintenanceOrderViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = MaintenanceOrderSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = MaintenanceOrderFilter
    search_fields = ["order_number", "title", "equipment__code", "equipment__name"]
    ordering_fields = ["scheduled_date", "priority", "created_at"]

    action_capabilities = {
        "list": CAP_MAINTENANCE_VIEW,
        "retrieve": CAP_MAINTENANCE_VIEW,
        "create": CAP_MAINTENANCE_MANAGE,
        "partial_update": CAP_MAINTENANCE_MANAGE,
        "assign": CAP_MAINTENANCE_MANAGE,
        "start": CAP_MAINTENANCE_MANAGE,
        "complete": CAP_MAINTENANCE_MANAGE,
        "cancel": CAP_MAINTENANCE_MANAGE,
    }

    def get_queryset(self):
        return MaintenanceOrder.objects.select_related("equipment", "assigned_to").order_by("-created_at")

    def _fresh(self, order_id):
        return self.get_queryset().get(id=order_id)

    @extend_schema(tags=["maintenance"], request=MaintenanceOrderCreateSerializer, responses={201: MaintenanceOrderSerializer})
    def create(self, request):
        s = MaintenanceOrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = create_maintenance_order(user=request.user, **s.validated_data)
        return envelope(
            MaintenanceOrderSerializer(self._fresh(order.id)).data,
            status=status.HTTP_201_CREATED,
            message="Maintenance order created",
        )

    @extend_schema(tags=["maintenance"], request=MaintenanceOrderUpdateSerializer, responses=MaintenanceOrderSerializer)
    def partial_update(self, request, pk=None):
        order = self.get_object()
        s = MaintenanceOrderUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        update_maintenance_order(order_id=order.id, changes=s.validated_data, user=request.user)
        return envelope(MaintenanceOrderSerializer(self._fresh(order.id)).data, message="Maintenance order updated")

    @extend_schema(tags=["maintenance"], request=AssignMaintenanceOrderSerializer, responses=MaintenanceOrderSerializer)
    @action(detail=True, methods=["post"])
    def assign(self, request, pk=None):
        s = AssignMaintenanceOrderSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        assign_maintenance_order(order_id=pk, assigned_to=s.validated_data["assigned_to"], user=request.user)
        return envelope(MaintenanceOrderSerializer(self._fresh(pk)).data, message="Maintenance order assigned")

    @extend_schema(tags=["maintenance"], request=None, responses=MaintenanceOrderSerializer)
    @action(detail=True, methods=["post"])
    def start(self, request, pk=None):
        start_maintenance_order(order_id=pk, user=request.user)
        return envelope(MaintenanceOrderSerializer(self._fresh(pk)).data, message="Maintenance started")

    @extend_schema(tags=["maintenance"], request=CompleteMaintenanceOrderSerializer, responses=MaintenanceOrderSerializer)
    @action(detail=True, methods=["post"])
    def complete(self, request, pk=None):
        s = CompleteMaintenanceOrderSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        complete_maintenance_order(order_id=pk, user=request.user, **s.validated_data)
        return envelope(
            MaintenanceOrderSerializer(self._fresh(pk)).data,
            message="Maintenance order completed successfully",
        )

    @extend_schema(tags=["maintenance"], request=None, responses=MaintenanceOrderSerializer)
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        cancel_maintenance_order(order_id=pk, user=request.user)
        return envelope(MaintenanceOrderSerializer(self._fresh(pk)).data, message="Maintenance order cancelled")


@extend_schema_view(
    list=extend_schema(tags=["maintenance"]),
    retrieve=extend_schema(tags=["maintenance"]),
    create=extend_schema(tags=["maintenance"]),
    update=extend_schema(tags=["maintenance"]),
    partial_update=extend_schema(tags=["maintenance"]),
    destroy=extend_schema(tags=["maintenance"]),
)
class MaintenanceScheduleViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = MaintenanceScheduleSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = MaintenanceScheduleFilter
    search_fields = ["title", "equipment__code", "equipment__name"]
    ordering_fields = ["next_due", "last_performed", "created_at"]

    action_capabilities = {
        "list": CAP_MAINTENANCE_VIEW,
        "retrieve": CAP_MAINTENANCE_VIEW,
        "create": CAP_MAINTENANCE_MANAGE,
        "update": CAP_MAINTENANCE_MANAGE,
        "partial_update": CAP_MAINTENANCE_MANAGE,
        "destroy": CAP_MAINTENANCE_MANAGE,
    }

    def get_queryset(self):
        return MaintenanceSchedule.objects.select_related("equipment", "assigned_to").order_by("next_due")


@extend_schema_view(
    list=extend_schema(tags=["maintenance"]),
    retrieve=extend_schema(tags=["maintenance"]),
)
class MaintenanceHistoryViewSet(EnvelopeResponseMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = MaintenanceHistorySerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = MaintenanceHistoryFilter
    ordering_fields = ["performed_at", "cost"]

    action_capabilities = {
        "list": CAP_MAINTENANCE_VIEW,
        "retrieve": CAP_MAINTENANCE_VIEW,
    }

    def get_queryset(self):
        return MaintenanceHistory.objects.select_related("equipment", "maintenance_order").order_by("-performed_at")


class MaintenanceDashboardView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_MAINTENANCE_VIEW

    @extend_schema(tags=["maintenance"], responses={200: dict})
    def get(self, request):
        return envelope(maintenance_dashboard())
