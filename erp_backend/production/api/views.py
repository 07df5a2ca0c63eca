# production/api/views.py

"""
PRODUCTION ENDPOINTS (mounted under /api/production/)

- orders/                       list / create
- orders/<id>/                  retrieve / PATCH (open orders only)
- orders/<id>/status/           shop-floor status + quantities
- schedule/                     open orders by start date
- metrics/                      month-to-date dashboard

Orders are never deleted: they are cancelled through /status/.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin
from core.api.responses import envelope
from permissions.roles import (
    CAP_PRODUCTION_MANAGE,
    CAP_PRODUCTION_OPERATE,
    CAP_PRODUCTION_VIEW,
    HasActionCapability,
    HasCapability,
)
from production.api.serializers import (
    ProductionOrderCreateSerializer,
    ProductionOrderSerializer,
    ProductionOrderUpdateSerializer,
    ProductionStatusSerializer,
    ScheduleQuerySerializer,
)
from production.filters import ProductionOrderFilter
from production.models import ProductionOrder
from production.services.order_service import (
    create_production_order,
    update_production_order,
    update_production_status,
)
from production.services.reports import production_metrics, production_schedule


@extend_schema_view(
    list=extend_schema(tags=["production"]),
    retrieve=extend_schema(tags=["production"]),
)
class ProductionOrderViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ProductionOrderSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = ProductionOrderFilter
    search_fields = ["order_number", "product__name", "product__sku", "notes"]
    ordering_fields = ["start_date", "due_date", "created_at", "priority"]

    action_capabilities = {
        "list": CAP_PRODUCTION_VIEW,
        "retrieve": CAP_PRODUCTION_VIEW,
        "create": CAP_PRODUCTION_MANAGE,
        "partial_update": CAP_PRODUCTION_MANAGE,
        "change_status": CAP_PRODUCTION_OPERATE,
    }

    def get_queryset(self):
        return ProductionOrder.objects.select_related("product", "sales_order").order_by("-created_at")

    def _fresh(self, order_id):
        return self.get_queryset().get(id=order_id)

    @extend_schema(tags=["production"], request=ProductionOrderCreateSerializer, responses={201: ProductionOrderSerializer})
    def create(self, request):
        s = ProductionOrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = create_production_order(user=request.user, **s.validated_data)
        return envelope(
            ProductionOrderSerializer(self._fresh(order.id)).data,
            status=status.HTTP_201_CREATED,
            message="Production order created",
        )

    @extend_schema(tags=["production"], request=ProductionOrderUpdateSerializer, responses=ProductionOrderSerializer)
    def partial_update(self, request, pk=None):
        order = self.get_object()
        s = ProductionOrderUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        update_production_order(order_id=order.id, changes=s.validated_data, user=request.user)
        return envelope(ProductionOrderSerializer(self._fresh(order.id)).data, message="Production order updated")

    @extend_schema(tags=["production"], request=ProductionStatusSerializer, responses=ProductionOrderSerializer)
    @action(detail=True, methods=["patch", "post"], url_path="status")
    def change_status(self, request, pk=None):
        order = self.get_object()
        s = ProductionStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        update_production_status(order_id=order.id, user=request.user, **s.validated_data)
        return envelope(
            ProductionOrderSerializer(self._fresh(order.id)).data,
            message="Production status updated successfully",
        )


class ProductionScheduleView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PRODUCTION_VIEW

    @extend_schema(
        tags=["production"],
        parameters=[
            OpenApiParameter("start_date", str, description="YYYY-MM-DD"),
            OpenApiParameter("end_date", str, description="YYYY-MM-DD"),
        ],
        responses=ProductionOrderSerializer(many=True),
    )
    def get(self, request):
        s = ScheduleQuerySerializer(data=request.query_params)
        s.is_valid(raise_exception=True)

        orders = production_schedule(
            start_date=s.validated_data.get("start_date"),
            end_date=s.validated_data.get("end_date"),
        )
        return envelope(ProductionOrderSerializer(orders, many=True).data)


class ProductionMetricsView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PRODUCTION_VIEW

    @extend_schema(tags=["production"], responses={200: dict})
    def get(self, request):
        return envelope(production_metrics())
