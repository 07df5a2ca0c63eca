# sales/views/sales_order.py

"""
SALES ORDER ENDPOINTS

- /sales/orders/                    list / create
- /sales/orders/<id>/               retrieve / PATCH (draft + confirmed only)
- /sales/orders/<id>/status/        move along the transition table
- /sales/metrics/                   dashboard numbers

Orders are never deleted: they are cancelled through /status/.
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin
from core.api.responses import envelope
from permissions.roles import (
    CAP_SALES_MANAGE,
    CAP_SALES_VIEW,
    HasActionCapability,
    HasCapability,
)
from sales.filters import SalesOrderFilter
from sales.models import SalesOrder
from sales.serializers import (
    SalesOrderCreateSerializer,
    SalesOrderSerializer,
    SalesOrderStatusSerializer,
    SalesOrderUpdateSerializer,
)
from sales.services.metrics import sales_metrics
from sales.services.order_service import (
    create_sales_order,
    transition_sales_order,
    update_sales_order,
)


@extend_schema_view(
    list=extend_schema(tags=["sales"]),
    retrieve=extend_schema(tags=["sales"]),
)
class SalesOrderViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = SalesOrderSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = SalesOrderFilter
    search_fields = ["order_number", "customer__name", "notes"]
    ordering_fields = ["order_date", "required_date", "total_amount", "created_at"]

    action_capabilities = {
        "list": CAP_SALES_VIEW,
        "retrieve": CAP_SALES_VIEW,
        "create": CAP_SALES_MANAGE,
        "partial_update": CAP_SALES_MANAGE,
        "change_status": CAP_SALES_MANAGE,
    }

    def get_queryset(self):
        return (
            SalesOrder.objects.select_related("customer")
            .prefetch_related("items", "items__product")
            .order_by("-created_at")
        )

    def _fresh(self, order_id):
        return self.get_queryset().get(id=order_id)

    @extend_schema(tags=["sales"], request=SalesOrderCreateSerializer, responses={201: SalesOrderSerializer})
    def create(self, request):
        s = SalesOrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)

        order = create_sales_order(
            customer_id=data.pop("customer_id"),
            items=data.pop("items"),
            user=request.user,
            **data,
        )
        return envelope(
            SalesOrderSerializer(self._fresh(order.id)).data,
            status=status.HTTP_201_CREATED,
            message="Sales order created",
        )

    @extend_schema(tags=["sales"], request=SalesOrderUpdateSerializer, responses=SalesOrderSerializer)
    def partial_update(self, request, pk=None):
        order = self.get_object()
        s = SalesOrderUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        changes = dict(s.validated_data)
        items = changes.pop("items", None)

        update_sales_order(order_id=order.id, changes=changes, items=items, user=request.user)
        return envelope(SalesOrderSerializer(self._fresh(order.id)).data, message="Sales order updated")

    @extend_schema(tags=["sales"], request=SalesOrderStatusSerializer, responses=SalesOrderSerializer)
    @action(detail=True, methods=["patch", "post"], url_path="status")
    def change_status(self, request, pk=None):
        order = self.get_object()
        s = SalesOrderStatusSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        transition_sales_order(
            order_id=order.id,
            status=s.validated_data["status"],
            user=request.user,
            reason=s.validated_data["reason"],
        )
        return envelope(SalesOrderSerializer(self._fresh(order.id)).data, message="Order status updated successfully")


class SalesMetricsView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_SALES_VIEW

    @extend_schema(tags=["sales"], responses={200: dict})
    def get(self, request):
        return envelope(sales_metrics())
