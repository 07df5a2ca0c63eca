# inventory/views/stock.py

"""
STOCK ENDPOINTS

- /inventory/items/                     stock records (thresholds editable, quantity read-only)
- /inventory/items/low-stock/           quantity_on_hand <= minimum_stock_level
- /inventory/items/valuation/           Σ quantity × unit_cost
- /inventory/items/<id>/adjust/         signed manual adjustment
- /inventory/items/<id>/issue/          issue stock out
- /inventory/transactions/              immutable movement ledger (read-only)
- /inventory/dashboard/                 headline numbers
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin
from core.api.responses import envelope
from inventory.filters import InventoryItemFilter, InventoryTransactionFilter
from inventory.models import InventoryItem, InventoryTransaction
from inventory.serializers import (
    InventoryItemSerializer,
    InventoryTransactionSerializer,
    StockAdjustmentSerializer,
    StockIssueSerializer,
)
from inventory.services.reports import (
    inventory_dashboard,
    inventory_valuation,
    low_stock_items,
)
from inventory.services.stock import adjust_stock, issue_stock
from permissions.roles import (
    CAP_INVENTORY_ADJUST,
    CAP_INVENTORY_MANAGE,
    CAP_INVENTORY_VIEW,
    HasActionCapability,
    HasCapability,
)


@extend_schema_view(
    list=extend_schema(tags=["inventory"]),
    retrieve=extend_schema(tags=["inventory"]),
    create=extend_schema(tags=["inventory"]),
    partial_update=extend_schema(tags=["inventory"]),
)
class InventoryItemViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = InventoryItemSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = InventoryItemFilter
    search_fields = ["product__sku", "product__name", "location"]
    ordering_fields = ["quantity_on_hand", "product__name", "updated_at"]
    http_method_names = ["get", "post", "patch", "head", "options"]

    action_capabilities = {
        "list": CAP_INVENTORY_VIEW,
        "retrieve": CAP_INVENTORY_VIEW,
        "low_stock": CAP_INVENTORY_VIEW,
        "valuation": CAP_INVENTORY_VIEW,
        "create": CAP_INVENTORY_MANAGE,
        "partial_update": CAP_INVENTORY_MANAGE,
        "issue": CAP_INVENTORY_MANAGE,
        "adjust": CAP_INVENTORY_ADJUST,
    }

    def get_queryset(self):
        return InventoryItem.objects.select_related("product").order_by("product__name")

    @extend_schema(tags=["inventory"], responses=InventoryItemSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request):
        qs = self.filter_queryset(low_stock_items())
        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(self.get_serializer(page, many=True).data)
        return envelope(self.get_serializer(qs, many=True).data)

    @extend_schema(tags=["inventory"], responses={200: dict})
    @action(detail=False, methods=["get"])
    def valuation(self, request):
        return envelope(inventory_valuation())

    @extend_schema(tags=["inventory"], request=StockAdjustmentSerializer, responses=InventoryItemSerializer)
    @action(detail=True, methods=["post"])
    def adjust(self, request, pk=None):
        item = self.get_object()
        s = StockAdjustmentSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = adjust_stock(
            item=item,
            quantity_delta=s.validated_data["quantity_delta"],
            user=request.user,
            notes=s.validated_data.get("notes", ""),
        )
        return envelope(
            {
                "item": InventoryItemSerializer(result.item).data,
                "transaction": InventoryTransactionSerializer(result.transaction).data,
            },
            message="Stock adjusted",
        )

    @extend_schema(tags=["inventory"], request=StockIssueSerializer, responses=InventoryItemSerializer)
    @action(detail=True, methods=["post"])
    def issue(self, request, pk=None):
        item = self.get_object()
        s = StockIssueSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = issue_stock(
            product=item.product,
            quantity=s.validated_data["quantity"],
            user=request.user,
            reference=s.validated_data.get("reference", ""),
            notes=s.validated_data.get("notes", ""),
        )
        return envelope(
            {
                "item": InventoryItemSerializer(result.item).data,
                "transaction": InventoryTransactionSerializer(result.transaction).data,
            },
            message="Stock issued",
        )


@extend_schema_view(
    list=extend_schema(tags=["inventory"]),
    retrieve=extend_schema(tags=["inventory"]),
)
class InventoryTransactionViewSet(EnvelopeResponseMixin, viewsets.ReadOnlyModelViewSet):
    serializer_class = InventoryTransactionSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = InventoryTransactionFilter
    search_fields = ["reference", "notes", "item__product__sku"]

    action_capabilities = {
        "list": CAP_INVENTORY_VIEW,
        "retrieve": CAP_INVENTORY_VIEW,
    }

    def get_queryset(self):
        return InventoryTransaction.objects.select_related(
            "item", "item__product", "performed_by"
        ).order_by("-created_at")


class InventoryDashboardView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_INVENTORY_VIEW

    @extend_schema(tags=["inventory"], responses={200: dict})
    def get(self, request):
        return envelope(inventory_dashboard())
