# procurement/api/views.py

"""
PROCUREMENT ENDPOINTS (mounted under /api/procurement/)

- suppliers/                       supplier master (DELETE deactivates)
- requests/                        purchase requests + approve / reject / cancel
- orders/                          purchase orders + confirm / cancel / receive
- dashboard/, analytics/           read-only reports

Every state change goes through procurement.services; views only validate
payloads and shape responses.
"""

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from core.api.mixins import EnvelopeResponseMixin, SoftDeleteMixin
from core.api.responses import envelope
from permissions.roles import (
    CAP_PROCUREMENT_APPROVE,
    CAP_PROCUREMENT_MANAGE,
    CAP_PROCUREMENT_RECEIVE,
    CAP_PROCUREMENT_VIEW,
    HasActionCapability,
    HasCapability,
)
from procurement.api.serializers import (
    ApprovePurchaseRequestSerializer,
    CancelPurchaseOrderSerializer,
    PurchaseOrderCreateSerializer,
    PurchaseOrderSerializer,
    PurchaseOrderUpdateSerializer,
    PurchaseRequestSerializer,
    ReceivePurchaseOrderSerializer,
    RejectPurchaseRequestSerializer,
    SupplierSerializer,
)
from procurement.filters import PurchaseOrderFilter, PurchaseRequestFilter, SupplierFilter
from procurement.models import PurchaseOrder, PurchaseRequest, Supplier
from procurement.services.order_service import (
    cancel_purchase_order,
    confirm_purchase_order,
    create_purchase_order,
    update_purchase_order,
)
from procurement.services.receiving_service import receive_purchase_order
from procurement.services.reports import procurement_dashboard, supply_chain_analytics
from procurement.services.request_service import (
    approve_purchase_request,
    cancel_purchase_request,
    create_purchase_request,
    reject_purchase_request,
    update_purchase_request,
)


@extend_schema_view(
    list=extend_schema(tags=["procurement"]),
    retrieve=extend_schema(tags=["procurement"]),
    create=extend_schema(tags=["procurement"]),
    update=extend_schema(tags=["procurement"]),
    partial_update=extend_schema(tags=["procurement"]),
    destroy=extend_schema(tags=["procurement"]),
)
class SupplierViewSet(EnvelopeResponseMixin, SoftDeleteMixin, viewsets.ModelViewSet):
    serializer_class = SupplierSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = SupplierFilter
    search_fields = ["supplier_code", "name", "contact_person", "email"]
    ordering_fields = ["name", "supplier_code", "created_at"]

    action_capabilities = {
        "list": CAP_PROCUREMENT_VIEW,
        "retrieve": CAP_PROCUREMENT_VIEW,
        "create": CAP_PROCUREMENT_MANAGE,
        "update": CAP_PROCUREMENT_MANAGE,
        "partial_update": CAP_PROCUREMENT_MANAGE,
        "destroy": CAP_PROCUREMENT_MANAGE,
    }

    def get_queryset(self):
        return Supplier.objects.all().order_by("name")


@extend_schema_view(
    list=extend_schema(tags=["procurement"]),
    retrieve=extend_schema(tags=["procurement"]),
)
class PurchaseRequestViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = PurchaseRequestSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = PurchaseRequestFilter
    search_fields = ["request_number", "title", "department"]
    ordering_fields = ["created_at", "required_date", "priority"]

    action_capabilities = {
        "list": CAP_PROCUREMENT_VIEW,
        "retrieve": CAP_PROCUREMENT_VIEW,
        "create": CAP_PROCUREMENT_MANAGE,
        "partial_update": CAP_PROCUREMENT_MANAGE,
        "cancel": CAP_PROCUREMENT_MANAGE,
        "approve": CAP_PROCUREMENT_APPROVE,
        "reject": CAP_PROCUREMENT_APPROVE,
    }

    def get_queryset(self):
        return PurchaseRequest.objects.select_related("product", "requested_by").order_by("-created_at")

    @extend_schema(tags=["procurement"], request=PurchaseRequestSerializer, responses={201: PurchaseRequestSerializer})
    def create(self, request):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        purchase_request = create_purchase_request(data=s.validated_data, user=request.user)
        return envelope(
            PurchaseRequestSerializer(purchase_request).data,
            status=status.HTTP_201_CREATED,
            message="Purchase request created",
        )

    @extend_schema(tags=["procurement"], request=PurchaseRequestSerializer, responses=PurchaseRequestSerializer)
    def partial_update(self, request, pk=None):
        purchase_request = self.get_object()
        s = self.get_serializer(purchase_request, data=request.data, partial=True)
        s.is_valid(raise_exception=True)
        purchase_request = update_purchase_request(
            request_id=purchase_request.id, changes=s.validated_data, user=request.user
        )
        return envelope(PurchaseRequestSerializer(purchase_request).data, message="Purchase request updated")

    @extend_schema(tags=["procurement"], request=ApprovePurchaseRequestSerializer, responses=PurchaseRequestSerializer)
    @action(detail=True, methods=["post"])
    def approve(self, request, pk=None):
        s = ApprovePurchaseRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        purchase_request = approve_purchase_request(
            request_id=self.get_object().id,
            user=request.user,
            notes=s.validated_data["approval_notes"],
        )
        return envelope(PurchaseRequestSerializer(purchase_request).data, message="Purchase request approved")

    @extend_schema(tags=["procurement"], request=RejectPurchaseRequestSerializer, responses=PurchaseRequestSerializer)
    @action(detail=True, methods=["post"])
    def reject(self, request, pk=None):
        s = RejectPurchaseRequestSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        purchase_request = reject_purchase_request(
            request_id=self.get_object().id,
            user=request.user,
            reason=s.validated_data["rejection_reason"],
        )
        return envelope(PurchaseRequestSerializer(purchase_request).data, message="Purchase request rejected")

    @extend_schema(tags=["procurement"], request=None, responses=PurchaseRequestSerializer)
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        purchase_request = cancel_purchase_request(request_id=self.get_object().id, user=request.user)
        return envelope(PurchaseRequestSerializer(purchase_request).data, message="Purchase request cancelled")


@extend_schema_view(
    list=extend_schema(tags=["procurement"]),
    retrieve=extend_schema(tags=["procurement"]),
)
class PurchaseOrderViewSet(
    EnvelopeResponseMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = PurchaseOrderSerializer
    permission_classes = [IsAuthenticated, HasActionCapability]
    filterset_class = PurchaseOrderFilter
    search_fields = ["order_number", "supplier__name", "notes"]
    ordering_fields = ["order_date", "expected_delivery_date", "total_amount", "created_at"]

    action_capabilities = {
        "list": CAP_PROCUREMENT_VIEW,
        "retrieve": CAP_PROCUREMENT_VIEW,
        "create": CAP_PROCUREMENT_MANAGE,
        "partial_update": CAP_PROCUREMENT_MANAGE,
        "confirm": CAP_PROCUREMENT_MANAGE,
        "cancel": CAP_PROCUREMENT_MANAGE,
        "receive": CAP_PROCUREMENT_RECEIVE,
    }

    def get_queryset(self):
        return (
            PurchaseOrder.objects.select_related("supplier")
            .prefetch_related("items", "items__product")
            .order_by("-created_at")
        )

    def _fresh(self, order_id):
        return self.get_queryset().get(id=order_id)

    @extend_schema(tags=["procurement"], request=PurchaseOrderCreateSerializer, responses={201: PurchaseOrderSerializer})
    def create(self, request):
        s = PurchaseOrderCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        data = dict(s.validated_data)

        order = create_purchase_order(
            supplier_id=data.pop("supplier_id"),
            items=data.pop("items"),
            user=request.user,
            **data,
        )
        return envelope(
            PurchaseOrderSerializer(self._fresh(order.id)).data,
            status=status.HTTP_201_CREATED,
            message="Purchase order created",
        )

    @extend_schema(tags=["procurement"], request=PurchaseOrderUpdateSerializer, responses=PurchaseOrderSerializer)
    def partial_update(self, request, pk=None):
        order = self.get_object()
        s = PurchaseOrderUpdateSerializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        update_purchase_order(order_id=order.id, changes=s.validated_data, user=request.user)
        return envelope(PurchaseOrderSerializer(self._fresh(order.id)).data, message="Purchase order updated")

    @extend_schema(tags=["procurement"], request=None, responses=PurchaseOrderSerializer)
    @action(detail=True, methods=["post"])
    def confirm(self, request, pk=None):
        order = confirm_purchase_order(order_id=self.get_object().id, user=request.user)
        return envelope(PurchaseOrderSerializer(self._fresh(order.id)).data, message="Purchase order confirmed")

    @extend_schema(tags=["procurement"], request=CancelPurchaseOrderSerializer, responses=PurchaseOrderSerializer)
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        s = CancelPurchaseOrderSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        order = cancel_purchase_order(
            order_id=self.get_object().id,
            user=request.user,
            reason=s.validated_data["reason"],
        )
        return envelope(PurchaseOrderSerializer(self._fresh(order.id)).data, message="Purchase order cancelled")

    @extend_schema(tags=["procurement"], request=ReceivePurchaseOrderSerializer, responses=PurchaseOrderSerializer)
    @action(detail=True, methods=["post"])
    def receive(self, request, pk=None):
        s = ReceivePurchaseOrderSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        result = receive_purchase_order(
            order_id=pk,
            received_items=[
                {"id": str(row["id"]), "received_quantity": row["received_quantity"]}
                for row in s.validated_data["received_items"]
            ],
            notes=s.validated_data["notes"],
            user=request.user,
        )
        return envelope(
            PurchaseOrderSerializer(self._fresh(result.order.id)).data,
            message="Items received successfully",
        )


class ProcurementDashboardView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PROCUREMENT_VIEW

    @extend_schema(tags=["procurement"], responses={200: dict})
    def get(self, request):
        return envelope(procurement_dashboard())


class SupplyChainAnalyticsView(GenericAPIView):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_PROCUREMENT_VIEW

    @extend_schema(tags=["procurement"], responses={200: dict})
    def get(self, request):
        return envelope(supply_chain_analytics())
