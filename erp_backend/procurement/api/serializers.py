# procurement/api/serializers.py

from django.db import transaction
from rest_framework import serializers

from core.services.sequences import next_code
from procurement.models import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseRequest,
    Supplier,
)

SUPPLIER_CODE_PREFIX = "SUP"


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = [
            "id",
            "supplier_code",
            "name",
            "contact_person",
            "email",
            "phone",
            "address",
            "payment_terms",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "supplier_code", "is_active", "created_at", "updated_at")

    @transaction.atomic
    def create(self, validated_data):
        validated_data["supplier_code"] = next_code(SUPPLIER_CODE_PREFIX)
        return super().create(validated_data)


# ---------------- PURCHASE REQUESTS ----------------
class PurchaseRequestSerializer(serializers.ModelSerializer):
    product_sku = serializers.CharField(source="product.sku", read_only=True, default=None)
    requested_by_email = serializers.EmailField(source="requested_by.email", read_only=True, default=None)

    class Meta:
        model = PurchaseRequest
        fields = [
            "id",
            "request_number",
            "title",
            "description",
            "justification",
            "product",
            "product_sku",
            "quantity",
            "department",
            "priority",
            "estimated_cost",
            "requested_date",
            "required_date",
            "status",
            "requested_by",
            "requested_by_email",
            "approved_by",
            "approved_at",
            "approval_notes",
            "rejected_by",
            "rejected_at",
            "rejection_reason",
            "cancelled_at",
            "completed_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = (
            "id",
            "request_number",
            "requested_date",
            "status",
            "requested_by",
            "approved_by",
            "approved_at",
            "approval_notes",
            "rejected_by",
            "rejected_at",
            "rejection_reason",
            "cancelled_at",
            "completed_at",
            "created_at",
            "updated_at",
        )

    def validate_quantity(self, value):
        if value <= 0:
            raise serializers.ValidationError("quantity must be > 0")
        return value

    def validate_estimated_cost(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("estimated_cost cannot be negative")
        return value


class ApprovePurchaseRequestSerializer(serializers.Serializer):
    approval_notes = serializers.CharField(required=False, allow_blank=True, default="")


class RejectPurchaseRequestSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(required=False, allow_blank=True, default="")


# ---------------- PURCHASE ORDERS ----------------
class PurchaseOrderItemSerializer(serializers.ModelSerializer):
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    remaining_quantity = serializers.IntegerField(read_only=True)

    class Meta:
        model = PurchaseOrderItem
        fields = [
            "id",
            "product",
            "product_sku",
            "product_name",
            "quantity",
            "unit_price",
            "total_price",
            "received_quantity",
            "remaining_quantity",
            "received_date",
            "specifications",
        ]
        read_only_fields = fields


class PurchaseOrderSerializer(serializers.ModelSerializer):
    supplier_name = serializers.CharField(source="supplier.name", read_only=True)
    items = PurchaseOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = [
            "id",
            "order_number",
            "supplier",
            "supplier_name",
            "purchase_request",
            "order_date",
            "expected_delivery_date",
            "status",
            "total_amount",
            "payment_terms",
            "delivery_address",
            "notes",
            "received_date",
            "receiving_notes",
            "created_by",
            "confirmed_by",
            "confirmed_at",
            "cancelled_by",
            "cancelled_at",
            "cancellation_reason",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PurchaseOrderItemCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    specifications = serializers.CharField(required=False, allow_blank=True, default="")


class PurchaseOrderCreateSerializer(serializers.Serializer):
    supplier_id = serializers.UUIDField()
    purchase_request_id = serializers.UUIDField(required=False, allow_null=True)
    order_date = serializers.DateField(required=False)
    expected_delivery_date = serializers.DateField(required=False, allow_null=True)
    payment_terms = serializers.CharField(required=False, allow_blank=True, default="")
    delivery_address = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    items = PurchaseOrderItemCreateSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("At least one item is required")
        return value


class PurchaseOrderUpdateSerializer(serializers.Serializer):
    expected_delivery_date = serializers.DateField(required=False, allow_null=True)
    payment_terms = serializers.CharField(required=False, allow_blank=True)
    delivery_address = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class CancelPurchaseOrderSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class ReceivedItemSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    received_quantity = serializers.IntegerField(min_value=1)


class ReceivePurchaseOrderSerializer(serializers.Serializer):
    received_items = ReceivedItemSerializer(many=True)
    receiving_notes = serializers.CharField(source="notes", required=False, allow_blank=True, default="")

    def validate_received_items(self, value):
        if not value:
            raise serializers.ValidationError("At least one line is required")
        return value
