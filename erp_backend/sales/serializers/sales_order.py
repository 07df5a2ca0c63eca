# sales/serializers/sales_order.py

from rest_framework import serializers

from sales.models import SalesOrder, SalesOrderItem


class SalesOrderItemSerializer(serializers.ModelSerializer):
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = SalesOrderItem
        fields = [
            "id",
            "line_number",
            "product",
            "product_sku",
            "product_name",
            "quantity_ordered",
            "quantity_shipped",
            "unit_price",
            "discount_percentage",
            "line_total",
        ]
        read_only_fields = fields


class SalesOrderSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    items = SalesOrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "order_number",
            "customer",
            "customer_name",
            "order_date",
            "required_date",
            "status",
            "priority",
            "subtotal",
            "tax_amount",
            "discount_amount",
            "total_amount",
            "shipping_address",
            "notes",
            "created_by",
            "confirmed_at",
            "shipped_at",
            "delivered_at",
            "cancelled_by",
            "cancelled_at",
            "cancellation_reason",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class SalesOrderItemInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0, required=False)
    discount_percentage = serializers.DecimalField(
        max_digits=5, decimal_places=2, min_value=0, max_value=100, required=False, default=0
    )


class SalesOrderCreateSerializer(serializers.Serializer):
    customer_id = serializers.UUIDField()
    order_date = serializers.DateField(required=False)
    required_date = serializers.DateField(required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=SalesOrder.Priority.choices, required=False, default=SalesOrder.Priority.MEDIUM)
    tax_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False, default=0)
    discount_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False, default=0)
    shipping_address = serializers.CharField(required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
    items = SalesOrderItemInputSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("At least one item is required")
        return value


class SalesOrderUpdateSerializer(serializers.Serializer):
    required_date = serializers.DateField(required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=SalesOrder.Priority.choices, required=False)
    tax_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    discount_amount = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    shipping_address = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    items = SalesOrderItemInputSerializer(many=True, required=False)


class SalesOrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SalesOrder.STATUSES)
    reason = serializers.CharField(required=False, allow_blank=True, default="")
