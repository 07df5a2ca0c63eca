# production/api/serializers.py

from rest_framework import serializers

from production.models import ProductionOrder


class ProductionOrderSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    sales_order_number = serializers.CharField(source="sales_order.order_number", read_only=True, default=None)

    class Meta:
        model = ProductionOrder
        fields = [
            "id",
            "order_number",
            "product",
            "product_name",
            "product_sku",
            "sales_order",
            "sales_order_number",
            "quantity_planned",
            "quantity_produced",
            "quantity_rejected",
            "start_date",
            "due_date",
            "actual_start_date",
            "actual_end_date",
            "status",
            "priority",
            "notes",
            "created_by",
            "cancelled_by",
            "cancelled_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ProductionOrderCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity_planned = serializers.IntegerField(min_value=1)
    start_date = serializers.DateField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=ProductionOrder.Priority.choices, default=ProductionOrder.Priority.MEDIUM)
    sales_order_id = serializers.UUIDField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate(self, attrs):
        start, due = attrs.get("start_date"), attrs.get("due_date")
        if start and due and due < start:
            raise serializers.ValidationError({"due_date": "due_date cannot precede start_date"})
        return attrs


class ProductionOrderUpdateSerializer(serializers.Serializer):
    quantity_planned = serializers.IntegerField(min_value=1, required=False)
    start_date = serializers.DateField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=ProductionOrder.Priority.choices, required=False)
    sales_order_id = serializers.UUIDField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class ProductionStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ProductionOrder.STATUSES)
    quantity_produced = serializers.IntegerField(min_value=0, required=False)
    quantity_rejected = serializers.IntegerField(min_value=0, required=False)


class ScheduleQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
