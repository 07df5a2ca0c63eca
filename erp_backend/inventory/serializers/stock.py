# inventory/serializers/stock.py

from rest_framework import serializers

from inventory.models import InventoryItem, InventoryTransaction


class InventoryItemSerializer(serializers.ModelSerializer):
    product_sku = serializers.CharField(source="product.sku", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    is_low_stock = serializers.BooleanField(read_only=True)
    needs_reorder = serializers.BooleanField(read_only=True)
    stock_value = serializers.DecimalField(max_digits=18, decimal_places=2, read_only=True)

    class Meta:
        model = InventoryItem
        fields = [
            "id",
            "product",
            "product_sku",
            "product_name",
            "quantity_on_hand",
            "minimum_stock_level",
            "maximum_stock_level",
            "reorder_point",
            "location",
            "unit_cost",
            "is_low_stock",
            "needs_reorder",
            "stock_value",
            "last_received_at",
            "created_at",
            "updated_at",
        ]
        # quantity only moves through the stock service
        read_only_fields = ("id", "quantity_on_hand", "last_received_at", "created_at", "updated_at")

    def validate(self, attrs):
        minimum = attrs.get("minimum_stock_level", getattr(self.instance, "minimum_stock_level", 0))
        maximum = attrs.get("maximum_stock_level", getattr(self.instance, "maximum_stock_level", 0))
        if maximum and minimum and minimum > maximum:
            raise serializers.ValidationError(
                {"minimum_stock_level": "minimum_stock_level cannot exceed maximum_stock_level"}
            )
        return attrs


class InventoryTransactionSerializer(serializers.ModelSerializer):
    product_id = serializers.UUIDField(source="item.product_id", read_only=True)
    product_sku = serializers.CharField(source="item.product.sku", read_only=True)
    performed_by_email = serializers.EmailField(source="performed_by.email", read_only=True, default=None)

    class Meta:
        model = InventoryTransaction
        fields = [
            "id",
            "item",
            "product_id",
            "product_sku",
            "transaction_type",
            "direction",
            "quantity",
            "quantity_after",
            "unit_cost",
            "reference",
            "notes",
            "performed_by",
            "performed_by_email",
            "created_at",
        ]
        read_only_fields = fields


class StockAdjustmentSerializer(serializers.Serializer):
    quantity_delta = serializers.IntegerField()
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_quantity_delta(self, value):
        if value == 0:
            raise serializers.ValidationError("quantity_delta cannot be 0")
        return value


class StockIssueSerializer(serializers.Serializer):
    quantity = serializers.IntegerField(min_value=1)
    reference = serializers.CharField(required=False, allow_blank=True, default="", max_length=64)
    notes = serializers.CharField(required=False, allow_blank=True, default="")
