# inventory/serializers/product.py

from rest_framework import serializers

from inventory.models import Product


class ProductSerializer(serializers.ModelSerializer):
    quantity_on_hand = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "name",
            "description",
            "product_type",
            "unit_of_measure",
            "standard_cost",
            "selling_price",
            "is_active",
            "quantity_on_hand",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "is_active", "quantity_on_hand", "created_at", "updated_at")

    def get_quantity_on_hand(self, obj) -> int:
        item = getattr(obj, "inventory_item", None)
        return int(item.quantity_on_hand) if item else 0

    def validate_standard_cost(self, value):
        if value < 0:
            raise serializers.ValidationError("standard_cost cannot be negative")
        return value

    def validate_selling_price(self, value):
        if value < 0:
            raise serializers.ValidationError("selling_price cannot be negative")
        return value
