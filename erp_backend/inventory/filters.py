# inventory/filters.py

import django_filters

from inventory.models import InventoryItem, InventoryTransaction, Product


class ProductFilter(django_filters.FilterSet):
    class Meta:
        model = Product
        fields = ["product_type", "is_active"]


class InventoryItemFilter(django_filters.FilterSet):
    location = django_filters.CharFilter(lookup_expr="icontains")
    product_type = django_filters.CharFilter(field_name="product__product_type")

    class Meta:
        model = InventoryItem
        fields = ["product", "location", "product_type"]


class InventoryTransactionFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="created_at", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="created_at", lookup_expr="date__lte")
    product = django_filters.UUIDFilter(field_name="item__product_id")

    class Meta:
        model = InventoryTransaction
        fields = ["item", "transaction_type", "direction", "reference", "product"]
