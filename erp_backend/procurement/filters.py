# procurement/filters.py

import django_filters

from procurement.models import PurchaseOrder, PurchaseRequest, Supplier


class SupplierFilter(django_filters.FilterSet):
    class Meta:
        model = Supplier
        fields = ["is_active"]


class PurchaseRequestFilter(django_filters.FilterSet):
    department = django_filters.CharFilter(lookup_expr="icontains")

    class Meta:
        model = PurchaseRequest
        fields = ["status", "priority", "department", "product"]


class PurchaseOrderFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="order_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="order_date", lookup_expr="lte")

    class Meta:
        model = PurchaseOrder
        fields = ["status", "supplier", "purchase_request"]
