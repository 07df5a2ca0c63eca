# production/filters.py

import django_filters

from production.models import ProductionOrder


class ProductionOrderFilter(django_filters.FilterSet):
    start_from = django_filters.DateFilter(field_name="start_date", lookup_expr="gte")
    start_to = django_filters.DateFilter(field_name="start_date", lookup_expr="lte")

    class Meta:
        model = ProductionOrder
        fields = ["status", "priority", "product", "sales_order"]
