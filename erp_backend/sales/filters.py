# sales/filters.py

import django_filters

from sales.models import Customer, SalesOrder


class CustomerFilter(django_filters.FilterSet):
    class Meta:
        model = Customer
        fields = ["customer_type", "is_active"]


class SalesOrderFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="order_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="order_date", lookup_expr="lte")

    class Meta:
        model = SalesOrder
        fields = ["status", "priority", "customer"]
