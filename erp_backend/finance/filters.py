# finance/filters.py

import django_filters
from django.utils import timezone

from finance.models import Account, Invoice, Payment


class InvoiceFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="invoice_date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="invoice_date", lookup_expr="lte")
    overdue = django_filters.BooleanFilter(method="filter_overdue")

    class Meta:
        model = Invoice
        fields = ["status", "customer", "sales_order"]

    def filter_overdue(self, queryset, name, value):
        open_statuses = [Invoice.STATUS_PENDING, Invoice.STATUS_PARTIALLY_PAID]
        if value:
            return queryset.filter(status__in=open_statuses, due_date__lt=timezone.localdate())
        return queryset


class PaymentFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="payment_date", lookup_expr="date__gte")
    date_to = django_filters.DateFilter(field_name="payment_date", lookup_expr="date__lte")

    class Meta:
        model = Payment
        fields = ["invoice", "payment_method", "status"]


class AccountFilter(django_filters.FilterSet):
    class Meta:
        model = Account
        fields = ["account_type", "parent_account", "is_active"]
