# sales/services/metrics.py

"""
SALES METRICS (read-only)

- orders placed this month
- revenue = Σ total_amount of delivered orders this month
- order counts by status
- top customers by delivered revenue
"""

from decimal import Decimal

from django.db.models import Count, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.services.money import money
from sales.models import Customer, SalesOrder


def sales_metrics() -> dict:
    today = timezone.localdate()
    month_start = today.replace(day=1)

    this_month = SalesOrder.objects.filter(order_date__gte=month_start, order_date__lte=today)

    revenue = this_month.filter(status=SalesOrder.STATUS_DELIVERED).aggregate(
        total=Coalesce(Sum("total_amount"), Value(Decimal("0.00")))
    )["total"]

    by_status = SalesOrder.objects.values("status").annotate(count=Count("id")).order_by("status")

    top_customers = (
        SalesOrder.objects.filter(status=SalesOrder.STATUS_DELIVERED)
        .values("customer_id", "customer__name")
        .annotate(revenue=Sum("total_amount"), orders=Count("id"))
        .order_by("-revenue")[:5]
    )

    return {
        "total_orders": this_month.count(),
        "total_revenue": str(money(revenue)),
        "active_customers": Customer.objects.filter(is_active=True).count(),
        "orders_by_status": {row["status"]: row["count"] for row in by_status},
        "top_customers": [
            {
                "customer_id": str(row["customer_id"]),
                "name": row["customer__name"],
                "orders": row["orders"],
                "revenue": str(money(row["revenue"])),
            }
            for row in top_customers
        ],
    }
