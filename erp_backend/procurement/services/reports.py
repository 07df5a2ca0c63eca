# procurement/services/reports.py

"""
PROCUREMENT REPORTS (read-only)

- dashboard: open requests, active orders, this month's spending, overdue deliveries
- supply-chain analytics: supplier performance, 6-month purchase trend, top purchased products
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.db.models import Avg, Count, Sum, Value
from django.db.models.functions import Coalesce, TruncMonth
from django.utils import timezone

from core.services.money import money
from procurement.models import PurchaseOrder, PurchaseOrderItem, PurchaseRequest

ACTIVE_ORDER_STATUSES = (
    PurchaseOrder.STATUS_PENDING,
    PurchaseOrder.STATUS_CONFIRMED,
    PurchaseOrder.STATUS_PARTIALLY_RECEIVED,
)

TOP_N = 10


def _order_row(order: PurchaseOrder) -> dict:
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "supplier": order.supplier.name,
        "status": order.status,
        "order_date": order.order_date.isoformat(),
        "expected_delivery_date": (
            order.expected_delivery_date.isoformat() if order.expected_delivery_date else None
        ),
        "total_amount": str(money(order.total_amount)),
    }


def procurement_dashboard() -> dict:
    today = timezone.localdate()
    month_start = today.replace(day=1)

    monthly_spending = PurchaseOrder.objects.filter(
        order_date__gte=month_start,
        order_date__lte=today,
    ).exclude(status=PurchaseOrder.STATUS_CANCELLED).aggregate(
        total=Coalesce(Sum("total_amount"), Value(Decimal("0.00")))
    )["total"]

    overdue = (
        PurchaseOrder.objects.select_related("supplier")
        .filter(status__in=ACTIVE_ORDER_STATUSES, expected_delivery_date__lt=today)
        .order_by("expected_delivery_date")[:TOP_N]
    )
    recent = PurchaseOrder.objects.select_related("supplier").order_by("-created_at")[:TOP_N]

    return {
        "summary": {
            "pending_requests": PurchaseRequest.objects.filter(status=PurchaseRequest.STATUS_PENDING).count(),
            "approved_requests": PurchaseRequest.objects.filter(status=PurchaseRequest.STATUS_APPROVED).count(),
            "active_orders": PurchaseOrder.objects.filter(status__in=ACTIVE_ORDER_STATUSES).count(),
            "monthly_spending": str(money(monthly_spending)),
        },
        "overdue_orders": [_order_row(o) for o in overdue],
        "recent_orders": [_order_row(o) for o in recent],
    }


def supply_chain_analytics(*, months: int = 6) -> dict:
    since = timezone.localdate() - timedelta(days=months * 31)
    orders = PurchaseOrder.objects.exclude(status=PurchaseOrder.STATUS_CANCELLED)

    supplier_rows = (
        orders.values("supplier_id", "supplier__name")
        .annotate(
            order_count=Count("id"),
            avg_order_value=Avg("total_amount"),
            total_value=Sum("total_amount"),
        )
        .order_by("-total_value")[:TOP_N]
    )

    trend_rows = (
        orders.filter(order_date__gte=since)
        .annotate(month=TruncMonth("order_date"))
        .values("month")
        .annotate(order_count=Count("id"), total_amount=Sum("total_amount"))
        .order_by("month")
    )

    product_rows = (
        PurchaseOrderItem.objects.exclude(purchase_order__status=PurchaseOrder.STATUS_CANCELLED)
        .values("product_id", "product__sku", "product__name")
        .annotate(total_quantity=Sum("quantity"), total_value=Sum("total_price"))
        .order_by("-total_value")[:TOP_N]
    )

    return {
        "summary": {
            "total_orders": PurchaseOrder.objects.count(),
            "pending_orders": PurchaseOrder.objects.filter(status=PurchaseOrder.STATUS_PENDING).count(),
            "completed_orders": PurchaseOrder.objects.filter(status=PurchaseOrder.STATUS_COMPLETED).count(),
        },
        "supplier_performance": [
            {
                "supplier_id": str(row["supplier_id"]),
                "supplier": row["supplier__name"],
                "order_count": row["order_count"],
                "avg_order_value": str(money(row["avg_order_value"] or 0)),
                "total_value": str(money(row["total_value"] or 0)),
            }
            for row in supplier_rows
        ],
        "purchase_trends": [
            {
                "month": row["month"].strftime("%Y-%m"),
                "order_count": row["order_count"],
                "total_amount": str(money(row["total_amount"] or 0)),
            }
            for row in trend_rows
        ],
        "top_products": [
            {
                "product_id": str(row["product_id"]),
                "sku": row["product__sku"],
                "name": row["product__name"],
                "total_quantity": int(row["total_quantity"] or 0),
                "total_value": str(money(row["total_value"] or 0)),
            }
            for row in product_rows
        ],
    }
