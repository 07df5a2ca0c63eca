# inventory/services/reports.py

"""
INVENTORY REPORTS (read-only)

- low stock: quantity_on_hand <= minimum_stock_level
- valuation: Σ quantity_on_hand × unit_cost (overall + per product type)
- reorder: quantity_on_hand <= reorder_point
- dashboard: headline counts for the inventory screen
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.services.money import money
from inventory.models import InventoryItem, InventoryTransaction, Product

_VALUE_EXPR = ExpressionWrapper(
    F("quantity_on_hand") * F("unit_cost"),
    output_field=DecimalField(max_digits=18, decimal_places=2),
)


def low_stock_items():
    return (
        InventoryItem.objects.select_related("product")
        .filter(product__is_active=True, quantity_on_hand__lte=F("minimum_stock_level"))
        .order_by("quantity_on_hand", "product__name")
    )


def reorder_items():
    return (
        InventoryItem.objects.select_related("product")
        .filter(product__is_active=True, quantity_on_hand__lte=F("reorder_point"))
        .order_by("quantity_on_hand", "product__name")
    )


def inventory_valuation() -> dict:
    qs = InventoryItem.objects.filter(product__is_active=True)

    totals = qs.aggregate(
        total_value=Coalesce(Sum(_VALUE_EXPR), Value(Decimal("0.00"))),
        total_quantity=Coalesce(Sum("quantity_on_hand"), Value(0)),
        item_count=Count("id"),
    )

    by_type = (
        qs.values("product__product_type")
        .annotate(
            value=Coalesce(Sum(_VALUE_EXPR), Value(Decimal("0.00"))),
            quantity=Coalesce(Sum("quantity_on_hand"), Value(0)),
        )
        .order_by("product__product_type")
    )

    return {
        "total_value": str(money(totals["total_value"])),
        "total_quantity": int(totals["total_quantity"]),
        "item_count": int(totals["item_count"]),
        "by_product_type": [
            {
                "product_type": row["product__product_type"],
                "value": str(money(row["value"])),
                "quantity": int(row["quantity"]),
            }
            for row in by_type
        ],
    }


def inventory_dashboard(*, days: int = 30) -> dict:
    since = timezone.now() - timedelta(days=days)

    movements = (
        InventoryTransaction.objects.filter(created_at__gte=since)
        .values("transaction_type")
        .annotate(count=Count("id"), quantity=Coalesce(Sum("quantity"), Value(0)))
        .order_by("transaction_type")
    )

    return {
        "total_products": Product.objects.filter(is_active=True).count(),
        "stocked_items": InventoryItem.objects.filter(quantity_on_hand__gt=0).count(),
        "low_stock_count": low_stock_items().count(),
        "reorder_count": reorder_items().count(),
        "out_of_stock_count": InventoryItem.objects.filter(quantity_on_hand=0).count(),
        "total_value": inventory_valuation()["total_value"],
        "movements": {
            row["transaction_type"]: {"count": row["count"], "quantity": int(row["quantity"])}
            for row in movements
        },
        "period_days": days,
    }
