# production/services/reports.py

from __future__ import annotations

from django.db.models import Count, Sum
from django.utils import timezone

from production.models import ProductionOrder
from production.services.lifecycle import SCHEDULED_STATUSES


def production_schedule(*, start_date=None, end_date=None):
    qs = (
        ProductionOrder.objects.select_related("product")
        .filter(status__in=SCHEDULED_STATUSES)
        .order_by("start_date", "created_at")
    )
    if start_date and end_date:
        qs = qs.filter(start_date__gte=start_date, start_date__lte=end_date)
    return qs


def production_metrics() -> dict:
    """
    Month-to-date production numbers.

    efficiency = Σ produced / Σ planned over orders completed this month.
    """
    month_start = timezone.localdate().replace(day=1)
    this_month = ProductionOrder.objects.filter(created_at__date__gte=month_start)

    by_status = (
        ProductionOrder.objects.values("status")
        .annotate(count=Count("id"))
        .order_by("status")
    )

    completed = this_month.filter(status=ProductionOrder.STATUS_COMPLETED).aggregate(
        total_produced=Sum("quantity_produced"),
        total_planned=Sum("quantity_planned"),
        total_rejected=Sum("quantity_rejected"),
    )
    produced = completed["total_produced"] or 0
    planned = completed["total_planned"] or 0
    efficiency = round(produced / planned * 100, 2) if planned else 0

    return {
        "total_orders": this_month.count(),
        "orders_by_status": [{"status": row["status"], "count": row["count"]} for row in by_status],
        "production_efficiency": efficiency,
        "total_produced": produced,
        "total_planned": planned,
        "total_rejected": completed["total_rejected"] or 0,
    }
