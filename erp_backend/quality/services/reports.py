# quality/services/reports.py

from __future__ import annotations

from datetime import timedelta

from django.db.models import Count, Q
from django.db.models.functions import TruncDate
from django.utils import timezone

from quality.models import QualityControl

TREND_DAYS = 30


def quality_dashboard() -> dict:
    counts = QualityControl.objects.aggregate(
        total=Count("id"),
        passed=Count("id", filter=Q(status=QualityControl.STATUS_PASSED)),
        failed=Count("id", filter=Q(status=QualityControl.STATUS_FAILED)),
        conditional=Count("id", filter=Q(status=QualityControl.STATUS_CONDITIONAL)),
        pending=Count("id", filter=Q(status=QualityControl.STATUS_PENDING)),
        in_progress=Count("id", filter=Q(status=QualityControl.STATUS_IN_PROGRESS)),
    )
    total = counts["total"]
    pass_rate = round(counts["passed"] / total * 100, 2) if total else 0

    recent = QualityControl.objects.select_related("product", "production_order").order_by("-created_at")[:10]

    trends = (
        QualityControl.objects.filter(created_at__gte=timezone.now() - timedelta(days=TREND_DAYS))
        .annotate(day=TruncDate("created_at"))
        .values("day")
        .annotate(
            total=Count("id"),
            passed=Count("id", filter=Q(status=QualityControl.STATUS_PASSED)),
            failed=Count("id", filter=Q(status=QualityControl.STATUS_FAILED)),
        )
        .order_by("day")
    )

    return {
        "summary": {**counts, "pass_rate": pass_rate},
        "recent_inspections": [
            {
                "id": str(qc.id),
                "inspection_number": qc.inspection_number,
                "product": qc.product.name,
                "production_order": qc.production_order.order_number if qc.production_order else None,
                "status": qc.status,
                "created_at": qc.created_at.isoformat(),
            }
            for qc in recent
        ],
        "quality_trends": [
            {
                "date": row["day"].isoformat(),
                "total": row["total"],
                "passed": row["passed"],
                "failed": row["failed"],
            }
            for row in trends
        ],
    }
