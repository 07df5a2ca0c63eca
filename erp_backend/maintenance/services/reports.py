# maintenance/services/reports.py

from __future__ import annotations

from datetime import timedelta

from django.db.models import Count, Q, Sum
from django.utils import timezone

from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder, MaintenanceSchedule
from maintenance.services.lifecycle import OPEN_STATUSES

UPCOMING_DAYS = 7


def maintenance_dashboard() -> dict:
    today = timezone.localdate()

    equipment = Equipment.objects.aggregate(
        total=Count("id", filter=~Q(status=Equipment.STATUS_RETIRED)),
        active=Count("id", filter=Q(status=Equipment.STATUS_ACTIVE)),
        in_maintenance=Count("id", filter=Q(status=Equipment.STATUS_MAINTENANCE)),
    )
    orders = MaintenanceOrder.objects.aggregate(
        pending=Count("id", filter=Q(status=MaintenanceOrder.STATUS_PENDING)),
        in_progress=Count("id", filter=Q(status=MaintenanceOrder.STATUS_IN_PROGRESS)),
        overdue=Count("id", filter=Q(status__in=OPEN_STATUSES, scheduled_date__lt=today)),
    )

    upcoming = (
        MaintenanceOrder.objects.select_related("equipment")
        .filter(
            status__in=OPEN_STATUSES,
            scheduled_date__gte=today,
            scheduled_date__lte=today + timedelta(days=UPCOMING_DAYS),
        )
        .order_by("scheduled_date")
    )

    due_schedules = (
        MaintenanceSchedule.objects.select_related("equipment")
        .filter(
            is_active=True,
            status__in=(MaintenanceSchedule.STATUS_SCHEDULED, MaintenanceSchedule.STATUS_OVERDUE),
            next_due__lte=today + timedelta(days=UPCOMING_DAYS),
        )
        .order_by("next_due")
    )

    recent = MaintenanceHistory.objects.select_related("equipment", "performed_by").order_by("-performed_at")[:10]

    cost_by_equipment = (
        MaintenanceHistory.objects.values("equipment__code", "equipment__name")
        .annotate(total_cost=Sum("cost"), total_hours=Sum("labor_hours"), jobs=Count("id"))
        .order_by("-total_hours")[:10]
    )

    return {
        "summary": {
            "total_equipment": equipment["total"],
            "active_equipment": equipment["active"],
            "in_maintenance_equipment": equipment["in_maintenance"],
            "pending_orders": orders["pending"],
            "in_progress_orders": orders["in_progress"],
            "overdue_orders": orders["overdue"],
        },
        "upcoming_maintenance": [
            {
                "id": str(o.id),
                "order_number": o.order_number,
                "equipment": o.equipment.code,
                "title": o.title,
                "scheduled_date": o.scheduled_date.isoformat(),
            }
            for o in upcoming
        ],
        "scheduled_maintenance": [
            {
                "id": str(s.id),
                "equipment": s.equipment.code,
                "title": s.title,
                "next_due": s.next_due.isoformat(),
                "overdue": s.next_due < today,
            }
            for s in due_schedules
        ],
        "recent_activities": [
            {
                "equipment": h.equipment.code,
                "maintenance_type": h.maintenance_type,
                "performed_at": h.performed_at.isoformat(),
                "performed_by": getattr(h.performed_by, "email", None),
                "result": h.result,
            }
            for h in recent
        ],
        "equipment_downtime": [
            {
                "code": row["equipment__code"],
                "name": row["equipment__name"],
                "jobs": row["jobs"],
                "labor_hours": str(row["total_hours"] or 0),
                "cost": str(row["total_cost"] or 0),
            }
            for row in cost_by_equipment
        ],
    }
