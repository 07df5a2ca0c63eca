# hrm/services/reports.py

from __future__ import annotations

from datetime import timedelta

from django.db.models import Count, Q
from django.utils import timezone

from hrm.models import Attendance, Department, Employee

RECENT_HIRE_DAYS = 30
TREND_DAYS = 7


def hrm_dashboard() -> dict:
    today = timezone.localdate()

    active_employees = Employee.objects.filter(status=Employee.STATUS_ACTIVE).count()
    present_today = Attendance.objects.filter(date=today, status=Attendance.STATUS_PRESENT).count()
    attendance_rate = round(present_today / active_employees * 100, 2) if active_employees else 0

    by_department = (
        Department.objects.annotate(
            employee_count=Count("employees", filter=Q(employees__status=Employee.STATUS_ACTIVE))
        )
        .order_by("name")
        .values("id", "name", "employee_count")
    )

    recent_hires = (
        Employee.objects.select_related("department")
        .filter(status=Employee.STATUS_ACTIVE, hire_date__gte=today - timedelta(days=RECENT_HIRE_DAYS))
        .order_by("-hire_date")[:10]
    )

    trends = (
        Attendance.objects.filter(
            status=Attendance.STATUS_PRESENT,
            date__gte=today - timedelta(days=TREND_DAYS),
        )
        .values("date")
        .annotate(present_count=Count("id"))
        .order_by("date")
    )

    return {
        "summary": {
            "total_employees": active_employees,
            "total_departments": Department.objects.count(),
            "today_attendance": present_today,
            "attendance_rate": attendance_rate,
        },
        "employees_by_department": [
            {"id": str(row["id"]), "name": row["name"], "count": row["employee_count"]}
            for row in by_department
        ],
        "recent_hires": [
            {
                "id": str(e.id),
                "employee_code": e.employee_code,
                "name": e.full_name,
                "job_title": e.job_title,
                "department": e.department.name if e.department else None,
                "hire_date": e.hire_date.isoformat(),
            }
            for e in recent_hires
        ],
        "attendance_trends": [
            {"date": row["date"].isoformat(), "present_count": row["present_count"]}
            for row in trends
        ],
    }
