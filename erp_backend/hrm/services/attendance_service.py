# hrm/services/attendance_service.py

"""
======================================================
PATH: hrm/services/attendance_service.py
======================================================
ATTENDANCE SERVICE

check_in / check_out run in one transaction with the employee row
locked, so two terminals clocking the same person serialize.
The (employee, date) unique constraint backs the pre-check: a racing
insert that slips through surfaces as the same "already checked in" error.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from core.exceptions import InvalidStateError, ValidationFailed
from core.services.money import money
from hrm.models import Attendance, Employee
from hrm.services.employee_service import lock_employee

logger = logging.getLogger("erp.hrm")

ALREADY_CHECKED_IN = "Employee already checked in today"
NOT_CHECKED_IN = "Employee has not checked in today"
ALREADY_CHECKED_OUT = "Employee already checked out today"

SECONDS_PER_HOUR = Decimal("3600")


def hours_between(start, end) -> Decimal:
    if not start or not end:
        return Decimal("0.00")
    return money(Decimal(str((end - start).total_seconds())) / SECONDS_PER_HOUR)


def _require_active(employee: Employee) -> None:
    if employee.status != Employee.STATUS_ACTIVE:
        raise InvalidStateError(f"Employee is {employee.status}")


@transaction.atomic
def check_in(*, employee_id, user=None, when=None) -> Attendance:
    when = when or timezone.now()
    today = timezone.localdate(when)

    employee = lock_employee(employee_id)
    _require_active(employee)

    row = Attendance.objects.select_for_update().filter(employee=employee, date=today).first()
    if row is not None and row.check_in:
        raise InvalidStateError(ALREADY_CHECKED_IN)

    if row is None:
        try:
            with transaction.atomic():
                row = Attendance.objects.create(
                    employee=employee,
                    date=today,
                    check_in=when,
                    status=Attendance.STATUS_PRESENT,
                )
        except IntegrityError as exc:
            raise InvalidStateError(ALREADY_CHECKED_IN) from exc
    else:
        row.check_in = when
        row.status = Attendance.STATUS_PRESENT
        row.save(update_fields=["check_in", "status", "updated_at"])

    logger.info(
        "Employee checked in",
        extra={"employee_code": employee.employee_code, "date": today.isoformat()},
    )
    return row


@transaction.atomic
def check_out(*, employee_id, user=None, when=None) -> Attendance:
    when = when or timezone.now()
    today = timezone.localdate(when)

    employee = lock_employee(employee_id)

    row = Attendance.objects.select_for_update().filter(employee=employee, date=today).first()
    if row is None or not row.check_in:
        raise InvalidStateError(NOT_CHECKED_IN)
    if row.check_out:
        raise InvalidStateError(ALREADY_CHECKED_OUT)

    row.check_out = when
    row.hours_worked = hours_between(row.check_in, when)
    row.full_clean()
    row.save(update_fields=["check_out", "hours_worked", "updated_at"])

    logger.info(
        "Employee checked out",
        extra={
            "employee_code": employee.employee_code,
            "date": today.isoformat(),
            "hours_worked": str(row.hours_worked),
        },
    )
    return row


@transaction.atomic
def record_attendance(
    *,
    employee_id,
    date,
    status: str = Attendance.STATUS_PRESENT,
    check_in=None,
    check_out=None,
    notes: str = "",
    user=None,
) -> Attendance:
    """Manual upsert keyed on (employee, date)."""
    if status not in {value for value, _ in Attendance.STATUSES}:
        raise ValidationFailed("Invalid attendance status", errors={"status": [f"'{status}' is not supported"]})

    employee = lock_employee(employee_id)

    row = Attendance.objects.select_for_update().filter(employee=employee, date=date).first()
    if row is None:
        row = Attendance(employee=employee, date=date)

    row.status = status
    row.check_in = check_in
    row.check_out = check_out
    row.hours_worked = hours_between(check_in, check_out)
    row.notes = notes or ""

    row.full_clean(validate_unique=False)
    row.save()

    logger.info(
        "Attendance recorded",
        extra={"employee_code": employee.employee_code, "date": str(date), "status": status},
    )
    return row
