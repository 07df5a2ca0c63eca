# hrm/services/payroll_service.py

"""
======================================================
PATH: hrm/services/payroll_service.py
======================================================
PAYROLL SERVICE

generate_payroll():
    working_days = present attendance rows in the calendar month
    gross = basic / PAYROLL_TOTAL_WORKING_DAYS × working_days
            + overtime_hours × overtime_rate
            + allowances
    net   = gross - deductions
All amounts rounded half-up to cents. One payroll per (employee, month, year).
"""

from __future__ import annotations

import calendar
import logging
from datetime import MAXYEAR, MINYEAR, date
from decimal import Decimal

from django.conf import settings
from django.db import IntegrityError, transaction

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.money import ZERO, money
from hrm.models import Attendance, Payroll
from hrm.services.employee_service import lock_employee
from hrm.services.lifecycle import PayrollLifecycle

logger = logging.getLogger("erp.hrm")

DUPLICATE_PAYROLL = "Payroll already exists for this employee and period"


def _normalize_period(month, year) -> tuple[int, int]:
    errors = {}
    try:
        month = int(month)
    except (TypeError, ValueError):
        errors["month"] = ["must be an integer"]
    else:
        if not 1 <= month <= 12:
            errors["month"] = ["must be between 1 and 12"]
    try:
        year = int(year)
    except (TypeError, ValueError):
        errors["year"] = ["must be an integer"]
    else:
        if not MINYEAR <= year <= MAXYEAR:
            errors["year"] = [f"must be between {MINYEAR} and {MAXYEAR}"]

    if errors:
        raise ValidationFailed("Invalid payroll period", errors=errors)
    return month, year


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def count_working_days(employee, *, year: int, month: int) -> int:
    first, last = month_bounds(year, month)
    return Attendance.objects.filter(
        employee=employee,
        status=Attendance.STATUS_PRESENT,
        date__gte=first,
        date__lte=last,
    ).count()


def lock_payroll(payroll_id) -> Payroll:
    try:
        return Payroll.objects.select_for_update().get(id=payroll_id)
    except Payroll.DoesNotExist as exc:
        raise NotFoundError("Payroll not found") from exc


@transaction.atomic
def generate_payroll(
    *,
    employee_id,
    month: int,
    year: int,
    basic_salary=None,
    overtime_hours=ZERO,
    overtime_rate=ZERO,
    allowances=ZERO,
    deductions=ZERO,
    user=None,
) -> Payroll:
    month, year = _normalize_period(month, year)

    employee = lock_employee(employee_id)

    if Payroll.objects.filter(employee=employee, pay_month=month, pay_year=year).exists():
        raise InvalidStateError(DUPLICATE_PAYROLL)

    basic = money(employee.salary if basic_salary is None else basic_salary)
    overtime_hours = Decimal(str(overtime_hours or 0))
    overtime_rate = money(overtime_rate)
    allowances = money(allowances)
    deductions = money(deductions)

    for field, value in (
        ("basic_salary", basic),
        ("overtime_hours", overtime_hours),
        ("overtime_rate", overtime_rate),
        ("allowances", allowances),
        ("deductions", deductions),
    ):
        if value < 0:
            raise ValidationFailed("Payroll amounts cannot be negative", errors={field: ["must be >= 0"]})

    working_days = count_working_days(employee, year=year, month=month)
    divisor = Decimal(settings.PAYROLL_TOTAL_WORKING_DAYS)

    overtime_pay = money(overtime_hours * overtime_rate)
    gross = money(basic / divisor * working_days + overtime_pay + allowances)
    net = money(gross - deductions)

    try:
        with transaction.atomic():
            payroll = Payroll.objects.create(
                employee=employee,
                pay_month=month,
                pay_year=year,
                basic_salary=basic,
                working_days=working_days,
                overtime_hours=overtime_hours,
                overtime_rate=overtime_rate,
                overtime_pay=overtime_pay,
                allowances=allowances,
                deductions=deductions,
                gross_salary=gross,
                net_salary=net,
            )
    except IntegrityError as exc:
        raise InvalidStateError(DUPLICATE_PAYROLL) from exc

    logger.info(
        "Payroll generated",
        extra={
            "employee_code": employee.employee_code,
            "period": f"{year}-{month:02d}",
            "working_days": working_days,
            "net_salary": str(net),
        },
    )
    return payroll


@transaction.atomic
def approve_payroll(*, payroll_id, user=None) -> Payroll:
    payroll = lock_payroll(payroll_id)

    PayrollLifecycle.validate_transition(instance=payroll, target_status=Payroll.STATUS_APPROVED)

    payroll.status = Payroll.STATUS_APPROVED
    touched = stamp_transition(payroll, action="approved", user=user)
    payroll.save(update_fields=["status", *touched, "updated_at"])

    logger.info("Payroll approved", extra={"payroll_id": str(payroll.id)})
    return payroll
