# hrm/services/employee_service.py

from __future__ import annotations

import logging

from django.db import transaction

from core.exceptions import InvalidStateError, NotFoundError
from hrm.models import Employee

logger = logging.getLogger("erp.hrm")

EMPLOYEE_CODE_PREFIX = "EMP"


def lock_employee(employee_id) -> Employee:
    try:
        return Employee.objects.select_for_update().get(id=employee_id)
    except Employee.DoesNotExist as exc:
        raise NotFoundError("Employee not found") from exc


@transaction.atomic
def terminate_employee(*, employee_id, user=None) -> Employee:
    employee = lock_employee(employee_id)

    if employee.status == Employee.STATUS_TERMINATED:
        raise InvalidStateError("Employee is already terminated")

    employee.status = Employee.STATUS_TERMINATED
    employee.save(update_fields=["status", "updated_at"])

    logger.info(
        "Employee terminated",
        extra={
            "employee_code": employee.employee_code,
            "user_id": str(getattr(user, "id", "") or ""),
        },
    )
    return employee
