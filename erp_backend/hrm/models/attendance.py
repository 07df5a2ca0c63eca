# hrm/models/attendance.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from hrm.models.employee import Employee


class Attendance(models.Model):
    """
    One row per employee per day.

    RULES:
    - check_out requires check_in and cannot precede it
    - (employee, date) is unique; check-in races surface as IntegrityError
    """

    STATUS_PRESENT = "present"
    STATUS_ABSENT = "absent"
    STATUS_LATE = "late"
    STATUS_HALF_DAY = "half_day"
    STATUS_LEAVE = "leave"

    STATUSES = [
        (STATUS_PRESENT, "Present"),
        (STATUS_ABSENT, "Absent"),
        (STATUS_LATE, "Late"),
        (STATUS_HALF_DAY, "Half Day"),
        (STATUS_LEAVE, "Leave"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name="attendance")
    date = models.DateField()
    check_in = models.DateTimeField(null=True, blank=True)
    check_out = models.DateTimeField(null=True, blank=True)
    hours_worked = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_PRESENT)
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date"]
        constraints = [
            models.UniqueConstraint(fields=["employee", "date"], name="uniq_attendance_employee_date"),
        ]
        indexes = [
            models.Index(fields=["date", "status"], name="hrm_attendance_date_idx"),
        ]

    def clean(self):
        if self.check_out and not self.check_in:
            raise ValidationError({"check_out": "check_out requires check_in"})
        if self.check_in and self.check_out and self.check_out < self.check_in:
            raise ValidationError({"check_out": "check_out cannot precede check_in"})

    def __str__(self):
        return f"{self.employee_id} | {self.date} | {self.status}"
