# hrm/models/payroll.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from hrm.models.employee import Employee

User = settings.AUTH_USER_MODEL


class Payroll(models.Model):
    """
    Monthly pay slip.

    gross = basic / working-day divisor × days present + overtime + allowances
    net   = gross - deductions
    """

    STATUS_DRAFT = "draft"
    STATUS_APPROVED = "approved"

    STATUSES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_APPROVED, "Approved"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    employee = models.ForeignKey(Employee, on_delete=models.PROTECT, related_name="payrolls")
    pay_month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    pay_year = models.PositiveIntegerField()

    basic_salary = models.DecimalField(max_digits=15, decimal_places=2)
    working_days = models.PositiveIntegerField(default=0)
    overtime_hours = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    overtime_rate = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    overtime_pay = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    allowances = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    deductions = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    gross_salary = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    net_salary = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_DRAFT)
    approved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="payrolls_approved"
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-pay_year", "-pay_month"]
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "pay_month", "pay_year"],
                name="uniq_payroll_employee_period",
            ),
            models.CheckConstraint(
                condition=Q(pay_month__gte=1) & Q(pay_month__lte=12),
                name="payroll_month_range",
            ),
        ]

    @property
    def display_number(self):
        return f"{self.employee_id}/{self.pay_year}-{self.pay_month:02d}"

    def __str__(self):
        return f"Payroll {self.pay_year}-{self.pay_month:02d} | {self.employee_id}"
