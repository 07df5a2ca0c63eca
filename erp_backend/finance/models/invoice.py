# finance/models/invoice.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

from sales.models import Customer, SalesOrder

User = settings.AUTH_USER_MODEL


class Invoice(models.Model):
    """
    Customer invoice (accounts receivable).

    INVARIANTS:
    - total_amount > 0
    - paid_amount is the Σ of completed payments (recomputed by the payment service)
    - status: pending -> partially_paid -> paid (paid is terminal)
    """

    STATUS_PENDING = "pending"
    STATUS_PARTIALLY_PAID = "partially_paid"
    STATUS_PAID = "paid"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_PARTIALLY_PAID, "Partially Paid"),
        (STATUS_PAID, "Paid"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice_number = models.CharField(max_length=32, unique=True, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="invoices")
    sales_order = models.ForeignKey(
        SalesOrder,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices",
    )

    invoice_date = models.DateField(default=timezone.localdate)
    due_date = models.DateField()

    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=15, decimal_places=2)
    paid_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PENDING)
    payment_date = models.DateField(null=True, blank=True)

    notes = models.TextField(blank=True, default="")
    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="invoices_created"
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-invoice_date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(total_amount__gt=Decimal("0.00")),
                name="invoice_total_positive",
            ),
            models.CheckConstraint(
                condition=Q(paid_amount__gte=Decimal("0.00")),
                name="invoice_paid_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "due_date"], name="fin_invoice_status_idx"),
            models.Index(fields=["customer", "invoice_date"], name="fin_invoice_customer_idx"),
        ]

    def clean(self):
        if self.total_amount is not None and self.total_amount <= 0:
            raise ValidationError({"total_amount": "total_amount must be greater than zero"})
        if self.due_date and self.invoice_date and self.due_date < self.invoice_date:
            raise ValidationError({"due_date": "due_date cannot precede invoice_date"})

    @property
    def display_number(self):
        return self.invoice_number

    @property
    def balance_due(self) -> Decimal:
        return max((self.total_amount or Decimal("0.00")) - (self.paid_amount or Decimal("0.00")), Decimal("0.00"))

    def __str__(self):
        return f"{self.invoice_number} ({self.status})"
