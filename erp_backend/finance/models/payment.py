# finance/models/payment.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

from finance.models.invoice import Invoice

User = settings.AUTH_USER_MODEL


class Payment(models.Model):
    """
    Money received against an invoice.

    APPEND-ONLY:
    - rows are never edited or deleted; corrections are new rows
    - written only by finance.services.payment_service.record_payment
    """

    STATUS_PENDING = "pending"
    STATUS_COMPLETED = "completed"
    STATUS_FAILED = "failed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_FAILED, "Failed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    class Method(models.TextChoices):
        CASH = "cash", "Cash"
        CHECK = "check", "Check"
        CREDIT_CARD = "credit_card", "Credit Card"
        BANK_TRANSFER = "bank_transfer", "Bank Transfer"
        OTHER = "other", "Other"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    payment_number = models.CharField(max_length=32, unique=True, editable=False)
    invoice = models.ForeignKey(Invoice, on_delete=models.PROTECT, related_name="payments")

    amount = models.DecimalField(max_digits=15, decimal_places=2)
    payment_method = models.CharField(max_length=20, choices=Method.choices)
    payment_reference = models.CharField(max_length=120, blank=True, default="")

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_COMPLETED)
    payment_date = models.DateTimeField(default=timezone.now)

    processed_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="payments_processed"
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-payment_date"]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=Decimal("0.00")),
                name="payment_amount_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["invoice", "status"], name="fin_payment_invoice_idx"),
            models.Index(fields=["payment_date"], name="fin_payment_date_idx"),
        ]

    def clean(self):
        if self.amount is None or self.amount <= 0:
            raise ValidationError({"amount": "amount must be greater than zero"})

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Payment records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Payment records are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.payment_number} | {self.amount}"
