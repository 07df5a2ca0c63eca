# sales/models/customer.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models


class Customer(models.Model):
    """
    Customer master.

    - customer_code is issued by the sequence generator (CUST-NNNN)
    - never hard-deleted: DELETE flips is_active
    """

    class CustomerType(models.TextChoices):
        INDIVIDUAL = "individual", "Individual"
        BUSINESS = "business", "Business"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer_code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=200)
    contact_person = models.CharField(max_length=120, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")

    billing_address = models.TextField(blank=True, default="")
    shipping_address = models.TextField(blank=True, default="")

    credit_limit = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    payment_terms = models.CharField(max_length=120, blank=True, default="")
    customer_type = models.CharField(
        max_length=16,
        choices=CustomerType.choices,
        default=CustomerType.BUSINESS,
    )

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="sales_customer_name_idx"),
            models.Index(fields=["is_active"], name="sales_customer_active_idx"),
        ]

    def clean(self):
        if self.credit_limit is not None and self.credit_limit < 0:
            raise ValidationError({"credit_limit": "credit_limit cannot be negative"})

    def __str__(self):
        return f"{self.customer_code} - {self.name}"
