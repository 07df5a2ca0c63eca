# procurement/models.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from inventory.models import Product

User = settings.AUTH_USER_MODEL


class Priority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"


class Supplier(models.Model):
    """
    Supplier master (soft-deleted via is_active).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    supplier_code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=200)
    contact_person = models.CharField(max_length=120, blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    address = models.TextField(blank=True, default="")
    payment_terms = models.CharField(max_length=120, blank=True, default="")

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="proc_supplier_name_idx"),
            models.Index(fields=["is_active"], name="proc_supplier_active_idx"),
        ]

    def __str__(self):
        return f"{self.supplier_code} - {self.name}"


class PurchaseRequest(models.Model):
    """
    Internal request to buy something.

    Lifecycle (procurement.services.lifecycle):
        pending -> approved -> completed
        pending -> rejected
        pending/approved -> cancelled
    """

    STATUS_PENDING = "pending"
    STATUS_APPROVED = "approved"
    STATUS_REJECTED = "rejected"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    request_number = models.CharField(max_length=32, unique=True, editable=False)
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    justification = models.TextField(blank=True, default="")

    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="purchase_requests",
    )
    quantity = models.PositiveIntegerField(default=1)
    department = models.CharField(max_length=120, blank=True, default="")
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    estimated_cost = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    requested_date = models.DateField(default=timezone.localdate)
    required_date = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PENDING)

    requested_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_requests"
    )
    approved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_requests_approved"
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    approval_notes = models.TextField(blank=True, default="")

    rejected_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_requests_rejected"
    )
    rejected_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True, default="")

    cancelled_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_requests_cancelled"
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)

    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status", "created_at"], name="proc_pr_status_idx"),
        ]

    @property
    def display_number(self):
        return self.request_number

    def __str__(self):
        return f"{self.request_number} ({self.status})"


class PurchaseOrder(models.Model):
    """
    Supplier purchase order header.

    - total_amount = Σ(line.quantity × line.unit_price), fixed at creation
    - receiving is performed by procurement.services.receiving_service
    """

    STATUS_PENDING = "pending"
    STATUS_CONFIRMED = "confirmed"
    STATUS_PARTIALLY_RECEIVED = "partially_received"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_PARTIALLY_RECEIVED, "Partially Received"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=32, unique=True, editable=False)

    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.PROTECT,
        related_name="purchase_orders",
    )
    purchase_request = models.ForeignKey(
        PurchaseRequest,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="purchase_orders",
    )

    order_date = models.DateField(default=timezone.localdate)
    expected_delivery_date = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PENDING)

    total_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    payment_terms = models.CharField(max_length=120, blank=True, default="")
    delivery_address = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    received_date = models.DateField(null=True, blank=True)
    receiving_notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_orders_created"
    )
    confirmed_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_orders_confirmed"
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)

    cancelled_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_orders_cancelled"
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(total_amount__gte=Decimal("0.00")),
                name="purchase_order_total_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "created_at"], name="proc_po_status_idx"),
            models.Index(fields=["supplier", "order_date"], name="proc_po_supplier_idx"),
        ]

    @property
    def display_number(self):
        return self.order_number

    def __str__(self):
        return f"{self.order_number} ({self.status})"


class PurchaseOrderItem(models.Model):
    """
    Purchase order line.

    received_quantity is cumulative and can never exceed quantity
    (service check + DB constraint).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    purchase_order = models.ForeignKey(
        PurchaseOrder,
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        Product,
        on_delete=models.PROTECT,
        related_name="purchase_order_items",
    )

    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    total_price = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    received_quantity = models.PositiveIntegerField(default=0)
    received_date = models.DateField(null=True, blank=True)

    specifications = models.TextField(blank=True, default="")

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="purchase_order_item_quantity_positive",
            ),
            models.CheckConstraint(
                condition=Q(unit_price__gte=Decimal("0.00")),
                name="purchase_order_item_price_nonnegative",
            ),
            models.CheckConstraint(
                condition=Q(received_quantity__lte=F("quantity")),
                name="purchase_order_item_no_over_receipt",
            ),
        ]

    def clean(self):
        if self.quantity is not None and self.quantity <= 0:
            raise ValidationError({"quantity": "quantity must be > 0"})
        if self.unit_price is not None and self.unit_price < 0:
            raise ValidationError({"unit_price": "unit_price cannot be negative"})
        if (
            self.received_quantity is not None
            and self.quantity is not None
            and self.received_quantity > self.quantity
        ):
            raise ValidationError(
                {"received_quantity": "received_quantity cannot exceed ordered quantity"}
            )

    @property
    def remaining_quantity(self) -> int:
        return max(int(self.quantity or 0) - int(self.received_quantity or 0), 0)

    @property
    def is_fully_received(self) -> bool:
        return int(self.received_quantity or 0) >= int(self.quantity or 0)

    def __str__(self):
        return f"{self.product} x {self.quantity}"
