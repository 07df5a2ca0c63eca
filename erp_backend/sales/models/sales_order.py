# sales/models/sales_order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from inventory.models import Product
from sales.models.customer import Customer

User = settings.AUTH_USER_MODEL


class SalesOrder(models.Model):
    """
    Customer order header.

    TOTALS (fixed by sales.services.order_service):
        subtotal     = Σ line_total
        total_amount = subtotal + tax_amount - discount_amount

    Lifecycle: sales.services.lifecycle.SalesOrderLifecycle
    """

    STATUS_DRAFT = "draft"
    STATUS_CONFIRMED = "confirmed"
    STATUS_IN_PRODUCTION = "in_production"
    STATUS_READY_TO_SHIP = "ready_to_ship"
    STATUS_SHIPPED = "shipped"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_IN_PRODUCTION, "In Production"),
        (STATUS_READY_TO_SHIP, "Ready To Ship"),
        (STATUS_SHIPPED, "Shipped"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        URGENT = "urgent", "Urgent"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=32, unique=True, editable=False)
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="sales_orders")

    order_date = models.DateField(default=timezone.localdate)
    required_date = models.DateField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_DRAFT)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)

    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    discount_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    total_amount = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    shipping_address = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="sales_orders_created"
    )

    confirmed_at = models.DateTimeField(null=True, blank=True)
    shipped_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)

    cancelled_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="sales_orders_cancelled"
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
                name="sales_order_total_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "order_date"], name="sales_order_status_idx"),
            models.Index(fields=["customer", "order_date"], name="sales_order_customer_idx"),
        ]

    @property
    def display_number(self):
        return self.order_number

    def __str__(self):
        return f"{self.order_number} ({self.status})"


class SalesOrderItem(models.Model):
    """
    line_total = quantity_ordered × unit_price × (1 - discount_percentage / 100)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    sales_order = models.ForeignKey(SalesOrder, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="sales_order_items")

    line_number = models.PositiveIntegerField()
    quantity_ordered = models.PositiveIntegerField()
    quantity_shipped = models.PositiveIntegerField(default=0)

    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0.00"))
    line_total = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    class Meta:
        ordering = ["line_number"]
        constraints = [
            models.UniqueConstraint(
                fields=["sales_order", "line_number"],
                name="uniq_sales_order_line_number",
            ),
            models.CheckConstraint(
                condition=Q(quantity_ordered__gt=0),
                name="sales_order_item_quantity_positive",
            ),
            models.CheckConstraint(
                condition=Q(quantity_shipped__lte=F("quantity_ordered")),
                name="sales_order_item_no_over_shipment",
            ),
        ]

    def clean(self):
        if self.discount_percentage is not None and not (0 <= self.discount_percentage <= 100):
            raise ValidationError({"discount_percentage": "discount_percentage must be between 0 and 100"})

    def __str__(self):
        return f"{self.sales_order_id} #{self.line_number}"
