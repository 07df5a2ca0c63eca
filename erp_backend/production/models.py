# production/models.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from inventory.models import Product
from sales.models import SalesOrder

User = settings.AUTH_USER_MODEL


class ProductionOrder(models.Model):
    """
    Work order for manufacturing a quantity of one product.

    LIFECYCLE:
        planned -> released -> in_progress -> completed
        any non-terminal state -> cancelled
    actual_start_date is stamped on the first entry to in_progress,
    actual_end_date on completion.
    """

    STATUS_PLANNED = "planned"
    STATUS_RELEASED = "released"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_PLANNED, "Planned"),
        (STATUS_RELEASED, "Released"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        URGENT = "urgent", "Urgent"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=32, unique=True, editable=False)
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="production_orders")
    sales_order = models.ForeignKey(
        SalesOrder,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="production_orders",
    )

    quantity_planned = models.PositiveIntegerField()
    quantity_produced = models.PositiveIntegerField(default=0)
    quantity_rejected = models.PositiveIntegerField(default=0)

    start_date = models.DateField(null=True, blank=True)
    due_date = models.DateField(null=True, blank=True)
    actual_start_date = models.DateTimeField(null=True, blank=True)
    actual_end_date = models.DateTimeField(null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUSES, default=STATUS_PLANNED)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="production_orders_created"
    )
    cancelled_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="production_orders_cancelled"
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity_planned__gt=0),
                name="production_order_quantity_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "start_date"], name="prod_order_status_idx"),
            models.Index(fields=["product"], name="prod_order_product_idx"),
        ]

    def clean(self):
        if self.start_date and self.due_date and self.due_date < self.start_date:
            raise ValidationError({"due_date": "due_date cannot precede start_date"})

    @property
    def display_number(self):
        return self.order_number

    def __str__(self):
        return f"{self.order_number} ({self.status})"
