# maintenance/models.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q
from django.utils import timezone

User = settings.AUTH_USER_MODEL


class Equipment(models.Model):
    STATUS_ACTIVE = "active"
    STATUS_MAINTENANCE = "maintenance"
    STATUS_INACTIVE = "inactive"
    STATUS_RETIRED = "retired"

    STATUSES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_MAINTENANCE, "Under Maintenance"),
        (STATUS_INACTIVE, "Inactive"),
        (STATUS_RETIRED, "Retired"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=32, unique=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    manufacturer = models.CharField(max_length=120, blank=True, default="")
    model = models.CharField(max_length=120, blank=True, default="")
    serial_number = models.CharField(max_length=120, blank=True, default="")
    location = models.CharField(max_length=120, blank=True, default="")

    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_ACTIVE)
    purchase_date = models.DateField(null=True, blank=True)
    purchase_cost = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name_plural = "equipment"
        indexes = [
            models.Index(fields=["status"], name="mnt_equipment_status_idx"),
        ]

    def __str__(self):
        return f"{self.code} | {self.name}"


class MaintenanceOrder(models.Model):
    """
    Work on one piece of equipment.

    LIFECYCLE:
        pending -> assigned -> in_progress -> completed
        any non-terminal state -> cancelled
    Starting puts the equipment under maintenance; completing writes a
    MaintenanceHistory row and returns the equipment to service.
    """

    STATUS_PENDING = "pending"
    STATUS_ASSIGNED = "assigned"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ASSIGNED, "Assigned"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    class MaintenanceType(models.TextChoices):
        PREVENTIVE = "preventive", "Preventive"
        CORRECTIVE = "corrective", "Corrective"
        PREDICTIVE = "predictive", "Predictive"
        EMERGENCY = "emergency", "Emergency"

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"
        CRITICAL = "critical", "Critical"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_number = models.CharField(max_length=32, unique=True, editable=False)
    equipment = models.ForeignKey(Equipment, on_delete=models.PROTECT, related_name="maintenance_orders")
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    maintenance_type = models.CharField(max_length=16, choices=MaintenanceType.choices)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_PENDING)

    scheduled_date = models.DateField(null=True, blank=True)
    assigned_to = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="maintenance_orders_assigned"
    )
    started_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancelled_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="maintenance_orders_cancelled"
    )

    completion_notes = models.TextField(blank=True, default="")
    labor_hours = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    cost = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))

    created_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="maintenance_orders_created"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(labor_hours__gte=Decimal("0.00")) & Q(cost__gte=Decimal("0.00")),
                name="maintenance_order_nonnegative",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "scheduled_date"], name="mnt_order_status_idx"),
            models.Index(fields=["equipment", "status"], name="mnt_order_equipment_idx"),
        ]

    @property
    def display_number(self):
        return self.order_number

    def __str__(self):
        return f"{self.order_number} ({self.status})"


class MaintenanceHistory(models.Model):
    """
    Completed maintenance work.

    APPEND-ONLY:
    - written only by complete_maintenance_order
    - never edited or deleted
    """

    class Result(models.TextChoices):
        SUCCESSFUL = "successful", "Successful"
        PARTIAL = "partial", "Partial"
        FAILED = "failed", "Failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    maintenance_order = models.OneToOneField(
        MaintenanceOrder, on_delete=models.PROTECT, related_name="history"
    )
    equipment = models.ForeignKey(Equipment, on_delete=models.PROTECT, related_name="maintenance_history")
    maintenance_type = models.CharField(max_length=16, choices=MaintenanceOrder.MaintenanceType.choices)

    performed_at = models.DateTimeField(default=timezone.now)
    performed_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="maintenance_performed"
    )
    work_performed = models.TextField(blank=True, default="")
    parts_used = models.TextField(blank=True, default="")
    labor_hours = models.DecimalField(max_digits=8, decimal_places=2, default=Decimal("0.00"))
    cost = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal("0.00"))
    result = models.CharField(max_length=16, choices=Result.choices, default=Result.SUCCESSFUL)
    next_maintenance_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-performed_at"]
        verbose_name_plural = "maintenance history"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Maintenance history is immutable")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Maintenance history is immutable and cannot be deleted")

    def __str__(self):
        return f"{self.equipment_id} | {self.performed_at:%Y-%m-%d} | {self.result}"


class MaintenanceSchedule(models.Model):
    """
    Recurring maintenance plan for one piece of equipment.

    next_due defaults to last_performed + frequency_days.
    Deactivated instead of deleted.
    """

    STATUS_SCHEDULED = "scheduled"
    STATUS_OVERDUE = "overdue"
    STATUS_COMPLETED = "completed"
    STATUS_CANCELLED = "cancelled"

    STATUSES = [
        (STATUS_SCHEDULED, "Scheduled"),
        (STATUS_OVERDUE, "Overdue"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    equipment = models.ForeignKey(Equipment, on_delete=models.PROTECT, related_name="maintenance_schedules")
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    maintenance_type = models.CharField(
        max_length=16,
        choices=MaintenanceOrder.MaintenanceType.choices,
        default=MaintenanceOrder.MaintenanceType.PREVENTIVE,
    )

    frequency_days = models.PositiveIntegerField(null=True, blank=True)
    estimated_duration = models.PositiveIntegerField(null=True, blank=True, help_text="minutes")
    last_performed = models.DateField(null=True, blank=True)
    next_due = models.DateField()

    assigned_to = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="maintenance_schedules"
    )
    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_SCHEDULED)
    is_active = models.BooleanField(default=True)
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["next_due"]
        constraints = [
            models.CheckConstraint(
                condition=Q(frequency_days__isnull=True) | Q(frequency_days__gt=0),
                name="maintenance_schedule_frequency_positive",
            ),
        ]
        indexes = [
            models.Index(fields=["is_active", "next_due"], name="mnt_schedule_due_idx"),
        ]

    @property
    def is_overdue(self) -> bool:
        return (
            self.is_active
            and self.status in (self.STATUS_SCHEDULED, self.STATUS_OVERDUE)
            and self.next_due < timezone.localdate()
        )

    def __str__(self):
        return f"{self.equipment_id} | {self.title} | due {self.next_due}"
