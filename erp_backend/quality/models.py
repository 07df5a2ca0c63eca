# quality/models.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from inventory.models import Product
from production.models import ProductionOrder

User = settings.AUTH_USER_MODEL


class QualityControl(models.Model):
    """
    One inspection of a product lot.

    INVARIANTS:
    - quantity_inspected > 0
    - quantity_passed + quantity_failed <= quantity_inspected
    - passed / failed / conditional are final results
    """

    STATUS_PENDING = "pending"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_PASSED = "passed"
    STATUS_FAILED = "failed"
    STATUS_CONDITIONAL = "conditional"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_PASSED, "Passed"),
        (STATUS_FAILED, "Failed"),
        (STATUS_CONDITIONAL, "Conditional"),
    ]

    class InspectionType(models.TextChoices):
        INCOMING = "incoming", "Incoming"
        IN_PROCESS = "in_process", "In Process"
        FINAL = "final", "Final"
        AUDIT = "audit", "Audit"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    inspection_number = models.CharField(max_length=32, unique=True, editable=False)
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="quality_inspections")
    production_order = models.ForeignKey(
        ProductionOrder,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="quality_inspections",
    )
    batch_number = models.CharField(max_length=64, blank=True, default="")
    inspection_type = models.CharField(max_length=16, choices=InspectionType.choices)

    quantity_inspected = models.PositiveIntegerField()
    quantity_passed = models.PositiveIntegerField(default=0)
    quantity_failed = models.PositiveIntegerField(default=0)

    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_PENDING)
    defects_found = models.TextField(blank=True, default="")
    corrective_actions = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    inspector = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="quality_inspections"
    )
    inspected_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity_inspected__gt=0),
                name="qc_quantity_inspected_positive",
            ),
            models.CheckConstraint(
                condition=Q(quantity_passed__lte=F("quantity_inspected") - F("quantity_failed")),
                name="qc_results_within_inspected",
            ),
        ]
        indexes = [
            models.Index(fields=["status"], name="qc_status_idx"),
            models.Index(fields=["product", "created_at"], name="qc_product_idx"),
        ]

    def clean(self):
        if (self.quantity_passed or 0) + (self.quantity_failed or 0) > (self.quantity_inspected or 0):
            raise ValidationError("quantity_passed + quantity_failed cannot exceed quantity_inspected")

    @property
    def display_number(self):
        return self.inspection_number

    def __str__(self):
        return f"{self.inspection_number} ({self.status})"


class QualityStandard(models.Model):
    """
    Acceptance limits for one measured parameter.

    INVARIANTS:
    - min_value <= max_value
    - target_value, when set, lies inside [min_value, max_value]
    """

    class StandardType(models.TextChoices):
        ISO = "iso", "ISO"
        GMP = "gmp", "GMP"
        HACCP = "haccp", "HACCP"
        CUSTOM = "custom", "Custom"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    product = models.ForeignKey(
        Product, on_delete=models.SET_NULL, null=True, blank=True, related_name="quality_standards"
    )
    standard_type = models.CharField(max_length=16, choices=StandardType.choices, default=StandardType.CUSTOM)

    parameter_name = models.CharField(max_length=120)
    unit_of_measure = models.CharField(max_length=32, blank=True, default="")
    min_value = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)
    max_value = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)
    target_value = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)
    tolerance = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)

    test_method = models.CharField(max_length=200, blank=True, default="")
    frequency = models.CharField(max_length=64, blank=True, default="")
    is_critical = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "parameter_name"]
        constraints = [
            models.CheckConstraint(
                condition=Q(min_value__isnull=True) | Q(max_value__isnull=True) | Q(min_value__lte=F("max_value")),
                name="qs_min_not_above_max",
            ),
        ]

    def clean(self):
        low, high, target = self.min_value, self.max_value, self.target_value
        if low is not None and high is not None and low > high:
            raise ValidationError({"max_value": "max_value cannot be below min_value"})
        if target is not None and ((low is not None and target < low) or (high is not None and target > high)):
            raise ValidationError({"target_value": "target_value must lie between min_value and max_value"})
        if self.tolerance is not None and self.tolerance < 0:
            raise ValidationError({"tolerance": "tolerance cannot be negative"})

    def accepts(self, value) -> bool:
        """True when `value` satisfies every limit this standard declares."""
        if self.min_value is not None and value < self.min_value:
            return False
        if self.max_value is not None and value > self.max_value:
            return False
        if self.target_value is not None and self.tolerance is not None:
            return abs(value - self.target_value) <= self.tolerance
        return True

    def __str__(self):
        return f"{self.name} | {self.parameter_name}"


class QualityTest(models.Model):
    """One measurement taken during an inspection against a standard."""

    STATUS_PENDING = "pending"
    STATUS_IN_PROGRESS = "in_progress"
    STATUS_PASSED = "passed"
    STATUS_FAILED = "failed"

    STATUSES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_IN_PROGRESS, "In Progress"),
        (STATUS_PASSED, "Passed"),
        (STATUS_FAILED, "Failed"),
    ]

    class TestType(models.TextChoices):
        IQC = "iqc", "Incoming (IQC)"
        IPQC = "ipqc", "In Process (IPQC)"
        OQC = "oqc", "Outgoing (OQC)"
        FINAL = "final", "Final"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    quality_control = models.ForeignKey(QualityControl, on_delete=models.PROTECT, related_name="tests")
    standard = models.ForeignKey(QualityStandard, on_delete=models.PROTECT, related_name="tests")
    test_name = models.CharField(max_length=200)
    test_type = models.CharField(max_length=8, choices=TestType.choices)
    test_method = models.CharField(max_length=200, blank=True, default="")

    measured_value = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)
    expected_value = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)
    tolerance = models.DecimalField(max_digits=15, decimal_places=4, null=True, blank=True)
    unit_of_measure = models.CharField(max_length=32, blank=True, default="")
    result_text = models.TextField(blank=True, default="")

    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_PENDING)
    test_date = models.DateTimeField(default=timezone.now)
    tested_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="quality_tests"
    )
    equipment_used = models.CharField(max_length=200, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-test_date"]
        indexes = [
            models.Index(fields=["quality_control", "status"], name="qt_inspection_idx"),
        ]

    def __str__(self):
        return f"{self.test_name} ({self.status})"


class QualityReport(models.Model):
    """
    Written summary of an inspection.

    LIFECYCLE:
        draft -> completed -> approved
    Approved reports are frozen.
    """

    STATUS_DRAFT = "draft"
    STATUS_COMPLETED = "completed"
    STATUS_APPROVED = "approved"

    STATUSES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_COMPLETED, "Completed"),
        (STATUS_APPROVED, "Approved"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    report_number = models.CharField(max_length=32, unique=True, editable=False)
    quality_control = models.ForeignKey(QualityControl, on_delete=models.PROTECT, related_name="reports")
    report_date = models.DateField(default=timezone.localdate)

    summary = models.TextField(blank=True, default="")
    findings = models.TextField(blank=True, default="")
    recommendations = models.TextField(blank=True, default="")
    corrective_actions = models.TextField(blank=True, default="")

    status = models.CharField(max_length=16, choices=STATUSES, default=STATUS_DRAFT)
    generated_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="quality_reports_generated"
    )
    approved_by = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name="quality_reports_approved"
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-report_date", "-created_at"]

    @property
    def display_number(self):
        return self.report_number

    def __str__(self):
        return f"{self.report_number} ({self.status})"
