import uuid

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("inventory", "0001_initial"),
        ("quality", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="QualityStandard",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "standard_type",
                    models.CharField(
                        choices=[("iso", "ISO"), ("gmp", "GMP"), ("haccp", "HACCP"), ("custom", "Custom")],
                        default="custom",
                        max_length=16,
                    ),
                ),
                ("parameter_name", models.CharField(max_length=120)),
                ("unit_of_measure", models.CharField(blank=True, default="", max_length=32)),
                ("min_value", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("max_value", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("target_value", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("tolerance", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("test_method", models.CharField(blank=True, default="", max_length=200)),
                ("frequency", models.CharField(blank=True, default="", max_length=64)),
                ("is_critical", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quality_standards",
                        to="inventory.product",
                    ),
                ),
            ],
            options={
                "ordering": ["name", "parameter_name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("min_value__isnull", True),
                            ("max_value__isnull", True),
                            ("min_value__lte", models.F("max_value")),
                            _connector="OR",
                        ),
                        name="qs_min_not_above_max",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="QualityTest",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("test_name", models.CharField(max_length=200)),
                (
                    "test_type",
                    models.CharField(
                        choices=[
                            ("iqc", "Incoming (IQC)"),
                            ("ipqc", "In Process (IPQC)"),
                            ("oqc", "Outgoing (OQC)"),
                            ("final", "Final"),
                        ],
                        max_length=8,
                    ),
                ),
                ("test_method", models.CharField(blank=True, default="", max_length=200)),
                ("measured_value", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("expected_value", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("tolerance", models.DecimalField(blank=True, decimal_places=4, max_digits=15, null=True)),
                ("unit_of_measure", models.CharField(blank=True, default="", max_length=32)),
                ("result_text", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("in_progress", "In Progress"),
                            ("passed", "Passed"),
                            ("failed", "Failed"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("test_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("equipment_used", models.CharField(blank=True, default="", max_length=200)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "quality_control",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tests",
                        to="quality.qualitycontrol",
                    ),
                ),
                (
                    "standard",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tests",
                        to="quality.qualitystandard",
                    ),
                ),
                (
                    "tested_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quality_tests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-test_date"],
                "indexes": [
                    models.Index(fields=["quality_control", "status"], name="qt_inspection_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="QualityReport",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("report_number", models.CharField(editable=False, max_length=32, unique=True)),
                ("report_date", models.DateField(default=django.utils.timezone.localdate)),
                ("summary", models.TextField(blank=True, default="")),
                ("findings", models.TextField(blank=True, default="")),
                ("recommendations", models.TextField(blank=True, default="")),
                ("corrective_actions", models.TextField(blank=True, default="")),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("completed", "Completed"), ("approved", "Approved")],
                        default="draft",
                        max_length=16,
                    ),
                ),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "approved_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quality_reports_approved",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "generated_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quality_reports_generated",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "quality_control",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reports",
                        to="quality.qualitycontrol",
                    ),
                ),
            ],
            options={
                "ordering": ["-report_date", "-created_at"],
            },
        ),
    ]
