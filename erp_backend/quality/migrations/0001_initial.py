import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("inventory", "0001_initial"),
        ("production", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="QualityControl",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("inspection_number", models.CharField(editable=False, max_length=32, unique=True)),
                ("batch_number", models.CharField(blank=True, default="", max_length=64)),
                (
                    "inspection_type",
                    models.CharField(
                        choices=[
                            ("incoming", "Incoming"),
                            ("in_process", "In Process"),
                            ("final", "Final"),
                            ("audit", "Audit"),
                        ],
                        max_length=16,
                    ),
                ),
                ("quantity_inspected", models.PositiveIntegerField()),
                ("quantity_passed", models.PositiveIntegerField(default=0)),
                ("quantity_failed", models.PositiveIntegerField(default=0)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("in_progress", "In Progress"),
                            ("passed", "Passed"),
                            ("failed", "Failed"),
                            ("conditional", "Conditional"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("defects_found", models.TextField(blank=True, default="")),
                ("corrective_actions", models.TextField(blank=True, default="")),
                ("notes", models.TextField(blank=True, default="")),
                ("inspected_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "inspector",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quality_inspections",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="quality_inspections",
                        to="inventory.product",
                    ),
                ),
                (
                    "production_order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="quality_inspections",
                        to="production.productionorder",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("quantity_inspected__gt", 0)),
                        name="qc_quantity_inspected_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("quantity_passed__lte", models.F("quantity_inspected") - models.F("quantity_failed"))
                        ),
                        name="qc_results_within_inspected",
                    ),
                ],
                "indexes": [
                    models.Index(fields=["status"], name="qc_status_idx"),
                    models.Index(fields=["product", "created_at"], name="qc_product_idx"),
                ],
            },
        ),
    ]
