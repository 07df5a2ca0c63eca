import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

MAINTENANCE_TYPES = [
    ("preventive", "Preventive"),
    ("corrective", "Corrective"),
    ("predictive", "Predictive"),
    ("emergency", "Emergency"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Equipment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("code", models.CharField(max_length=32, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("manufacturer", models.CharField(blank=True, default="", max_length=120)),
                ("model", models.CharField(blank=True, default="", max_length=120)),
                ("serial_number", models.CharField(blank=True, default="", max_length=120)),
                ("location", models.CharField(blank=True, default="", max_length=120)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("maintenance", "Under Maintenance"),
                            ("inactive", "Inactive"),
                            ("retired", "Retired"),
                        ],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("purchase_date", models.DateField(blank=True, null=True)),
                ("purchase_cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["code"],
                "verbose_name_plural": "equipment",
                "indexes": [
                    models.Index(fields=["status"], name="mnt_equipment_status_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MaintenanceOrder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("order_number", models.CharField(editable=False, max_length=32, unique=True)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("maintenance_type", models.CharField(choices=MAINTENANCE_TYPES, max_length=16)),
                (
                    "priority",
                    models.CharField(
                        choices=[("low", "Low"), ("medium", "Medium"), ("high", "High"), ("critical", "Critical")],
                        default="medium",
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("assigned", "Assigned"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("scheduled_date", models.DateField(blank=True, null=True)),
                ("started_at", models.DateTimeField(blank=True, null=True)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("completion_notes", models.TextField(blank=True, default="")),
                ("labor_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8)),
                ("cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "assigned_to",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_orders_assigned",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "cancelled_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_orders_cancelled",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_orders_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "equipment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="maintenance_orders",
                        to="maintenance.equipment",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("labor_hours__gte", Decimal("0.00")), ("cost__gte", Decimal("0.00"))),
                        name="maintenance_order_nonnegative",
                    ),
                ],
                "indexes": [
                    models.Index(fields=["status", "scheduled_date"], name="mnt_order_status_idx"),
                    models.Index(fields=["equipment", "status"], name="mnt_order_equipment_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="MaintenanceHistory",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("maintenance_type", models.CharField(choices=MAINTENANCE_TYPES, max_length=16)),
                ("performed_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("work_performed", models.TextField(blank=True, default="")),
                ("parts_used", models.TextField(blank=True, default="")),
                ("labor_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8)),
                ("cost", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                (
                    "result",
                    models.CharField(
                        choices=[("successful", "Successful"), ("partial", "Partial"), ("failed", "Failed")],
                        default="successful",
                        max_length=16,
                    ),
                ),
                ("next_maintenance_date", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "equipment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="maintenance_history",
                        to="maintenance.equipment",
                    ),
                ),
                (
                    "maintenance_order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="history",
                        to="maintenance.maintenanceorder",
                    ),
                ),
                (
                    "performed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_performed",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-performed_at"],
                "verbose_name_plural": "maintenance history",
            },
        ),
    ]
