import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("maintenance", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MaintenanceSchedule",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                (
                    "maintenance_type",
                    models.CharField(
                        choices=[
                            ("preventive", "Preventive"),
                            ("corrective", "Corrective"),
                            ("predictive", "Predictive"),
                            ("emergency", "Emergency"),
                        ],
                        default="preventive",
                        max_length=16,
                    ),
                ),
                ("frequency_days", models.PositiveIntegerField(blank=True, null=True)),
                ("estimated_duration", models.PositiveIntegerField(blank=True, help_text="minutes", null=True)),
                ("last_performed", models.DateField(blank=True, null=True)),
                ("next_due", models.DateField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("scheduled", "Scheduled"),
                            ("overdue", "Overdue"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="scheduled",
                        max_length=16,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "assigned_to",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_schedules",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "equipment",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="maintenance_schedules",
                        to="maintenance.equipment",
                    ),
                ),
            ],
            options={
                "ordering": ["next_due"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("frequency_days__isnull", True), ("frequency_days__gt", 0), _connector="OR"),
                        name="maintenance_schedule_frequency_positive",
                    ),
                ],
                "indexes": [
                    models.Index(fields=["is_active", "next_due"], name="mnt_schedule_due_idx"),
                ],
            },
        ),
    ]
