import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Department",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=120)),
                ("code", models.CharField(max_length=20, unique=True)),
                ("description", models.TextField(blank=True, default="")),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Employee",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("employee_code", models.CharField(max_length=32, unique=True)),
                ("first_name", models.CharField(max_length=80)),
                ("last_name", models.CharField(max_length=80)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("hire_date", models.DateField()),
                ("job_title", models.CharField(max_length=120)),
                ("salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("hourly_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8)),
                (
                    "employment_type",
                    models.CharField(
                        choices=[
                            ("full_time", "Full Time"),
                            ("part_time", "Part Time"),
                            ("contract", "Contract"),
                            ("temporary", "Temporary"),
                        ],
                        default="full_time",
                        max_length=16,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive"), ("terminated", "Terminated")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "department",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="employees",
                        to="hrm.department",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="employee",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["status"], name="hrm_employee_status_idx"),
                    models.Index(fields=["department", "status"], name="hrm_employee_dept_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Attendance",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("date", models.DateField()),
                ("check_in", models.DateTimeField(blank=True, null=True)),
                ("check_out", models.DateTimeField(blank=True, null=True)),
                ("hours_worked", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=5)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("present", "Present"),
                            ("absent", "Absent"),
                            ("late", "Late"),
                            ("half_day", "Half Day"),
                            ("leave", "Leave"),
                        ],
                        default="present",
                        max_length=16,
                    ),
                ),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="attendance",
                        to="hrm.employee",
                    ),
                ),
            ],
            options={
                "ordering": ["-date"],
                "constraints": [
                    models.UniqueConstraint(fields=("employee", "date"), name="uniq_attendance_employee_date"),
                ],
                "indexes": [
                    models.Index(fields=["date", "status"], name="hrm_attendance_date_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Payroll",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "pay_month",
                    models.PositiveSmallIntegerField(
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(12),
                        ]
                    ),
                ),
                ("pay_year", models.PositiveIntegerField()),
                ("basic_salary", models.DecimalField(decimal_places=2, max_digits=15)),
                ("working_days", models.PositiveIntegerField(default=0)),
                ("overtime_hours", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=8)),
                ("overtime_rate", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("overtime_pay", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("allowances", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("deductions", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("gross_salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                ("net_salary", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=15)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("approved", "Approved")],
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
                        related_name="payrolls_approved",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "employee",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payrolls",
                        to="hrm.employee",
                    ),
                ),
            ],
            options={
                "ordering": ["-pay_year", "-pay_month"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("employee", "pay_month", "pay_year"),
                        name="uniq_payroll_employee_period",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("pay_month__gte", 1), ("pay_month__lte", 12)),
                        name="payroll_month_range",
                    ),
                ],
            },
        ),
    ]
