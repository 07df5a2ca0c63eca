# hrm/api/serializers.py

from django.db import transaction
from rest_framework import serializers

from core.services.sequences import next_code
from hrm.models import Attendance, Department, Employee, Payroll
from hrm.services.employee_service import EMPLOYEE_CODE_PREFIX


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ["id", "name", "code", "description", "is_active", "created_at", "updated_at"]
        read_only_fields = ("id", "is_active", "created_at", "updated_at")

    def validate_code(self, value):
        return value.strip().upper()


class EmployeeSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(read_only=True)
    department_name = serializers.CharField(source="department.name", read_only=True, default=None)
    department_id = serializers.PrimaryKeyRelatedField(
        source="department",
        queryset=Department.objects.filter(is_active=True),
        required=False,
        allow_null=True,
    )

    class Meta:
        model = Employee
        fields = [
            "id",
            "employee_code",
            "first_name",
            "last_name",
            "full_name",
            "email",
            "phone",
            "hire_date",
            "job_title",
            "department_id",
            "department_name",
            "salary",
            "hourly_rate",
            "employment_type",
            "status",
            "user",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "employee_code", "created_at", "updated_at")

    def validate(self, attrs):
        for field in ("salary", "hourly_rate"):
            if attrs.get(field) is not None and attrs[field] < 0:
                raise serializers.ValidationError({field: f"{field} cannot be negative"})
        return attrs

    @transaction.atomic
    def create(self, validated_data):
        validated_data["employee_code"] = next_code(EMPLOYEE_CODE_PREFIX)
        return super().create(validated_data)


class AttendanceSerializer(serializers.ModelSerializer):
    employee_code = serializers.CharField(source="employee.employee_code", read_only=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)

    class Meta:
        model = Attendance
        fields = [
            "id",
            "employee",
            "employee_code",
            "employee_name",
            "date",
            "check_in",
            "check_out",
            "hours_worked",
            "status",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class RecordAttendanceSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()
    date = serializers.DateField()
    status = serializers.ChoiceField(choices=Attendance.STATUSES, default=Attendance.STATUS_PRESENT)
    check_in = serializers.DateTimeField(required=False, allow_null=True)
    check_out = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ClockSerializer(serializers.Serializer):
    """employee_id defaults to the employee linked to the requesting user."""

    employee_id = serializers.UUIDField(required=False)


class PayrollSerializer(serializers.ModelSerializer):
    employee_code = serializers.CharField(source="employee.employee_code", read_only=True)
    employee_name = serializers.CharField(source="employee.full_name", read_only=True)

    class Meta:
        model = Payroll
        fields = [
            "id",
            "employee",
            "employee_code",
            "employee_name",
            "pay_month",
            "pay_year",
            "basic_salary",
            "working_days",
            "overtime_hours",
            "overtime_rate",
            "overtime_pay",
            "allowances",
            "deductions",
            "gross_salary",
            "net_salary",
            "status",
            "approved_by",
            "approved_at",
            "created_at",
        ]
        read_only_fields = fields


class GeneratePayrollSerializer(serializers.Serializer):
    employee_id = serializers.UUIDField()
    pay_month = serializers.IntegerField(source="month", min_value=1, max_value=12)
    pay_year = serializers.IntegerField(source="year", min_value=2000, max_value=9999)
    basic_salary = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, required=False)
    overtime_hours = serializers.DecimalField(max_digits=8, decimal_places=2, min_value=0, default=0)
    overtime_rate = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, default=0)
    allowances = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, default=0)
    deductions = serializers.DecimalField(max_digits=15, decimal_places=2, min_value=0, default=0)
