# hrm/filters.py

import django_filters

from hrm.models import Attendance, Employee, Payroll


class EmployeeFilter(django_filters.FilterSet):
    class Meta:
        model = Employee
        fields = ["department", "status", "employment_type"]


class AttendanceFilter(django_filters.FilterSet):
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = Attendance
        fields = ["employee", "status", "date"]


class PayrollFilter(django_filters.FilterSet):
    class Meta:
        model = Payroll
        fields = ["employee", "pay_month", "pay_year", "status"]
