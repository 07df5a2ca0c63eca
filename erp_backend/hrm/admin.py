# hrm/admin.py

from django.contrib import admin

from hrm.models import Attendance, Department, Employee, Payroll


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "is_active")
    search_fields = ("code", "name")


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ("employee_code", "first_name", "last_name", "department", "job_title", "status")
    list_filter = ("status", "employment_type", "department")
    search_fields = ("employee_code", "first_name", "last_name", "email")
    readonly_fields = ("employee_code",)


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ("employee", "date", "check_in", "check_out", "hours_worked", "status")
    list_filter = ("status", "date")


@admin.register(Payroll)
class PayrollAdmin(admin.ModelAdmin):
    list_display = ("employee", "pay_year", "pay_month", "working_days", "net_salary", "status")
    list_filter = ("status", "pay_year")
    readonly_fields = ("gross_salary", "net_salary", "approved_by", "approved_at")
