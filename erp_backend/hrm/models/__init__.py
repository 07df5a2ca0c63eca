from hrm.models.employee import Department, Employee
from hrm.models.attendance import Attendance
from hrm.models.payroll import Payroll

__all__ = ["Department", "Employee", "Attendance", "Payroll"]
