# hrm/tests/test_attendance.py

from datetime import date, datetime, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from core.exceptions import InvalidStateError
from hrm.models import Attendance, Employee
from hrm.services.attendance_service import check_in, check_out, record_attendance


class AttendanceServiceTests(TestCase):
    """
    GUARANTEES:
    - one check-in and one check-out per employee per day
    - hours_worked is derived from the two timestamps
    - check_out never precedes check_in
    """

    def setUp(self):
        self.employee = Employee.objects.create(
            employee_code="EMP-T001",
            first_name="Grace",
            last_name="Hopper",
            email="grace@example.com",
            hire_date=date(2022, 5, 2),
            job_title="Planner",
        )
        self.morning = datetime(2024, 6, 3, 8, 0, tzinfo=dt_timezone.utc)

    def test_check_in_then_out(self):
        row = check_in(employee_id=self.employee.id, when=self.morning)
        self.assertEqual(row.status, Attendance.STATUS_PRESENT)

        row = check_out(employee_id=self.employee.id, when=self.morning + timedelta(hours=8, minutes=30))

        self.assertEqual(row.hours_worked, Decimal("8.50"))
        self.assertEqual(Attendance.objects.filter(employee=self.employee).count(), 1)

    def test_second_check_in_is_rejected(self):
        check_in(employee_id=self.employee.id, when=self.morning)

        with self.assertRaisesMessage(InvalidStateError, "Employee already checked in today"):
            check_in(employee_id=self.employee.id, when=self.morning + timedelta(hours=1))

    def test_check_out_requires_check_in(self):
        with self.assertRaisesMessage(InvalidStateError, "Employee has not checked in today"):
            check_out(employee_id=self.employee.id, when=self.morning)

    def test_second_check_out_is_rejected(self):
        check_in(employee_id=self.employee.id, when=self.morning)
        check_out(employee_id=self.employee.id, when=self.morning + timedelta(hours=4))

        with self.assertRaisesMessage(InvalidStateError, "Employee already checked out today"):
            check_out(employee_id=self.employee.id, when=self.morning + timedelta(hours=5))

    def test_terminated_employee_cannot_check_in(self):
        self.employee.status = Employee.STATUS_TERMINATED
        self.employee.save()

        with self.assertRaises(InvalidStateError):
            check_in(employee_id=self.employee.id, when=self.morning)

    def test_manual_record_upserts_by_day(self):
        record_attendance(employee_id=self.employee.id, date=date(2024, 6, 4), status=Attendance.STATUS_ABSENT)
        row = record_attendance(
            employee_id=self.employee.id,
            date=date(2024, 6, 4),
            status=Attendance.STATUS_LATE,
            check_in=self.morning + timedelta(days=1, hours=1),
            check_out=self.morning + timedelta(days=1, hours=7),
        )

        self.assertEqual(Attendance.objects.filter(employee=self.employee).count(), 1)
        self.assertEqual(row.status, Attendance.STATUS_LATE)
        self.assertEqual(row.hours_worked, Decimal("6.00"))

    def test_check_out_before_check_in_is_invalid(self):
        row = Attendance(
            employee=self.employee,
            date=date(2024, 6, 5),
            check_in=self.morning,
            check_out=self.morning - timedelta(hours=1),
        )
        with self.assertRaises(ValidationError):
            row.full_clean()

        row = Attendance(employee=self.employee, date=date(2024, 6, 5), check_out=self.morning)
        with self.assertRaises(ValidationError):
            row.full_clean()
