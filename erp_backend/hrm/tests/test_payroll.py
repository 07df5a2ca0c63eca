# hrm/tests/test_payroll.py

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings

from core.exceptions import InvalidStateError, InvalidTransitionError, ValidationFailed
from hrm.models import Attendance, Employee, Payroll
from hrm.services.payroll_service import approve_payroll, generate_payroll

User = get_user_model()


@override_settings(PAYROLL_TOTAL_WORKING_DAYS=30)
class PayrollServiceTests(TestCase):
    """
    GUARANTEES:
    - working_days counts only present rows inside the calendar month
    - gross = basic / 30 × working_days + overtime + allowances
    - net = gross - deductions
    - one payroll per employee and period
    - a malformed period is a validation error, not a crash
    - approved payrolls are frozen
    """

    def setUp(self):
        self.hr = User.objects.create_user(email="hr@example.com", password="pass", role="hr_manager")
        self.employee = Employee.objects.create(
            employee_code="EMP-T001",
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            hire_date=date(2023, 1, 9),
            job_title="Machinist",
            salary=Decimal("3000.00"),
        )

        start = date(2024, 3, 1)
        for offset in range(22):
            Attendance.objects.create(employee=self.employee, date=start + timedelta(days=offset))
        Attendance.objects.create(employee=self.employee, date=date(2024, 3, 25), status=Attendance.STATUS_ABSENT)
        # outside the period
        Attendance.objects.create(employee=self.employee, date=date(2024, 4, 1))

    def test_gross_is_prorated_by_days_present(self):
        payroll = generate_payroll(employee_id=self.employee.id, month=3, year=2024, user=self.hr)

        self.assertEqual(payroll.working_days, 22)
        self.assertEqual(payroll.basic_salary, Decimal("3000.00"))
        self.assertEqual(payroll.gross_salary, Decimal("2200.00"))
        self.assertEqual(payroll.net_salary, Decimal("2200.00"))
        self.assertEqual(payroll.status, Payroll.STATUS_DRAFT)

    def test_overtime_allowances_and_deductions(self):
        payroll = generate_payroll(
            employee_id=self.employee.id,
            month=3,
            year=2024,
            overtime_hours=Decimal("10"),
            overtime_rate=Decimal("15.00"),
            allowances=Decimal("100.00"),
            deductions=Decimal("50.00"),
        )

        self.assertEqual(payroll.overtime_pay, Decimal("150.00"))
        self.assertEqual(payroll.gross_salary, Decimal("2450.00"))
        self.assertEqual(payroll.net_salary, Decimal("2400.00"))

    def test_duplicate_period_is_rejected(self):
        generate_payroll(employee_id=self.employee.id, month=3, year=2024)

        with self.assertRaisesMessage(InvalidStateError, "Payroll already exists for this employee and period"):
            generate_payroll(employee_id=self.employee.id, month=3, year=2024)

        self.assertEqual(Payroll.objects.count(), 1)

    def test_approval_is_terminal(self):
        payroll = generate_payroll(employee_id=self.employee.id, month=3, year=2024)

        payroll = approve_payroll(payroll_id=payroll.id, user=self.hr)
        self.assertEqual(payroll.status, Payroll.STATUS_APPROVED)
        self.assertEqual(payroll.approved_by, self.hr)
        self.assertIsNotNone(payroll.approved_at)

        with self.assertRaises(InvalidTransitionError):
            approve_payroll(payroll_id=payroll.id, user=self.hr)

    def test_malformed_period_is_a_validation_error(self):
        for month, year in (("March", 2024), (None, 2024), (13, 2024), (3, "20x4"), (3, 0)):
            with self.subTest(month=month, year=year):
                with self.assertRaises(ValidationFailed):
                    generate_payroll(employee_id=self.employee.id, month=month, year=year)

        self.assertFalse(Payroll.objects.exists())

    def test_numeric_strings_are_accepted(self):
        payroll = generate_payroll(employee_id=self.employee.id, month="3", year="2024")

        self.assertEqual((payroll.pay_month, payroll.pay_year), (3, 2024))
        self.assertEqual(payroll.working_days, 22)
