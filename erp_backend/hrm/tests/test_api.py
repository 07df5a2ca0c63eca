# hrm/tests/test_api.py

from datetime import date

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from hrm.models import Attendance, Employee

User = get_user_model()


class HrmApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.hr = User.objects.create_user(email="hr@example.com", password="pass", role="hr_manager")
        self.worker = User.objects.create_user(email="worker@example.com", password="pass", role="user")
        self.own = Employee.objects.create(
            employee_code="EMP-T001",
            first_name="Linus",
            last_name="Worker",
            email="linus@example.com",
            hire_date=date(2024, 1, 2),
            job_title="Assembler",
            user=self.worker,
        )
        self.other = Employee.objects.create(
            employee_code="EMP-T002",
            first_name="Other",
            last_name="Person",
            email="other@example.com",
            hire_date=date(2024, 1, 2),
            job_title="Assembler",
        )

    # =====================================================
    # EMPLOYEES
    # =====================================================

    def test_employee_codes_are_issued(self):
        self.client.force_authenticate(self.hr)

        response = self.client.post(
            reverse("hrm-employees-list"),
            {
                "first_name": "New",
                "last_name": "Hire",
                "email": "new@example.com",
                "hire_date": "2024-05-01",
                "job_title": "Welder",
                "salary": "2500.00",
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertRegex(response.data["data"]["employee_code"], r"^EMP-\d{4}$")

    def test_delete_terminates_employee(self):
        self.client.force_authenticate(self.hr)

        response = self.client.delete(reverse("hrm-employees-detail", args=[self.other.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["status"], "terminated")
        self.assertTrue(Employee.objects.filter(id=self.other.id).exists())
        self.assertEqual(Employee.objects.get(id=self.other.id).status, Employee.STATUS_TERMINATED)

    def test_plain_user_cannot_list_employees(self):
        self.client.force_authenticate(self.worker)
        response = self.client.get(reverse("hrm-employees-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # =====================================================
    # ATTENDANCE
    # =====================================================

    def test_user_checks_in_for_themselves(self):
        self.client.force_authenticate(self.worker)

        first = self.client.post(reverse("hrm-attendance-checkin"), {}, format="json")
        second = self.client.post(reverse("hrm-attendance-checkin"), {}, format="json")

        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(second.data["error"], "Employee already checked in today")
        self.assertEqual(Attendance.objects.filter(employee=self.own).count(), 1)

        out = self.client.post(reverse("hrm-attendance-checkout"), {}, format="json")
        self.assertEqual(out.status_code, status.HTTP_200_OK)

    def test_user_cannot_clock_someone_else(self):
        self.client.force_authenticate(self.worker)

        response = self.client.post(
            reverse("hrm-attendance-checkin"),
            {"employee_id": str(self.other.id)},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # =====================================================
    # PAYROLL
    # =====================================================

    def test_generate_and_approve_payroll(self):
        self.client.force_authenticate(self.hr)

        response = self.client.post(
            reverse("hrm-payroll-generate"),
            {"employee_id": str(self.own.id), "pay_month": 2, "pay_year": 2024, "basic_salary": "1500.00"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["status"], "draft")

        approve = self.client.post(reverse("hrm-payroll-approve", args=[response.data["data"]["id"]]))
        self.assertEqual(approve.status_code, status.HTTP_200_OK)
        self.assertEqual(approve.data["data"]["status"], "approved")

    def test_dashboard(self):
        self.client.force_authenticate(self.hr)
        response = self.client.get(reverse("hrm-dashboard"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["summary"]["total_employees"], 2)
