# maintenance/tests/test_schedules.py

from datetime import date, timedelta

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from maintenance.models import Equipment, MaintenanceSchedule
from maintenance.services.reports import maintenance_dashboard

User = get_user_model()


class MaintenanceScheduleApiTests(TestCase):
    """
    GUARANTEES:
    - next_due is derived from last_performed + frequency_days when omitted
    - a schedule needs either next_due or a last_performed / frequency pair
    - retired equipment cannot be scheduled
    - DELETE deactivates the schedule
    - due schedules appear on the dashboard
    """

    def setUp(self):
        self.client = APIClient()
        self.tech = User.objects.create_user(email="tech@example.com", password="pass", role="maintenance_technician")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.press = Equipment.objects.create(code="PRESS-01", name="Hydraulic Press")
        self.client.force_authenticate(self.tech)

    def _create(self, **overrides):
        payload = {"equipment": str(self.press.id), "title": "Oil change", "maintenance_type": "preventive"}
        payload.update(overrides)
        return self.client.post(reverse("maintenance-schedules-list"), payload, format="json")

    # =====================================================
    # CREATE / UPDATE
    # =====================================================

    def test_next_due_is_derived_from_frequency(self):
        response = self._create(last_performed="2024-03-01", frequency_days=30)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["next_due"], "2024-03-31")
        self.assertEqual(data["equipment_code"], "PRESS-01")
        self.assertEqual(data["status"], MaintenanceSchedule.STATUS_SCHEDULED)
        self.assertTrue(data["is_overdue"])

    def test_explicit_next_due_is_kept(self):
        due = (timezone.localdate() + timedelta(days=10)).isoformat()

        response = self._create(next_due=due, frequency_days=90)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["next_due"], due)
        self.assertFalse(response.data["data"]["is_overdue"])

    def test_next_due_or_frequency_is_required(self):
        response = self._create(frequency_days=30)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("next_due", response.data["errors"])
        self.assertFalse(MaintenanceSchedule.objects.exists())

    def test_next_due_cannot_precede_last_performed(self):
        response = self._create(last_performed="2024-03-01", next_due="2024-02-01")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_zero_frequency_is_rejected(self):
        response = self._create(last_performed="2024-03-01", frequency_days=0)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("frequency_days", response.data["errors"])

    def test_retired_equipment_cannot_be_scheduled(self):
        self.press.status = Equipment.STATUS_RETIRED
        self.press.save()

        response = self._create(next_due="2030-01-01")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("equipment", response.data["errors"])

    def test_recording_last_performed_rolls_next_due(self):
        schedule_id = self._create(last_performed="2024-03-01", frequency_days=30).data["data"]["id"]

        response = self.client.patch(
            reverse("maintenance-schedules-detail", args=[schedule_id]),
            {"last_performed": "2024-04-02"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(MaintenanceSchedule.objects.get(id=schedule_id).next_due, date(2024, 5, 2))

    def test_delete_deactivates_schedule(self):
        schedule_id = self._create(next_due="2030-01-01").data["data"]["id"]

        response = self.client.delete(reverse("maintenance-schedules-detail", args=[schedule_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(MaintenanceSchedule.objects.get(id=schedule_id).is_active)

    def test_operator_is_read_only(self):
        self._create(next_due="2030-01-01")
        self.client.force_authenticate(self.operator)

        listed = self.client.get(reverse("maintenance-schedules-list"))
        self.assertEqual(listed.status_code, status.HTTP_200_OK)
        self.assertEqual(listed.data["pagination"]["totalItems"], 1)

        response = self._create(next_due="2030-02-01")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # =====================================================
    # DASHBOARD
    # =====================================================

    def test_dashboard_lists_due_schedules(self):
        today = timezone.localdate()
        MaintenanceSchedule.objects.create(equipment=self.press, title="Late", next_due=today - timedelta(days=2))
        MaintenanceSchedule.objects.create(equipment=self.press, title="Soon", next_due=today + timedelta(days=3))
        MaintenanceSchedule.objects.create(equipment=self.press, title="Later", next_due=today + timedelta(days=30))
        MaintenanceSchedule.objects.create(
            equipment=self.press, title="Dropped", next_due=today, is_active=False
        )

        rows = maintenance_dashboard()["scheduled_maintenance"]

        self.assertEqual([r["title"] for r in rows], ["Late", "Soon"])
        self.assertEqual([r["overdue"] for r in rows], [True, False])
