# maintenance/tests/test_orders.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import InvalidStateError, InvalidTransitionError
from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder
from maintenance.services.order_service import (
    assign_maintenance_order,
    cancel_maintenance_order,
    complete_maintenance_order,
    create_maintenance_order,
    start_maintenance_order,
)

User = get_user_model()


class MaintenanceOrderServiceTests(TestCase):
    """
    GUARANTEES:
    - starting puts equipment under maintenance
    - completing writes exactly one history row and returns equipment to active
    - cancelling a running order releases the equipment
    - history rows are append-only
    """

    def setUp(self):
        self.tech = User.objects.create_user(email="tech@example.com", password="pass", role="maintenance_technician")
        self.press = Equipment.objects.create(code="PRESS-01", name="Hydraulic Press")

    def _order(self, **kwargs):
        params = {
            "equipment_id": self.press.id,
            "title": "Replace seals",
            "maintenance_type": MaintenanceOrder.MaintenanceType.CORRECTIVE,
        }
        params.update(kwargs)
        return create_maintenance_order(**params)

    def test_create_assigns_number_and_status(self):
        pending = self._order()
        assigned = self._order(assigned_to=self.tech.id)

        self.assertRegex(pending.order_number, r"^MO-\d{4}-0001$")
        self.assertEqual(pending.status, MaintenanceOrder.STATUS_PENDING)
        self.assertEqual(assigned.status, MaintenanceOrder.STATUS_ASSIGNED)

    def test_start_and_complete(self):
        order = self._order()
        assign_maintenance_order(order_id=order.id, assigned_to=self.tech.id)

        start_maintenance_order(order_id=order.id, user=self.tech)
        self.press.refresh_from_db()
        self.assertEqual(self.press.status, Equipment.STATUS_MAINTENANCE)

        order = complete_maintenance_order(
            order_id=order.id,
            completion_notes="Seals replaced",
            parts_used="2x seal kit",
            labor_hours=Decimal("3.5"),
            cost=Decimal("240.00"),
            user=self.tech,
        )

        self.assertEqual(order.status, MaintenanceOrder.STATUS_COMPLETED)
        self.assertIsNotNone(order.completed_at)
        self.press.refresh_from_db()
        self.assertEqual(self.press.status, Equipment.STATUS_ACTIVE)

        history = MaintenanceHistory.objects.get(maintenance_order=order)
        self.assertEqual(history.performed_by, self.tech)
        self.assertEqual(history.cost, Decimal("240.00"))
        self.assertEqual(history.labor_hours, Decimal("3.50"))

    def test_complete_requires_in_progress(self):
        order = self._order()

        with self.assertRaises(InvalidTransitionError):
            complete_maintenance_order(order_id=order.id)

        self.assertFalse(MaintenanceHistory.objects.exists())

    def test_cancel_running_order_releases_equipment(self):
        order = self._order()
        start_maintenance_order(order_id=order.id, user=self.tech)

        order = cancel_maintenance_order(order_id=order.id, user=self.tech)

        self.assertEqual(order.status, MaintenanceOrder.STATUS_CANCELLED)
        self.assertEqual(order.cancelled_by, self.tech)
        self.press.refresh_from_db()
        self.assertEqual(self.press.status, Equipment.STATUS_ACTIVE)

    def test_retired_equipment_cannot_be_scheduled(self):
        self.press.status = Equipment.STATUS_RETIRED
        self.press.save()

        with self.assertRaises(InvalidStateError):
            self._order()

    def test_history_is_immutable(self):
        order = self._order()
        start_maintenance_order(order_id=order.id)
        complete_maintenance_order(order_id=order.id)
        history = MaintenanceHistory.objects.get(maintenance_order=order)

        history.cost = Decimal("1.00")
        with self.assertRaises(ValidationError):
            history.save()
        with self.assertRaises(ValidationError):
            history.delete()


class MaintenanceApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.tech = User.objects.create_user(email="tech@example.com", password="pass", role="maintenance_technician")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.client.force_authenticate(self.tech)

    def test_delete_retires_equipment(self):
        created = self.client.post(
            reverse("maintenance-equipment-list"),
            {"code": "lathe-02", "name": "Lathe"},
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        self.assertEqual(created.data["data"]["code"], "LATHE-02")

        response = self.client.delete(reverse("maintenance-equipment-detail", args=[created.data["data"]["id"]]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Equipment.objects.get(code="LATHE-02").status, Equipment.STATUS_RETIRED)

    def test_order_flow_over_api(self):
        equipment = Equipment.objects.create(code="CNC-01", name="CNC Mill")
        created = self.client.post(
            reverse("maintenance-orders-list"),
            {"equipment_id": str(equipment.id), "title": "Quarterly service", "maintenance_type": "preventive"},
            format="json",
        )
        order_id = created.data["data"]["id"]

        started = self.client.post(reverse("maintenance-orders-start", args=[order_id]))
        self.assertEqual(started.data["data"]["status"], "in_progress")

        completed = self.client.post(
            reverse("maintenance-orders-complete", args=[order_id]),
            {"labor_hours": "2.00", "cost": "80.00"},
            format="json",
        )
        self.assertEqual(completed.status_code, status.HTTP_200_OK)
        self.assertEqual(completed.data["message"], "Maintenance order completed successfully")

        history = self.client.get(reverse("maintenance-history-list"))
        self.assertEqual(history.data["pagination"]["totalItems"], 1)

    def test_operator_is_read_only(self):
        self.client.force_authenticate(self.operator)

        self.assertEqual(self.client.get(reverse("maintenance-dashboard")).status_code, status.HTTP_200_OK)
        response = self.client.post(reverse("maintenance-equipment-list"), {"code": "X", "name": "X"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
