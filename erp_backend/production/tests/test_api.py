# production/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import Product

User = get_user_model()


class ProductionApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(email="pm@example.com", password="pass", role="production_manager")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.product = Product.objects.create(sku="CAB-1", name="Cabinet", selling_price=Decimal("80.00"))

    def _create(self):
        self.client.force_authenticate(self.manager)
        return self.client.post(
            reverse("production-orders-list"),
            {"product_id": str(self.product.id), "quantity_planned": 10},
            format="json",
        )

    def test_operator_moves_status_but_cannot_create(self):
        order_id = self._create().data["data"]["id"]

        self.client.force_authenticate(self.operator)
        denied = self.client.post(
            reverse("production-orders-list"),
            {"product_id": str(self.product.id), "quantity_planned": 5},
            format="json",
        )
        self.assertEqual(denied.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.patch(
            reverse("production-orders-change-status", args=[order_id]),
            {"status": "in_progress"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNotNone(response.data["data"]["actual_start_date"])

    def test_illegal_transition_is_400(self):
        order_id = self._create().data["data"]["id"]

        response = self.client.patch(
            reverse("production-orders-change-status", args=[order_id]),
            {"status": "completed"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])

    def test_orders_cannot_be_deleted(self):
        order_id = self._create().data["data"]["id"]
        response = self.client.delete(reverse("production-orders-detail", args=[order_id]))
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_schedule_and_metrics(self):
        self._create()

        schedule = self.client.get(reverse("production-schedule"))
        self.assertEqual(schedule.status_code, status.HTTP_200_OK)
        self.assertEqual(len(schedule.data["data"]), 1)

        metrics = self.client.get(reverse("production-metrics"))
        self.assertEqual(metrics.data["data"]["total_orders"], 1)
