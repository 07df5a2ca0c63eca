# inventory/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import InventoryTransaction, Product
from inventory.services.stock import receive_stock

User = get_user_model()


class InventoryApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.warehouse = User.objects.create_user(email="wh@example.com", password="pass", role="warehouse_manager")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.sales_rep = User.objects.create_user(email="rep@example.com", password="pass", role="sales_rep")

        self.product = Product.objects.create(sku="GEAR-1", name="Spur Gear", standard_cost=Decimal("4.00"))
        self.item = receive_stock(product=self.product, quantity=12, unit_cost="4.00").item
        self.client.force_authenticate(self.warehouse)

    def test_product_list_is_paginated(self):
        response = self.client.get(reverse("inventory-products-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["pagination"]["totalItems"], 1)

    def test_delete_deactivates_product(self):
        response = self.client.delete(reverse("inventory-products-detail", args=[self.product.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.product.refresh_from_db()
        self.assertFalse(self.product.is_active)

    def test_adjust_endpoint(self):
        response = self.client.post(
            reverse("inventory-items-adjust", args=[self.item.id]),
            {"quantity_delta": -2, "notes": "damaged"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["item"]["quantity_on_hand"], 10)
        self.assertEqual(
            InventoryTransaction.objects.filter(transaction_type="adjustment").count(), 1
        )

    def test_issue_more_than_on_hand_is_rejected(self):
        response = self.client.post(
            reverse("inventory-items-issue", args=[self.item.id]),
            {"quantity": 13},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("Insufficient stock", response.data["error"])

    def test_operator_cannot_adjust(self):
        self.client.force_authenticate(self.operator)

        response = self.client.post(
            reverse("inventory-items-adjust", args=[self.item.id]),
            {"quantity_delta": 1},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_low_stock_and_valuation(self):
        self.client.patch(
            reverse("inventory-items-detail", args=[self.item.id]),
            {"minimum_stock_level": 20, "maximum_stock_level": 100},
            format="json",
        )

        low = self.client.get(reverse("inventory-items-low-stock"))
        valuation = self.client.get(reverse("inventory-items-valuation"))

        self.assertEqual(low.data["pagination"]["totalItems"], 1)
        self.assertEqual(valuation.data["data"]["total_value"], "48.00")

    def test_ledger_is_read_only(self):
        self.client.force_authenticate(self.sales_rep)
        txn = InventoryTransaction.objects.first()

        self.assertEqual(
            self.client.get(reverse("inventory-transactions-list")).status_code,
            status.HTTP_200_OK,
        )
        response = self.client.delete(reverse("inventory-transactions-detail", args=[txn.id]))
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

    def test_dashboard(self):
        response = self.client.get(reverse("inventory-dashboard"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["total_products"], 1)
