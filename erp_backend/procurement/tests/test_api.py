# procurement/tests/test_api.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from inventory.models import InventoryItem, Product
from procurement.models import PurchaseOrder, Supplier

User = get_user_model()


class PurchaseOrderApiTests(TestCase):
    """
    End-to-end purchase order flow over HTTP.

    GUARANTEES:
    - responses use the {success, data} envelope
    - receive requires procurement.receive
    - business-rule failures come back as {success: false, error}
    """

    def setUp(self):
        self.client = APIClient()

        self.manager = User.objects.create_user(
            email="manager@example.com",
            password="pass",
            role="warehouse_manager",
        )
        self.operator = User.objects.create_user(
            email="operator@example.com",
            password="pass",
            role="operator",
        )

        self.product = Product.objects.create(sku="GEAR-01", name="Gear")
        self.supplier = Supplier.objects.create(supplier_code="SUP-T001", name="Gearworks")

        self.list_url = reverse("procurement-orders-list")

    def _create_order(self):
        response = self.client.post(
            self.list_url,
            {
                "supplier_id": str(self.supplier.id),
                "items": [{"product_id": str(self.product.id), "quantity": 8, "unit_price": "12.50"}],
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        return response.data["data"]

    def test_create_confirm_receive(self):
        self.client.force_authenticate(self.manager)

        order = self._create_order()
        self.assertTrue(order["order_number"].startswith("PO-"))
        self.assertEqual(order["total_amount"], "100.00")

        response = self.client.post(reverse("procurement-orders-confirm", args=[order["id"]]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["status"], PurchaseOrder.STATUS_CONFIRMED)

        response = self.client.post(
            reverse("procurement-orders-receive", args=[order["id"]]),
            {"received_items": [{"id": order["items"][0]["id"], "received_quantity": 8}]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"]["status"], PurchaseOrder.STATUS_COMPLETED)
        self.assertEqual(InventoryItem.objects.get(product=self.product).quantity_on_hand, 8)

    def test_receiving_pending_order_returns_error_envelope(self):
        self.client.force_authenticate(self.manager)
        order = self._create_order()

        response = self.client.post(
            reverse("procurement-orders-receive", args=[order["id"]]),
            {"received_items": [{"id": order["items"][0]["id"], "received_quantity": 1}]},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["error"], "Only confirmed orders can be received")

    def test_list_is_paginated(self):
        self.client.force_authenticate(self.manager)
        self._create_order()

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["pagination"]["totalItems"], 1)
        self.assertEqual(response.data["pagination"]["page"], 1)

    def test_operator_cannot_create_orders(self):
        self.client.force_authenticate(self.operator)

        response = self.client.post(self.list_url, {}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(response.data["success"])

    def test_unauthenticated_request_is_rejected(self):
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_supplier_gets_generated_code_and_soft_delete(self):
        self.client.force_authenticate(self.manager)

        response = self.client.post(
            reverse("procurement-suppliers-list"),
            {"name": "Bearings Ltd"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        supplier_id = response.data["data"]["id"]
        self.assertRegex(response.data["data"]["supplier_code"], r"^SUP-\d{4}$")

        response = self.client.delete(reverse("procurement-suppliers-detail", args=[supplier_id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(Supplier.objects.get(id=supplier_id).is_active)
