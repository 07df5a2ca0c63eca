# finance/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from sales.models import Customer

User = get_user_model()


class FinanceApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.accountant = User.objects.create_user(email="acc@example.com", password="pass", role="accountant")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.customer = Customer.objects.create(customer_code="CUST-T001", name="Hooli")

    def _create_invoice(self, subtotal="250.00"):
        return self.client.post(
            reverse("finance-invoices-list"),
            {"customer_id": str(self.customer.id), "subtotal": subtotal},
            format="json",
        )

    # =====================================================
    # INVOICES
    # =====================================================

    def test_create_and_pay_invoice(self):
        self.client.force_authenticate(self.accountant)

        created = self._create_invoice()
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        invoice_id = created.data["data"]["id"]

        response = self.client.post(
            reverse("finance-invoices-payment", args=[invoice_id]),
            {"payment_amount": "250.00", "payment_method": "cash"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Payment recorded successfully")
        self.assertEqual(response.data["data"]["invoice"]["status"], "paid")

        detail = self.client.get(reverse("finance-invoices-detail", args=[invoice_id]))
        self.assertEqual(len(detail.data["data"]["payments"]), 1)

    def test_paying_a_paid_invoice_is_rejected(self):
        self.client.force_authenticate(self.accountant)
        invoice_id = self._create_invoice("10.00").data["data"]["id"]
        url = reverse("finance-invoices-payment", args=[invoice_id])

        self.client.post(url, {"payment_amount": "10.00", "payment_method": "cash"}, format="json")
        response = self.client.post(url, {"payment_amount": "1.00", "payment_method": "cash"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["error"], "Invoice is already paid")

    def test_customer_or_sales_order_required(self):
        self.client.force_authenticate(self.accountant)

        response = self.client.post(reverse("finance-invoices-list"), {"subtotal": "10.00"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])

    def test_operator_cannot_see_invoices(self):
        self.client.force_authenticate(self.operator)
        response = self.client.get(reverse("finance-invoices-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # =====================================================
    # REPORTS
    # =====================================================

    def test_reports_require_date_range(self):
        self.client.force_authenticate(self.accountant)

        for name in ("finance-income-statement", "finance-cash-flow"):
            response = self.client.get(reverse(name), {"start_date": "2024-01-01"})
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(response.data["error"], "Start date and end date are required")

    def test_cash_flow_counts_completed_payments(self):
        self.client.force_authenticate(self.accountant)
        invoice_id = self._create_invoice("300.00").data["data"]["id"]
        self.client.post(
            reverse("finance-invoices-payment", args=[invoice_id]),
            {"payment_amount": "120.00", "payment_method": "bank_transfer"},
            format="json",
        )

        today = self.client.get(reverse("finance-dashboard")).data["data"]
        self.assertEqual(Decimal(today["summary"]["total_outstanding"]), Decimal("180.00"))

        day = timezone.localdate().isoformat()
        response = self.client.get(reverse("finance-cash-flow"), {"start_date": day, "end_date": day})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["summary"]["cash_inflows"], "120.00")
