# finance/tests/test_accounts.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from finance.models import Account
from finance.services.reports import balance_sheet

User = get_user_model()


class BalanceSheetTests(TestCase):
    """
    GUARANTEES:
    - each section sums the balances of its active accounts
    - revenue / expense accounts stay off the balance sheet
    - balance_check holds only when assets == liabilities + equity
    """

    def setUp(self):
        Account.objects.create(account_code="1000", account_name="Cash", account_type="asset", balance=Decimal("700.00"))
        Account.objects.create(
            account_code="1200", account_name="Receivables", account_type="asset", balance=Decimal("300.00")
        )
        Account.objects.create(
            account_code="2000", account_name="Payables", account_type="liability", balance=Decimal("400.00")
        )
        Account.objects.create(
            account_code="3000", account_name="Owner Capital", account_type="equity", balance=Decimal("600.00")
        )
        Account.objects.create(
            account_code="4000", account_name="Sales", account_type="revenue", balance=Decimal("5000.00")
        )

    def test_sections_are_summed_per_type(self):
        report = balance_sheet()

        self.assertEqual(report["assets"]["total"], "1000.00")
        self.assertEqual(report["liabilities"]["total"], "400.00")
        self.assertEqual(report["equity"]["total"], "600.00")
        self.assertEqual(report["total_liabilities_and_equity"], "1000.00")
        self.assertTrue(report["balance_check"])
        self.assertEqual([a["account_code"] for a in report["assets"]["accounts"]], ["1000", "1200"])
        self.assertNotIn("revenue", report)

    def test_inactive_accounts_are_excluded(self):
        Account.objects.filter(account_code="1200").update(is_active=False)

        report = balance_sheet()

        self.assertEqual(report["assets"]["total"], "700.00")
        self.assertFalse(report["balance_check"])

    def test_empty_chart_balances(self):
        Account.objects.all().delete()

        report = balance_sheet()

        self.assertEqual(report["assets"]["total"], "0.00")
        self.assertEqual(report["assets"]["accounts"], [])
        self.assertTrue(report["balance_check"])


class AccountApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.accountant = User.objects.create_user(email="acc@example.com", password="pass", role="accountant")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")

    def _create(self, **overrides):
        payload = {"account_code": "1000", "account_name": "Cash", "account_type": "asset", "balance": "250.00"}
        payload.update(overrides)
        return self.client.post(reverse("finance-accounts-list"), payload, format="json")

    # =====================================================
    # CHART OF ACCOUNTS
    # =====================================================

    def test_create_sub_account_and_list_nested(self):
        self.client.force_authenticate(self.accountant)

        parent = self._create(account_code="1000", account_name="Current Assets")
        self.assertEqual(parent.status_code, status.HTTP_201_CREATED)
        parent_id = parent.data["data"]["id"]

        child = self._create(account_code=" 1010 ", account_name="Petty Cash", parent_account=parent_id)
        self.assertEqual(child.status_code, status.HTTP_201_CREATED)
        self.assertEqual(child.data["data"]["account_code"], "1010")
        self.assertEqual(child.data["data"]["parent_account_code"], "1000")

        detail = self.client.get(reverse("finance-accounts-detail", args=[parent_id]))
        self.assertEqual([a["account_code"] for a in detail.data["data"]["sub_accounts"]], ["1010"])

        listed = self.client.get(reverse("finance-accounts-list"), {"account_type": "asset"})
        self.assertEqual(listed.data["pagination"]["totalItems"], 2)

    def test_parent_must_share_account_type(self):
        self.client.force_authenticate(self.accountant)
        parent_id = self._create().data["data"]["id"]

        response = self._create(
            account_code="2010", account_name="Loans", account_type="liability", parent_account=parent_id
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("parent_account", response.data["errors"])

    def test_account_cannot_be_nested_under_itself(self):
        self.client.force_authenticate(self.accountant)
        parent_id = self._create().data["data"]["id"]
        child_id = self._create(account_code="1010", account_name="Petty Cash", parent_account=parent_id).data[
            "data"
        ]["id"]

        response = self.client.patch(
            reverse("finance-accounts-detail", args=[parent_id]),
            {"parent_account": child_id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIsNone(Account.objects.get(id=parent_id).parent_account_id)

    def test_delete_deactivates_account(self):
        self.client.force_authenticate(self.accountant)
        account_id = self._create().data["data"]["id"]

        response = self.client.delete(reverse("finance-accounts-detail", args=[account_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Account deactivated")
        self.assertFalse(Account.objects.get(id=account_id).is_active)

    def test_operator_cannot_see_accounts(self):
        self.client.force_authenticate(self.operator)
        response = self.client.get(reverse("finance-accounts-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    # =====================================================
    # BALANCE SHEET
    # =====================================================

    def test_balance_sheet_endpoint(self):
        self.client.force_authenticate(self.accountant)
        self._create(balance="900.00")
        self._create(account_code="2000", account_name="Payables", account_type="liability", balance="500.00")
        self._create(account_code="3000", account_name="Capital", account_type="equity", balance="400.00")

        response = self.client.get(reverse("finance-balance-sheet"), {"as_of_date": "2024-12-31"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["as_of_date"], "2024-12-31")
        self.assertEqual(data["assets"]["total"], "900.00")
        self.assertTrue(data["balance_check"])

    def test_balance_sheet_rejects_malformed_date(self):
        self.client.force_authenticate(self.accountant)

        response = self.client.get(reverse("finance-balance-sheet"), {"as_of_date": "yesterday"})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
