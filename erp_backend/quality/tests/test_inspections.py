# quality/tests/test_inspections.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import InvalidTransitionError, ValidationFailed
from inventory.models import Product
from production.services.order_service import create_production_order
from quality.models import QualityControl
from quality.services.inspection_service import create_inspection, record_inspection_result
from quality.services.reports import quality_dashboard

User = get_user_model()


class InspectionServiceTests(TestCase):
    """
    GUARANTEES:
    - passed + failed never exceeds inspected
    - a final result stamps inspector and inspected_at
    - final results are terminal
    """

    def setUp(self):
        self.inspector = User.objects.create_user(email="qi@example.com", password="pass", role="quality_inspector")
        self.product = Product.objects.create(sku="PNL-1", name="Panel", selling_price=Decimal("12.00"))
        self.inspection = create_inspection(
            product_id=self.product.id,
            inspection_type=QualityControl.InspectionType.FINAL,
            quantity_inspected=100,
            batch_number="B-17",
        )

    def test_create_assigns_number(self):
        self.assertRegex(self.inspection.inspection_number, r"^QC-\d{4}-0001$")
        self.assertEqual(self.inspection.status, QualityControl.STATUS_PENDING)

    def test_result_within_inspected_quantity(self):
        record_inspection_result(inspection_id=self.inspection.id, status=QualityControl.STATUS_IN_PROGRESS)

        result = record_inspection_result(
            inspection_id=self.inspection.id,
            status=QualityControl.STATUS_CONDITIONAL,
            quantity_passed=90,
            quantity_failed=10,
            defects_found="scratches",
            user=self.inspector,
        )

        self.assertEqual(result.status, QualityControl.STATUS_CONDITIONAL)
        self.assertEqual(result.inspector, self.inspector)
        self.assertIsNotNone(result.inspected_at)

    def test_results_exceeding_inspected_are_rejected(self):
        with self.assertRaises(ValidationFailed):
            record_inspection_result(
                inspection_id=self.inspection.id,
                status=QualityControl.STATUS_PASSED,
                quantity_passed=95,
                quantity_failed=10,
            )

        self.inspection.refresh_from_db()
        self.assertEqual(self.inspection.status, QualityControl.STATUS_PENDING)

    def test_final_result_is_terminal(self):
        record_inspection_result(inspection_id=self.inspection.id, status=QualityControl.STATUS_PASSED, quantity_passed=100)

        with self.assertRaises(InvalidTransitionError):
            record_inspection_result(inspection_id=self.inspection.id, status=QualityControl.STATUS_FAILED)

    def test_production_order_must_match_product(self):
        other = Product.objects.create(sku="PNL-2", name="Other Panel")
        order = create_production_order(product_id=other.id, quantity_planned=5)

        with self.assertRaises(ValidationFailed):
            create_inspection(
                product_id=self.product.id,
                production_order_id=order.id,
                inspection_type=QualityControl.InspectionType.IN_PROCESS,
                quantity_inspected=5,
            )

    def test_dashboard_pass_rate(self):
        record_inspection_result(inspection_id=self.inspection.id, status=QualityControl.STATUS_PASSED, quantity_passed=100)
        create_inspection(product_id=self.product.id, inspection_type="incoming", quantity_inspected=10)

        summary = quality_dashboard()["summary"]

        self.assertEqual(summary["total"], 2)
        self.assertEqual(summary["passed"], 1)
        self.assertEqual(summary["pass_rate"], 50.0)


class QualityApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.inspector = User.objects.create_user(email="qi@example.com", password="pass", role="quality_inspector")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.product = Product.objects.create(sku="PNL-1", name="Panel")

    def test_create_and_record_result(self):
        self.client.force_authenticate(self.inspector)

        created = self.client.post(
            reverse("quality-controls-list"),
            {"product_id": str(self.product.id), "inspection_type": "incoming", "quantity_inspected": 20},
            format="json",
        )
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)

        response = self.client.post(
            reverse("quality-controls-result", args=[created.data["data"]["id"]]),
            {"status": "failed", "quantity_passed": 5, "quantity_failed": 15},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["status"], "failed")

    def test_operator_can_view_but_not_inspect(self):
        self.client.force_authenticate(self.operator)

        self.assertEqual(self.client.get(reverse("quality-controls-list")).status_code, status.HTTP_200_OK)
        response = self.client.post(
            reverse("quality-controls-list"),
            {"product_id": str(self.product.id), "inspection_type": "incoming", "quantity_inspected": 1},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
