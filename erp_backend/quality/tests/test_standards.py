# quality/tests/test_standards.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from core.exceptions import InvalidStateError, InvalidTransitionError, ValidationFailed
from inventory.models import Product
from quality.models import QualityControl, QualityReport, QualityStandard, QualityTest
from quality.services.inspection_service import create_inspection, record_inspection_result
from quality.services.report_service import (
    approve_quality_report,
    complete_quality_report,
    create_quality_report,
    update_quality_report,
)
from quality.services.test_service import record_quality_test

User = get_user_model()


class QualityTestServiceTests(TestCase):
    """
    GUARANTEES:
    - a measurement is judged against the standard's limits
    - expected value, tolerance and unit come from the standard
    - tests are only recorded on open inspections
    - a standard tied to another product is rejected
    """

    def setUp(self):
        self.inspector = User.objects.create_user(email="qi@example.com", password="pass", role="quality_inspector")
        self.product = Product.objects.create(sku="SHAFT-1", name="Drive Shaft")
        self.inspection = create_inspection(
            product_id=self.product.id,
            inspection_type=QualityControl.InspectionType.FINAL,
            quantity_inspected=50,
        )
        self.diameter = QualityStandard.objects.create(
            name="Shaft spec",
            product=self.product,
            parameter_name="diameter",
            unit_of_measure="mm",
            min_value=Decimal("19.9000"),
            max_value=Decimal("20.1000"),
            target_value=Decimal("20.0000"),
            tolerance=Decimal("0.0500"),
            test_method="caliper",
        )

    def _record(self, **overrides):
        params = {
            "inspection_id": self.inspection.id,
            "standard_id": self.diameter.id,
            "test_name": "Diameter check",
            "test_type": QualityTest.TestType.FINAL,
            "user": self.inspector,
        }
        params.update(overrides)
        return record_quality_test(**params)

    def test_measurement_within_limits_passes(self):
        test = self._record(measured_value="20.0300")

        self.assertEqual(test.status, QualityTest.STATUS_PASSED)
        self.assertEqual(test.expected_value, Decimal("20.0000"))
        self.assertEqual(test.tolerance, Decimal("0.0500"))
        self.assertEqual(test.unit_of_measure, "mm")
        self.assertEqual(test.test_method, "caliper")
        self.assertEqual(test.tested_by, self.inspector)

    def test_measurement_outside_tolerance_fails(self):
        # inside min/max but further from target than the tolerance
        test = self._record(measured_value="20.0800")

        self.assertEqual(test.status, QualityTest.STATUS_FAILED)

    def test_without_measurement_test_stays_pending(self):
        test = self._record()

        self.assertEqual(test.status, QualityTest.STATUS_PENDING)
        self.assertIsNone(test.measured_value)

    def test_status_contradicting_measurement_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            self._record(measured_value="21.0000", status=QualityTest.STATUS_PASSED)

        self.assertFalse(QualityTest.objects.exists())

    def test_closed_inspection_rejects_tests(self):
        record_inspection_result(inspection_id=self.inspection.id, status=QualityControl.STATUS_PASSED, quantity_passed=50)

        with self.assertRaises(InvalidStateError):
            self._record(measured_value="20.0000")

    def test_standard_for_other_product_is_rejected(self):
        other = Product.objects.create(sku="GEAR-1", name="Gear")
        gear_spec = QualityStandard.objects.create(name="Gear spec", product=other, parameter_name="teeth")

        with self.assertRaises(ValidationFailed):
            self._record(standard_id=gear_spec.id)

    def test_inactive_standard_is_rejected(self):
        self.diameter.is_active = False
        self.diameter.save()

        with self.assertRaises(ValidationFailed):
            self._record(measured_value="20.0000")


class QualityReportServiceTests(TestCase):
    """
    GUARANTEES:
    - reports are numbered QR-YYYY-NNNN and start as drafts
    - draft -> completed -> approved; approval stamps approver and time
    - approved reports are frozen
    """

    def setUp(self):
        self.manager = User.objects.create_user(email="qm@example.com", password="pass", role="quality_inspector")
        product = Product.objects.create(sku="SHAFT-1", name="Drive Shaft")
        self.inspection = create_inspection(product_id=product.id, inspection_type="final", quantity_inspected=10)
        self.report = create_quality_report(
            inspection_id=self.inspection.id,
            summary="Lot within spec",
            user=self.manager,
        )

    def test_create_assigns_number(self):
        self.assertRegex(self.report.report_number, r"^QR-\d{4}-0001$")
        self.assertEqual(self.report.status, QualityReport.STATUS_DRAFT)
        self.assertEqual(self.report.generated_by, self.manager)

    def test_complete_then_approve(self):
        complete_quality_report(report_id=self.report.id)
        report = approve_quality_report(report_id=self.report.id, user=self.manager)

        self.assertEqual(report.status, QualityReport.STATUS_APPROVED)
        self.assertEqual(report.approved_by, self.manager)
        self.assertIsNotNone(report.approved_at)

    def test_draft_cannot_be_approved(self):
        with self.assertRaises(InvalidTransitionError):
            approve_quality_report(report_id=self.report.id, user=self.manager)

    def test_approved_report_is_frozen(self):
        complete_quality_report(report_id=self.report.id)
        approve_quality_report(report_id=self.report.id)

        with self.assertRaisesMessage(InvalidStateError, "Cannot update approved quality report"):
            update_quality_report(report_id=self.report.id, changes={"findings": "late edit"})

    def test_status_is_not_editable(self):
        with self.assertRaises(ValidationFailed):
            update_quality_report(report_id=self.report.id, changes={"status": QualityReport.STATUS_APPROVED})


class QualityStandardApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.inspector = User.objects.create_user(email="qi@example.com", password="pass", role="quality_inspector")
        self.operator = User.objects.create_user(email="op@example.com", password="pass", role="operator")
        self.product = Product.objects.create(sku="PNL-1", name="Panel")

    def _create_standard(self, **overrides):
        payload = {
            "name": "Panel flatness",
            "product": str(self.product.id),
            "parameter_name": "flatness",
            "unit_of_measure": "mm",
            "min_value": "0.0000",
            "max_value": "0.5000",
        }
        payload.update(overrides)
        return self.client.post(reverse("quality-standards-list"), payload, format="json")

    def test_create_update_and_deactivate_standard(self):
        self.client.force_authenticate(self.inspector)

        created = self._create_standard()
        self.assertEqual(created.status_code, status.HTTP_201_CREATED)
        standard_id = created.data["data"]["id"]
        self.assertEqual(created.data["data"]["product_name"], "Panel")

        updated = self.client.patch(
            reverse("quality-standards-detail", args=[standard_id]),
            {"is_critical": True},
            format="json",
        )
        self.assertEqual(updated.status_code, status.HTTP_200_OK)
        self.assertTrue(updated.data["data"]["is_critical"])

        deleted = self.client.delete(reverse("quality-standards-detail", args=[standard_id]))
        self.assertEqual(deleted.status_code, status.HTTP_200_OK)
        self.assertFalse(QualityStandard.objects.get(id=standard_id).is_active)

    def test_inverted_limits_are_rejected(self):
        self.client.force_authenticate(self.inspector)

        response = self._create_standard(min_value="2.0000", max_value="1.0000")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("max_value", response.data["errors"])

    def test_target_outside_limits_is_rejected_on_update(self):
        self.client.force_authenticate(self.inspector)
        standard_id = self._create_standard().data["data"]["id"]

        response = self.client.patch(
            reverse("quality-standards-detail", args=[standard_id]),
            {"target_value": "0.9000"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIsNone(QualityStandard.objects.get(id=standard_id).target_value)

    def test_record_test_and_report_over_api(self):
        self.client.force_authenticate(self.inspector)
        standard_id = self._create_standard().data["data"]["id"]
        inspection = create_inspection(product_id=self.product.id, inspection_type="final", quantity_inspected=5)

        recorded = self.client.post(
            reverse("quality-tests-list"),
            {
                "inspection_id": str(inspection.id),
                "standard_id": standard_id,
                "test_name": "Flatness",
                "test_type": "final",
                "measured_value": "0.7000",
            },
            format="json",
        )
        self.assertEqual(recorded.status_code, status.HTTP_201_CREATED)
        self.assertEqual(recorded.data["data"]["status"], "failed")
        self.assertEqual(recorded.data["data"]["inspection_number"], inspection.inspection_number)

        listed = self.client.get(reverse("quality-tests-list"), {"quality_control": str(inspection.id)})
        self.assertEqual(listed.data["pagination"]["totalItems"], 1)

        report = self.client.post(
            reverse("quality-reports-list"),
            {"inspection_id": str(inspection.id), "findings": "Flatness out of spec"},
            format="json",
        )
        self.assertEqual(report.status_code, status.HTTP_201_CREATED)
        report_id = report.data["data"]["id"]

        self.client.post(reverse("quality-reports-complete", args=[report_id]))
        approved = self.client.post(reverse("quality-reports-approve", args=[report_id]))

        self.assertEqual(approved.status_code, status.HTTP_200_OK)
        self.assertEqual(approved.data["data"]["status"], "approved")
        self.assertEqual(approved.data["data"]["approved_by_email"], "qi@example.com")

    def test_operator_can_view_but_not_define_standards(self):
        self.client.force_authenticate(self.operator)

        self.assertEqual(self.client.get(reverse("quality-standards-list")).status_code, status.HTTP_200_OK)
        self.assertEqual(self._create_standard().status_code, status.HTTP_403_FORBIDDEN)
