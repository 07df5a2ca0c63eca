# procurement/tests/test_requests.py

from django.contrib.auth import get_user_model
from django.test import TestCase

from core.exceptions import InvalidStateError, InvalidTransitionError, ValidationFailed
from inventory.models import Product
from procurement.models import PurchaseRequest, Supplier
from procurement.services.order_service import (
    cancel_purchase_order,
    create_purchase_order,
    update_purchase_order,
)
from procurement.services.request_service import (
    approve_purchase_request,
    cancel_purchase_request,
    create_purchase_request,
    reject_purchase_request,
    update_purchase_request,
)

User = get_user_model()


class PurchaseRequestLifecycleTests(TestCase):
    """
    GUARANTEES:
    - only pending requests can be approved, rejected or edited
    - converting an approved request into an order completes it
    - terminal requests stay terminal
    """

    def setUp(self):
        self.manager = User.objects.create_user(
            email="manager@example.com",
            password="pass",
            role="manager",
        )
        self.product = Product.objects.create(sku="RESIN-1", name="Epoxy Resin")
        self.supplier = Supplier.objects.create(supplier_code="SUP-T001", name="ChemCo")

        self.purchase_request = create_purchase_request(
            data={"title": "Resin restock", "product": self.product, "quantity": 40},
            user=self.manager,
        )

    def test_request_gets_number_and_requester(self):
        self.assertTrue(self.purchase_request.request_number.startswith("PR-"))
        self.assertEqual(self.purchase_request.status, PurchaseRequest.STATUS_PENDING)
        self.assertEqual(self.purchase_request.requested_by, self.manager)

    def test_approve_stamps_approver(self):
        approved = approve_purchase_request(
            request_id=self.purchase_request.id, user=self.manager, notes="ok"
        )

        self.assertEqual(approved.status, PurchaseRequest.STATUS_APPROVED)
        self.assertEqual(approved.approved_by, self.manager)
        self.assertIsNotNone(approved.approved_at)
        self.assertEqual(approved.approval_notes, "ok")

    def test_only_pending_request_can_be_approved(self):
        reject_purchase_request(request_id=self.purchase_request.id, reason="budget")

        with self.assertRaises(InvalidStateError):
            approve_purchase_request(request_id=self.purchase_request.id)

    def test_approved_request_cannot_be_updated(self):
        approve_purchase_request(request_id=self.purchase_request.id)

        with self.assertRaises(InvalidStateError):
            update_purchase_request(request_id=self.purchase_request.id, changes={"quantity": 5})

    def test_unknown_fields_are_rejected(self):
        with self.assertRaises(ValidationFailed):
            update_purchase_request(request_id=self.purchase_request.id, changes={"status": "approved"})

    def test_order_from_approved_request_completes_it(self):
        approve_purchase_request(request_id=self.purchase_request.id)

        create_purchase_order(
            supplier_id=self.supplier.id,
            purchase_request_id=self.purchase_request.id,
            items=[{"product_id": self.product.id, "quantity": 40, "unit_price": "2.50"}],
        )

        self.purchase_request.refresh_from_db()
        self.assertEqual(self.purchase_request.status, PurchaseRequest.STATUS_COMPLETED)
        self.assertIsNotNone(self.purchase_request.completed_at)

    def test_order_from_pending_request_is_rejected(self):
        with self.assertRaises(InvalidStateError):
            create_purchase_order(
                supplier_id=self.supplier.id,
                purchase_request_id=self.purchase_request.id,
                items=[{"product_id": self.product.id, "quantity": 1, "unit_price": "1.00"}],
            )

    def test_cancelled_request_is_terminal(self):
        cancel_purchase_request(request_id=self.purchase_request.id)

        with self.assertRaises(InvalidTransitionError):
            cancel_purchase_request(request_id=self.purchase_request.id)

    def test_terminal_order_cannot_be_updated(self):
        order = create_purchase_order(
            supplier_id=self.supplier.id,
            items=[{"product_id": self.product.id, "quantity": 1, "unit_price": "1.00"}],
        )
        cancel_purchase_order(order_id=order.id)

        with self.assertRaises(InvalidStateError):
            update_purchase_order(order_id=order.id, changes={"notes": "late"})
