# procurement/tests/test_receiving.py

from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase

from core.exceptions import InvalidStateError, ValidationFailed
from inventory.models import InventoryItem, InventoryTransaction, Product
from procurement.models import PurchaseOrder, Supplier
from procurement.services import receiving_service
from procurement.services.order_service import (
    cancel_purchase_order,
    confirm_purchase_order,
    create_purchase_order,
)
from procurement.services.receiving_service import receive_purchase_order

User = get_user_model()


class PurchaseOrderReceivingTests(TestCase):
    """
    Receiving reconciles purchase order lines with stock.

    GUARANTEES:
    - total_amount = Σ quantity × unit_price
    - partial deliveries leave the order partially_received
    - the last delivery completes the order
    - stock is incremented by exactly what was received
    - over-receipt is rejected and nothing is written
    - a stock failure on any line rolls back the whole delivery
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email="warehouse@example.com",
            password="pass",
            role="warehouse_manager",
        )
        self.supplier = Supplier.objects.create(supplier_code="SUP-T001", name="Acme Metals")

        self.bolt = Product.objects.create(sku="BOLT-10", name="Bolt M10")
        self.plate = Product.objects.create(sku="PLATE-2", name="Steel Plate")

        self.order = create_purchase_order(
            supplier_id=self.supplier.id,
            items=[
                {"product_id": self.bolt.id, "quantity": 10, "unit_price": "5.00"},
                {"product_id": self.plate.id, "quantity": 20, "unit_price": "3.00"},
            ],
            user=self.user,
        )
        self.bolt_line = self.order.items.get(product=self.bolt)
        self.plate_line = self.order.items.get(product=self.plate)

    def _receive(self, *rows, notes=""):
        return receive_purchase_order(
            order_id=self.order.id,
            received_items=[{"id": str(line.id), "received_quantity": qty} for line, qty in rows],
            notes=notes,
            user=self.user,
        )

    def _on_hand(self, product) -> int:
        item = InventoryItem.objects.filter(product=product).first()
        return item.quantity_on_hand if item else 0

    # =====================================================
    # CREATION
    # =====================================================

    def test_order_total_is_sum_of_lines(self):
        self.assertEqual(self.order.total_amount, Decimal("110.00"))
        self.assertEqual(self.order.status, PurchaseOrder.STATUS_PENDING)
        self.assertTrue(self.order.order_number.startswith("PO-"))
        self.assertEqual(self.bolt_line.total_price, Decimal("50.00"))

    def test_pending_order_cannot_be_received(self):
        with self.assertRaises(InvalidStateError):
            self._receive((self.bolt_line, 1))

        self.assertEqual(self._on_hand(self.bolt), 0)

    # =====================================================
    # PARTIAL → COMPLETE
    # =====================================================

    def test_partial_then_full_delivery(self):
        confirm_purchase_order(order_id=self.order.id, user=self.user)

        result = self._receive((self.bolt_line, 10), (self.plate_line, 15))
        self.assertEqual(result.order.status, PurchaseOrder.STATUS_PARTIALLY_RECEIVED)
        self.assertFalse(result.completed)
        self.assertIsNone(result.order.received_date)
        self.assertEqual(self._on_hand(self.bolt), 10)
        self.assertEqual(self._on_hand(self.plate), 15)

        result = self._receive((self.plate_line, 5), notes="second truck")
        self.assertEqual(result.order.status, PurchaseOrder.STATUS_COMPLETED)
        self.assertTrue(result.completed)
        self.assertIsNotNone(result.order.received_date)
        self.assertEqual(result.order.receiving_notes, "second truck")
        self.assertEqual(self._on_hand(self.plate), 20)

    def test_receipt_creates_stock_record_with_order_reference(self):
        confirm_purchase_order(order_id=self.order.id, user=self.user)
        self._receive((self.bolt_line, 4))

        txn = InventoryTransaction.objects.get(item__product=self.bolt)
        self.assertEqual(txn.transaction_type, InventoryTransaction.TransactionType.RECEIPT)
        self.assertEqual(txn.quantity, 4)
        self.assertEqual(txn.reference, self.order.order_number)

    def test_receiving_is_cumulative(self):
        confirm_purchase_order(order_id=self.order.id, user=self.user)

        self._receive((self.bolt_line, 3))
        self._receive((self.bolt_line, 3))

        self.bolt_line.refresh_from_db()
        self.assertEqual(self.bolt_line.received_quantity, 6)
        self.assertEqual(self._on_hand(self.bolt), 6)

    # =====================================================
    # REJECTIONS + ROLLBACK
    # =====================================================

    def test_over_receipt_rolls_back_every_line(self):
        confirm_purchase_order(order_id=self.order.id, user=self.user)

        with self.assertRaises(InvalidStateError):
            self._receive((self.bolt_line, 5), (self.plate_line, 21))

        self.bolt_line.refresh_from_db()
        self.plate_line.refresh_from_db()
        self.order.refresh_from_db()

        self.assertEqual(self.bolt_line.received_quantity, 0)
        self.assertEqual(self.plate_line.received_quantity, 0)
        self.assertEqual(self.order.status, PurchaseOrder.STATUS_CONFIRMED)
        self.assertEqual(self._on_hand(self.bolt), 0)
        self.assertFalse(InventoryTransaction.objects.exists())

    def test_stock_failure_on_second_line_rolls_back_first(self):
        confirm_purchase_order(order_id=self.order.id, user=self.user)
        real_receive_stock = receiving_service.receive_stock
        calls = []

        def fail_on_second_call(**kwargs):
            calls.append(kwargs["product"].sku)
            if len(calls) == 2:
                raise ValidationFailed("Stock write failed")
            return real_receive_stock(**kwargs)

        with mock.patch(
            "procurement.services.receiving_service.receive_stock",
            side_effect=fail_on_second_call,
        ):
            with self.assertRaises(ValidationFailed):
                self._receive((self.bolt_line, 5), (self.plate_line, 7))

        self.assertEqual(len(calls), 2)

        self.bolt_line.refresh_from_db()
        self.plate_line.refresh_from_db()
        self.order.refresh_from_db()

        self.assertEqual(self.bolt_line.received_quantity, 0)
        self.assertIsNone(self.bolt_line.received_date)
        self.assertEqual(self.plate_line.received_quantity, 0)
        self.assertEqual(self.order.status, PurchaseOrder.STATUS_CONFIRMED)
        self.assertFalse(InventoryItem.objects.exists())
        self.assertFalse(InventoryTransaction.objects.exists())

    def test_line_from_another_order_is_rejected(self):
        other = create_purchase_order(
            supplier_id=self.supplier.id,
            items=[{"product_id": self.bolt.id, "quantity": 1, "unit_price": "1.00"}],
        )
        confirm_purchase_order(order_id=self.order.id)

        with self.assertRaises(ValidationFailed):
            receive_purchase_order(
                order_id=self.order.id,
                received_items=[{"id": str(other.items.get().id), "received_quantity": 1}],
            )

    def test_zero_quantity_is_rejected(self):
        confirm_purchase_order(order_id=self.order.id)

        with self.assertRaises(ValidationFailed):
            self._receive((self.bolt_line, 0))

    def test_cancelled_order_cannot_be_received(self):
        cancel_purchase_order(order_id=self.order.id, reason="duplicate")

        with self.assertRaises(InvalidStateError):
            self._receive((self.bolt_line, 1))

    def test_completed_order_cannot_be_cancelled(self):
        confirm_purchase_order(order_id=self.order.id)
        self._receive((self.bolt_line, 10), (self.plate_line, 20))

        with self.assertRaises(InvalidStateError):
            cancel_purchase_order(order_id=self.order.id)
