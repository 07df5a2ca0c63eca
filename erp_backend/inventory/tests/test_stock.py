# inventory/tests/test_stock.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase, override_settings

from core.exceptions import ValidationFailed
from inventory.models import InventoryItem, InventoryTransaction, Product
from inventory.services.stock import (
    InsufficientStockError,
    adjust_stock,
    issue_stock,
    receive_stock,
    return_stock,
)

User = get_user_model()


class StockServiceTests(TestCase):
    """
    GUARANTEES:
    - stock never goes below zero
    - every movement writes one ledger row with the resulting level
    - the first receipt creates the stock record with default thresholds
    """

    def setUp(self):
        self.user = User.objects.create_user(email="store@example.com", password="pass", role="warehouse_manager")
        self.product = Product.objects.create(sku="bolt-m8", name="M8 Bolt")

    # =========================================================
    # RECEIVE
    # =========================================================
    @override_settings(
        INVENTORY_DEFAULTS={
            "minimum_stock_level": 5,
            "maximum_stock_level": 500,
            "reorder_point": 15,
            "location": "Bay 3",
        }
    )
    def test_first_receipt_creates_item_with_defaults(self):
        result = receive_stock(product=self.product, quantity=50, user=self.user, reference="GRN-1")

        self.assertTrue(result.created)
        self.assertEqual(result.item.quantity_on_hand, 50)
        self.assertEqual(result.item.minimum_stock_level, 5)
        self.assertEqual(result.item.reorder_point, 15)
        self.assertEqual(result.item.location, "Bay 3")
        self.assertEqual(result.transaction.quantity_after, 50)
        self.assertEqual(result.transaction.performed_by, self.user)

    def test_receipts_average_unit_cost(self):
        receive_stock(product=self.product, quantity=10, unit_cost="2.00")
        result = receive_stock(product=self.product, quantity=30, unit_cost="4.00")

        self.assertFalse(result.created)
        self.assertEqual(result.item.quantity_on_hand, 40)
        self.assertEqual(result.item.unit_cost, Decimal("3.50"))

    def test_non_positive_quantity_rejected(self):
        for bad in (0, -3, "abc", True):
            with self.assertRaises(ValidationFailed):
                receive_stock(product=self.product, quantity=bad)

        self.assertFalse(InventoryItem.objects.exists())

    # =========================================================
    # ISSUE / RETURN
    # =========================================================
    def test_issue_reduces_stock(self):
        receive_stock(product=self.product, quantity=20)

        result = issue_stock(product=self.product, quantity=8, reference="SO-1")

        self.assertEqual(result.item.quantity_on_hand, 12)
        self.assertEqual(result.transaction.direction, InventoryTransaction.Direction.OUT)

    def test_issue_beyond_on_hand_fails_without_side_effects(self):
        receive_stock(product=self.product, quantity=5)

        with self.assertRaises(InsufficientStockError):
            issue_stock(product=self.product, quantity=6)

        item = InventoryItem.objects.get(product=self.product)
        self.assertEqual(item.quantity_on_hand, 5)
        self.assertEqual(item.transactions.count(), 1)

    def test_issue_without_stock_record_fails(self):
        with self.assertRaises(InsufficientStockError):
            issue_stock(product=self.product, quantity=1)

    def test_return_adds_back(self):
        receive_stock(product=self.product, quantity=5)
        issue_stock(product=self.product, quantity=5)

        result = return_stock(product=self.product, quantity=2)

        self.assertEqual(result.item.quantity_on_hand, 2)
        self.assertEqual(result.transaction.transaction_type, InventoryTransaction.TransactionType.RETURN)

    # =========================================================
    # ADJUST
    # =========================================================
    def test_adjust_in_both_directions(self):
        item = receive_stock(product=self.product, quantity=10).item

        up = adjust_stock(item=item, quantity_delta=4, user=self.user, notes="count")
        down = adjust_stock(item=item, quantity_delta=-9, user=self.user)

        self.assertEqual(up.transaction.direction, InventoryTransaction.Direction.IN)
        self.assertEqual(down.transaction.direction, InventoryTransaction.Direction.OUT)
        self.assertEqual(down.item.quantity_on_hand, 5)

    def test_adjust_cannot_go_negative(self):
        item = receive_stock(product=self.product, quantity=3).item

        with self.assertRaises(InsufficientStockError):
            adjust_stock(item=item, quantity_delta=-4)
        with self.assertRaises(ValidationFailed):
            adjust_stock(item=item, quantity_delta=0)

    # =========================================================
    # LEDGER
    # =========================================================
    def test_ledger_rows_are_immutable(self):
        txn = receive_stock(product=self.product, quantity=3).transaction

        txn.notes = "edited"
        with self.assertRaises(ValidationError):
            txn.save()
        with self.assertRaises(ValidationError):
            txn.delete()

    def test_sku_is_normalized(self):
        self.assertEqual(Product.objects.get(id=self.product.id).sku, "BOLT-M8")
