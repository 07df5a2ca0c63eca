# sales/tests/test_orders.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from core.exceptions import InvalidStateError, InvalidTransitionError, ValidationFailed
from inventory.models import Product
from sales.models import Customer, SalesOrder
from sales.services.lifecycle import SalesOrderLifecycle
from sales.services.order_service import (
    create_sales_order,
    line_total,
    transition_sales_order,
    update_sales_order,
)

User = get_user_model()


class SalesOrderServiceTests(TestCase):
    """
    GUARANTEES:
    - line_total = qty × price × (1 - discount% / 100)
    - total = subtotal + tax - discount
    - status moves only along the transition table
    - delivered / cancelled orders are frozen
    """

    def setUp(self):
        self.rep = User.objects.create_user(email="rep@example.com", password="pass", role="sales_rep")
        self.customer = Customer.objects.create(customer_code="CUST-T001", name="Northwind")
        self.widget = Product.objects.create(sku="WID-1", name="Widget", selling_price=Decimal("40.00"))
        self.gadget = Product.objects.create(sku="GAD-1", name="Gadget", selling_price=Decimal("15.00"))

    def _order(self, **kwargs):
        params = {
            "customer_id": self.customer.id,
            "items": [
                {"product_id": self.widget.id, "quantity": 2, "unit_price": "100.00", "discount_percentage": "10"},
                {"product_id": self.gadget.id, "quantity": 3},
            ],
            "user": self.rep,
        }
        params.update(kwargs)
        return create_sales_order(**params)

    # =====================================================
    # PRICING
    # =====================================================

    def test_line_total_applies_discount(self):
        self.assertEqual(line_total(quantity=2, unit_price=Decimal("100.00"), discount_percentage=10), Decimal("180.00"))
        self.assertEqual(line_total(quantity=3, unit_price=Decimal("9.99")), Decimal("29.97"))

    def test_totals_are_computed_from_lines(self):
        order = self._order(tax_amount="22.50", discount_amount="7.50")

        # 180.00 + 3 × 15.00 (selling price default)
        self.assertEqual(order.subtotal, Decimal("225.00"))
        self.assertEqual(order.total_amount, Decimal("240.00"))
        self.assertEqual(order.status, SalesOrder.STATUS_DRAFT)
        self.assertTrue(order.order_number.startswith("SO-"))
        self.assertEqual(list(order.items.values_list("line_number", flat=True)), [1, 2])

    def test_inactive_customer_is_rejected(self):
        self.customer.is_active = False
        self.customer.save()

        with self.assertRaises(ValidationFailed):
            self._order()

    def test_update_recomputes_totals(self):
        order = self._order()

        order = update_sales_order(
            order_id=order.id,
            changes={"tax_amount": "10.00"},
            items=[{"product_id": self.widget.id, "quantity": 1, "unit_price": "50.00"}],
        )

        self.assertEqual(order.subtotal, Decimal("50.00"))
        self.assertEqual(order.total_amount, Decimal("60.00"))
        self.assertEqual(order.items.count(), 1)

    # =====================================================
    # LIFECYCLE
    # =====================================================

    def test_full_lifecycle_stamps_timestamps(self):
        order = self._order()

        for target in (
            SalesOrder.STATUS_CONFIRMED,
            SalesOrder.STATUS_IN_PRODUCTION,
            SalesOrder.STATUS_READY_TO_SHIP,
            SalesOrder.STATUS_SHIPPED,
            SalesOrder.STATUS_DELIVERED,
        ):
            order = transition_sales_order(order_id=order.id, status=target, user=self.rep)

        self.assertIsNotNone(order.confirmed_at)
        self.assertIsNotNone(order.shipped_at)
        self.assertIsNotNone(order.delivered_at)
        self.assertTrue(all(i.quantity_shipped == i.quantity_ordered for i in order.items.all()))

    def test_draft_cannot_jump_to_shipped(self):
        order = self._order()

        with self.assertRaises(InvalidTransitionError):
            transition_sales_order(order_id=order.id, status=SalesOrder.STATUS_SHIPPED)

    def test_delivered_is_terminal(self):
        self.assertTrue(SalesOrderLifecycle.is_terminal(SalesOrder.STATUS_DELIVERED))
        self.assertFalse(
            SalesOrderLifecycle.can_transition(
                from_status=SalesOrder.STATUS_DELIVERED,
                to_status=SalesOrder.STATUS_CANCELLED,
            )
        )

    def test_cancel_records_reason_and_user(self):
        order = self._order()

        order = transition_sales_order(
            order_id=order.id, status=SalesOrder.STATUS_CANCELLED, user=self.rep, reason="customer changed mind"
        )

        self.assertEqual(order.cancelled_by, self.rep)
        self.assertEqual(order.cancellation_reason, "customer changed mind")

    def test_shipped_order_cannot_be_updated(self):
        order = self._order()
        for target in (SalesOrder.STATUS_CONFIRMED, SalesOrder.STATUS_READY_TO_SHIP, SalesOrder.STATUS_SHIPPED):
            transition_sales_order(order_id=order.id, status=target)

        with self.assertRaises(InvalidStateError):
            update_sales_order(order_id=order.id, changes={"notes": "rush"})
