# production/tests/test_orders.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from core.exceptions import InvalidStateError, InvalidTransitionError, ValidationFailed
from inventory.models import Product
from production.models import ProductionOrder
from production.services.order_service import (
    create_production_order,
    update_production_order,
    update_production_status,
)
from production.services.reports import production_metrics, production_schedule

User = get_user_model()


class ProductionOrderServiceTests(TestCase):
    """
    GUARANTEES:
    - order numbers come from the PRD sequence
    - status moves only along the transition table
    - actual_start_date is stamped once, actual_end_date on completion
    - terminal orders are frozen
    """

    def setUp(self):
        self.manager = User.objects.create_user(email="pm@example.com", password="pass", role="production_manager")
        self.product = Product.objects.create(sku="TBL-1", name="Table", selling_price=Decimal("120.00"))

    def _order(self, **kwargs):
        params = {"product_id": self.product.id, "quantity_planned": 50, "user": self.manager}
        params.update(kwargs)
        return create_production_order(**params)

    def test_create_assigns_number(self):
        order = self._order(start_date=date(2024, 2, 1), due_date=date(2024, 2, 10))

        self.assertRegex(order.order_number, r"^PRD-\d{4}-0001$")
        self.assertEqual(order.status, ProductionOrder.STATUS_PLANNED)
        self.assertEqual(order.created_by, self.manager)

    def test_zero_quantity_is_rejected(self):
        with self.assertRaises(ValidationFailed):
            self._order(quantity_planned=0)

    def test_full_lifecycle_stamps_dates(self):
        order = self._order()

        update_production_status(order_id=order.id, status=ProductionOrder.STATUS_RELEASED)
        order = update_production_status(order_id=order.id, status=ProductionOrder.STATUS_IN_PROGRESS)
        started = order.actual_start_date
        self.assertIsNotNone(started)

        order = update_production_status(
            order_id=order.id,
            status=ProductionOrder.STATUS_IN_PROGRESS,
            quantity_produced=20,
        )
        self.assertEqual(order.actual_start_date, started)
        self.assertEqual(order.quantity_produced, 20)

        order = update_production_status(
            order_id=order.id,
            status=ProductionOrder.STATUS_COMPLETED,
            quantity_produced=48,
            quantity_rejected=2,
        )
        self.assertIsNotNone(order.actual_end_date)
        self.assertEqual(order.quantity_rejected, 2)

    def test_illegal_jump_is_rejected(self):
        order = self._order()

        with self.assertRaises(InvalidTransitionError):
            update_production_status(order_id=order.id, status=ProductionOrder.STATUS_COMPLETED)

    def test_cancel_stamps_and_freezes(self):
        order = self._order()

        order = update_production_status(order_id=order.id, status=ProductionOrder.STATUS_CANCELLED, user=self.manager)
        self.assertEqual(order.cancelled_by, self.manager)
        self.assertIsNotNone(order.cancelled_at)

        with self.assertRaises(InvalidStateError):
            update_production_order(order_id=order.id, changes={"notes": "late"})
        with self.assertRaises(InvalidStateError):
            update_production_status(order_id=order.id, status=ProductionOrder.STATUS_CANCELLED)

    def test_negative_quantities_are_rejected(self):
        order = self._order()

        with self.assertRaises(ValidationFailed):
            update_production_status(
                order_id=order.id,
                status=ProductionOrder.STATUS_IN_PROGRESS,
                quantity_rejected=-1,
            )

    def test_schedule_and_metrics(self):
        early = self._order(start_date=date(2024, 1, 5))
        self._order(start_date=date(2024, 3, 5))
        done = self._order()
        update_production_status(order_id=done.id, status=ProductionOrder.STATUS_IN_PROGRESS)
        update_production_status(order_id=done.id, status=ProductionOrder.STATUS_COMPLETED, quantity_produced=40)

        scheduled = list(production_schedule(start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)))
        self.assertEqual(scheduled, [early])

        metrics = production_metrics()
        self.assertEqual(metrics["total_orders"], 3)
        self.assertEqual(metrics["production_efficiency"], 80.0)
