# production/services/order_service.py

"""
======================================================
PATH: production/services/order_service.py
======================================================
PRODUCTION ORDER SERVICE

- create_production_order: PRD-YYYY-NNNN number + row in one transaction
- update_production_order: planning fields while the order is open
- update_production_status: shop-floor progress along the transition table

Reporting progress without changing status is allowed: send the
current status together with the new quantities.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.sequences import next_document_number
from inventory.models import Product
from production.models import ProductionOrder
from production.services.lifecycle import ProductionOrderLifecycle
from sales.models import SalesOrder

logger = logging.getLogger("erp.production")

PRODUCTION_ORDER_PREFIX = "PRD"

EDITABLE_FIELDS = {"quantity_planned", "start_date", "due_date", "priority", "notes", "sales_order"}


def lock_production_order(order_id) -> ProductionOrder:
    try:
        return ProductionOrder.objects.select_for_update().get(id=order_id)
    except ProductionOrder.DoesNotExist as exc:
        raise NotFoundError("Production order not found") from exc


def _sales_order_or_none(sales_order_id):
    if not sales_order_id:
        return None
    order = SalesOrder.objects.filter(id=sales_order_id).first()
    if order is None:
        raise ValidationFailed("Sales order not found", errors={"sales_order_id": ["not found"]})
    return order


def _check_quantity(name: str, value) -> int:
    try:
        value = int(value)
    except (TypeError, ValueError) as exc:
        raise ValidationFailed(f"{name} must be a whole number", errors={name: ["invalid"]}) from exc
    if value < 0:
        raise ValidationFailed(f"{name} cannot be negative", errors={name: ["must be >= 0"]})
    return value


@transaction.atomic
def create_production_order(
    *,
    product_id,
    quantity_planned,
    start_date=None,
    due_date=None,
    priority: str = ProductionOrder.Priority.MEDIUM,
    sales_order_id=None,
    notes: str = "",
    user=None,
) -> ProductionOrder:
    product = Product.objects.filter(id=product_id, is_active=True).first()
    if product is None:
        raise ValidationFailed("Product not found", errors={"product_id": ["not found or inactive"]})

    quantity_planned = _check_quantity("quantity_planned", quantity_planned)
    if quantity_planned == 0:
        raise ValidationFailed("quantity_planned must be greater than zero", errors={"quantity_planned": ["must be > 0"]})

    order = ProductionOrder(
        order_number=next_document_number(PRODUCTION_ORDER_PREFIX),
        product=product,
        sales_order=_sales_order_or_none(sales_order_id),
        quantity_planned=quantity_planned,
        start_date=start_date,
        due_date=due_date,
        priority=priority,
        notes=notes or "",
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )
    order.full_clean()
    order.save()

    logger.info(
        "Production order created",
        extra={
            "order_number": order.order_number,
            "product_id": str(product.id),
            "quantity_planned": quantity_planned,
        },
    )
    return order


@transaction.atomic
def update_production_order(*, order_id, changes: dict, user=None) -> ProductionOrder:
    order = lock_production_order(order_id)

    if ProductionOrderLifecycle.is_terminal(order.status):
        raise InvalidStateError(f"Cannot update {order.status} production order")

    changes = dict(changes)
    if "sales_order_id" in changes:
        changes["sales_order"] = _sales_order_or_none(changes.pop("sales_order_id"))

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationFailed(
            "Fields cannot be updated",
            errors={field: ["read-only"] for field in sorted(unknown)},
        )

    if "quantity_planned" in changes:
        changes["quantity_planned"] = _check_quantity("quantity_planned", changes["quantity_planned"])
        if changes["quantity_planned"] == 0:
            raise ValidationFailed(
                "quantity_planned must be greater than zero",
                errors={"quantity_planned": ["must be > 0"]},
            )

    for field, value in changes.items():
        setattr(order, field, value)

    order.full_clean()
    order.save()

    logger.info("Production order updated", extra={"order_number": order.order_number, "fields": sorted(changes)})
    return order


@transaction.atomic
def update_production_status(
    *,
    order_id,
    status: str,
    quantity_produced=None,
    quantity_rejected=None,
    user=None,
) -> ProductionOrder:
    order = lock_production_order(order_id)
    previous = order.status

    if status == previous:
        if ProductionOrderLifecycle.is_terminal(previous):
            raise InvalidStateError(f"Production order {order.order_number} is {previous}")
    else:
        ProductionOrderLifecycle.validate_transition(instance=order, target_status=status)

    update_fields = ["status", "updated_at"]

    if quantity_produced is not None:
        order.quantity_produced = _check_quantity("quantity_produced", quantity_produced)
        update_fields.append("quantity_produced")
    if quantity_rejected is not None:
        order.quantity_rejected = _check_quantity("quantity_rejected", quantity_rejected)
        update_fields.append("quantity_rejected")

    now = timezone.now()
    order.status = status

    if status == ProductionOrder.STATUS_IN_PROGRESS and order.actual_start_date is None:
        order.actual_start_date = now
        update_fields.append("actual_start_date")

    if status == ProductionOrder.STATUS_COMPLETED and previous != status:
        order.actual_end_date = now
        update_fields.append("actual_end_date")

    if status == ProductionOrder.STATUS_CANCELLED:
        update_fields += stamp_transition(order, action="cancelled", user=user, when=now)

    order.save(update_fields=update_fields)

    logger.info(
        "Production status updated",
        extra={
            "order_number": order.order_number,
            "from_status": previous,
            "to_status": status,
            "quantity_produced": order.quantity_produced,
            "quantity_rejected": order.quantity_rejected,
        },
    )
    return order
