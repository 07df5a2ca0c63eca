# procurement/services/order_service.py

"""
======================================================
PATH: procurement/services/order_service.py
======================================================
PURCHASE ORDER SERVICE

Create / update / confirm / cancel purchase orders.

Rules:
- Header + lines + order number are written in ONE transaction
- total_amount = Σ(quantity × unit_price), rounded to cents
- Completed / cancelled orders are read-only
- Linking an approved purchase request completes it in the same transaction
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.money import money
from core.services.sequences import next_document_number
from inventory.models import Product
from procurement.models import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseRequest,
    Supplier,
)
from procurement.services.lifecycle import (
    PurchaseOrderLifecycle,
    PurchaseRequestLifecycle,
)

logger = logging.getLogger("erp.procurement")

PURCHASE_ORDER_PREFIX = "PO"

# Header fields callers may change after creation.
UPDATABLE_FIELDS = {
    "expected_delivery_date",
    "payment_terms",
    "delivery_address",
    "notes",
}


def lock_purchase_order(order_id) -> PurchaseOrder:
    try:
        return PurchaseOrder.objects.select_for_update().get(id=order_id)
    except PurchaseOrder.DoesNotExist as exc:
        raise NotFoundError("Purchase order not found") from exc


def _resolve_products(items) -> dict:
    product_ids = {str(it["product_id"]) for it in items}
    products = {
        str(p.id): p
        for p in Product.objects.filter(id__in=product_ids, is_active=True)
    }
    missing = sorted(product_ids - set(products))
    if missing:
        raise ValidationFailed(
            "Unknown or inactive product(s)",
            errors={"items": [f"product_id {pid} not found" for pid in missing]},
        )
    return products


@transaction.atomic
def create_purchase_order(
    *,
    supplier_id,
    items: list[dict],
    user=None,
    purchase_request_id=None,
    order_date=None,
    expected_delivery_date=None,
    payment_terms: str = "",
    delivery_address: str = "",
    notes: str = "",
) -> PurchaseOrder:
    """
    items: [{product_id, quantity, unit_price, specifications?}, ...]
    """
    if not items:
        raise ValidationFailed("At least one item is required", errors={"items": ["required"]})

    supplier = Supplier.objects.filter(id=supplier_id, is_active=True).first()
    if supplier is None:
        raise ValidationFailed("Supplier not found", errors={"supplier_id": ["not found"]})

    products = _resolve_products(items)

    purchase_request = None
    if purchase_request_id:
        try:
            purchase_request = PurchaseRequest.objects.select_for_update().get(id=purchase_request_id)
        except PurchaseRequest.DoesNotExist as exc:
            raise ValidationFailed(
                "Purchase request not found",
                errors={"purchase_request_id": ["not found"]},
            ) from exc

        if purchase_request.status != PurchaseRequest.STATUS_APPROVED:
            raise InvalidStateError("Only approved purchase requests can be converted to an order")

    total = Decimal("0.00")
    lines = []
    for it in items:
        qty = int(it["quantity"])
        unit_price = money(it["unit_price"])
        if qty <= 0:
            raise ValidationFailed("Item quantity must be > 0", errors={"items": ["quantity must be > 0"]})
        if unit_price < 0:
            raise ValidationFailed("Item unit_price cannot be negative", errors={"items": ["unit_price < 0"]})

        line_total = money(unit_price * qty)
        total += line_total
        lines.append((products[str(it["product_id"])], qty, unit_price, line_total, it.get("specifications") or ""))

    header = {
        "supplier": supplier,
        "purchase_request": purchase_request,
        "expected_delivery_date": expected_delivery_date,
        "payment_terms": payment_terms or supplier.payment_terms,
        "delivery_address": delivery_address or "",
        "notes": notes or "",
        "total_amount": money(total),
        "created_by": user if getattr(user, "is_authenticated", False) else None,
    }
    if order_date:
        header["order_date"] = order_date

    order = PurchaseOrder.objects.create(
        order_number=next_document_number(PURCHASE_ORDER_PREFIX),
        **header,
    )

    PurchaseOrderItem.objects.bulk_create(
        [
            PurchaseOrderItem(
                purchase_order=order,
                product=product,
                quantity=qty,
                unit_price=unit_price,
                total_price=line_total,
                specifications=specifications,
            )
            for product, qty, unit_price, line_total, specifications in lines
        ]
    )

    if purchase_request is not None:
        PurchaseRequestLifecycle.validate_transition(
            instance=purchase_request, target_status=PurchaseRequest.STATUS_COMPLETED
        )
        purchase_request.status = PurchaseRequest.STATUS_COMPLETED
        touched = stamp_transition(purchase_request, action="completed", user=user)
        purchase_request.save(update_fields=["status", "updated_at", *touched])

    logger.info(
        "Purchase order created",
        extra={
            "order_number": order.order_number,
            "supplier_id": str(supplier.id),
            "total_amount": str(order.total_amount),
            "line_count": len(lines),
            "user_id": str(getattr(user, "id", "") or ""),
        },
    )
    return order


@transaction.atomic
def update_purchase_order(*, order_id, changes: dict, user=None) -> PurchaseOrder:
    order = lock_purchase_order(order_id)

    if PurchaseOrderLifecycle.is_terminal(order.status):
        raise InvalidStateError(f"Cannot update {order.status} purchase order")

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationFailed(
            "Fields cannot be updated",
            errors={field: ["read-only"] for field in sorted(unknown)},
        )

    for field, value in changes.items():
        setattr(order, field, value)
    order.save(update_fields=[*changes.keys(), "updated_at"])

    logger.info("Purchase order updated", extra={"order_number": order.order_number, "fields": sorted(changes)})
    return order


@transaction.atomic
def confirm_purchase_order(*, order_id, user=None) -> PurchaseOrder:
    order = lock_purchase_order(order_id)

    PurchaseOrderLifecycle.validate_transition(
        instance=order, target_status=PurchaseOrder.STATUS_CONFIRMED
    )
    order.status = PurchaseOrder.STATUS_CONFIRMED
    touched = stamp_transition(order, action="confirmed", user=user)
    order.save(update_fields=["status", "updated_at", *touched])

    logger.info("Purchase order confirmed", extra={"order_number": order.order_number})
    return order


@transaction.atomic
def cancel_purchase_order(*, order_id, user=None, reason: str = "") -> PurchaseOrder:
    order = lock_purchase_order(order_id)

    if order.status == PurchaseOrder.STATUS_COMPLETED:
        raise InvalidStateError("Cannot cancel completed purchase order")

    PurchaseOrderLifecycle.validate_transition(
        instance=order, target_status=PurchaseOrder.STATUS_CANCELLED
    )
    order.status = PurchaseOrder.STATUS_CANCELLED
    order.cancellation_reason = reason or ""
    touched = stamp_transition(order, action="cancelled", user=user)
    order.save(update_fields=["status", "cancellation_reason", "updated_at", *touched])

    logger.info(
        "Purchase order cancelled",
        extra={"order_number": order.order_number, "reason": order.cancellation_reason},
    )
    return order
