# procurement/services/receiving_service.py

"""
======================================================
PATH: procurement/services/receiving_service.py
======================================================
PURCHASE ORDER RECEIVING SERVICE

Receive a (partial or full) delivery against a purchase order atomically.

Canonical flow:
1) Lock the order
2) Validate status (confirmed / partially_received) + payload lines
3) Lock the referenced lines, reject over-receipt
4) Increment received_quantity per line and stamp received_date
5) Upsert stock for each product (inventory.services.stock.receive_stock)
6) Recompute order status over ALL lines:
      every line fully received -> completed (order received_date stamped)
      otherwise                 -> partially_received

Semantics:
- Quantities are cumulative: replaying the same payload receives again.
- Any failure rolls back every line update and stock movement of the call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from core.exceptions import InvalidStateError, ValidationFailed
from inventory.services.stock import receive_stock
from procurement.models import PurchaseOrder, PurchaseOrderItem
from procurement.services.lifecycle import (
    RECEIVABLE_ORDER_STATUSES,
    PurchaseOrderLifecycle,
)
from procurement.services.order_service import lock_purchase_order

logger = logging.getLogger("erp.procurement")


class PurchaseReceivingError(InvalidStateError):
    pass


@dataclass
class ReceivingResult:
    order: PurchaseOrder
    received_lines: list = field(default_factory=list)
    completed: bool = False


def _normalize_lines(received_items) -> dict[str, int]:
    """
    Collapse the payload into {order_item_id: quantity}.
    Duplicate ids in one payload are summed.
    """
    if not received_items:
        raise ValidationFailed(
            "received_items is required",
            errors={"received_items": ["At least one line is required"]},
        )

    quantities: dict[str, int] = {}
    for row in received_items:
        item_id = str(row.get("id") or "").strip()
        if not item_id:
            raise ValidationFailed("Each received item needs an id", errors={"received_items": ["id is required"]})

        try:
            qty = int(row.get("received_quantity"))
        except (TypeError, ValueError):
            raise ValidationFailed(
                "received_quantity must be an integer",
                errors={"received_items": [f"{item_id}: received_quantity must be an integer"]},
            )
        if qty <= 0:
            raise ValidationFailed(
                "received_quantity must be greater than zero",
                errors={"received_items": [f"{item_id}: received_quantity must be > 0"]},
            )

        quantities[item_id] = quantities.get(item_id, 0) + qty

    return quantities


@transaction.atomic
def receive_purchase_order(
    *,
    order_id,
    received_items: list[dict],
    notes: str = "",
    user=None,
) -> ReceivingResult:
    """
    RECEIVE PURCHASE ORDER (atomic)

    received_items: [{"id": <order item id>, "received_quantity": <int>}, ...]
    """
    order = lock_purchase_order(order_id)

    if order.status not in RECEIVABLE_ORDER_STATUSES:
        raise PurchaseReceivingError("Only confirmed orders can be received")

    quantities = _normalize_lines(received_items)

    lines = {
        str(line.id): line
        for line in PurchaseOrderItem.objects.select_for_update()
        .select_related("product")
        .filter(purchase_order=order, id__in=list(quantities))
    }

    unknown = sorted(set(quantities) - set(lines))
    if unknown:
        raise ValidationFailed(
            "Received items do not belong to this purchase order",
            errors={"received_items": [f"{item_id}: not a line of {order.order_number}" for item_id in unknown]},
        )

    # Validate every line before touching anything.
    for item_id, qty in quantities.items():
        line = lines[item_id]
        if int(line.received_quantity) + qty > int(line.quantity):
            raise PurchaseReceivingError(
                f"Over-receipt on {line.product.sku}: ordered {line.quantity}, "
                f"already received {line.received_quantity}, delivering {qty}"
            )

    today = timezone.localdate()
    received_lines = []

    for item_id, qty in quantities.items():
        line = lines[item_id]
        line.received_quantity = int(line.received_quantity) + qty
        line.received_date = today
        line.save(update_fields=["received_quantity", "received_date"])

        receive_stock(
            product=line.product,
            quantity=qty,
            user=user,
            reference=order.order_number,
            unit_cost=line.unit_price,
            notes=notes or "",
        )
        received_lines.append({"id": item_id, "received_quantity": qty, "total_received": line.received_quantity})

    # Reconcile over ALL lines, not only the ones in this delivery.
    all_received = not order.items.filter(received_quantity__lt=F("quantity")).exists()
    target = (
        PurchaseOrder.STATUS_COMPLETED if all_received else PurchaseOrder.STATUS_PARTIALLY_RECEIVED
    )

    PurchaseOrderLifecycle.validate_transition(instance=order, target_status=target)

    order.status = target
    if notes:
        order.receiving_notes = notes
    update_fields = ["status", "receiving_notes", "updated_at"]
    if all_received:
        order.received_date = today
        update_fields.append("received_date")
    order.save(update_fields=update_fields)

    logger.info(
        "Purchase order received",
        extra={
            "order_number": order.order_number,
            "status": order.status,
            "lines": len(received_lines),
            "user_id": str(getattr(user, "id", "") or ""),
        },
    )

    return ReceivingResult(order=order, received_lines=received_lines, completed=all_received)
