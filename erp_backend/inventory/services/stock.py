# inventory/services/stock.py

"""
STOCK SERVICE

The ONLY code path that moves InventoryItem.quantity_on_hand.

Rules:
- Every movement locks the stock row (select_for_update) before reading it
- Every movement writes one immutable InventoryTransaction
- Stock never goes below zero
- receive_stock() is an upsert: the first receipt of a product creates its
  InventoryItem with the configured default thresholds (settings.INVENTORY_DEFAULTS)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.exceptions import InvalidStateError, ValidationFailed
from core.services.money import money
from inventory.models import InventoryItem, InventoryTransaction, Product

logger = logging.getLogger("erp.inventory")


class InsufficientStockError(InvalidStateError):
    """Raised when a movement would take stock below zero."""


@dataclass(frozen=True)
class StockMovementResult:
    item: InventoryItem
    transaction: InventoryTransaction
    created: bool = False


def _to_positive_int(value, *, field: str = "quantity") -> int:
    if isinstance(value, bool):
        # guardrail: bool is an int subclass in Python
        raise ValidationFailed(f"{field} must be an integer", errors={field: ["must be an integer"]})

    try:
        qty = int(value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"{field} must be an integer", errors={field: ["must be an integer"]})

    if qty <= 0:
        raise ValidationFailed(f"{field} must be greater than zero", errors={field: ["must be > 0"]})

    return qty


def default_item_fields() -> dict:
    defaults = getattr(settings, "INVENTORY_DEFAULTS", {}) or {}
    return {
        "minimum_stock_level": int(defaults.get("minimum_stock_level", 10)),
        "maximum_stock_level": int(defaults.get("maximum_stock_level", 1000)),
        "reorder_point": int(defaults.get("reorder_point", 20)),
        "location": defaults.get("location", "Main Warehouse"),
    }


def _lock_item_for_product(product: Product) -> InventoryItem:
    try:
        return InventoryItem.objects.select_for_update().get(product=product)
    except InventoryItem.DoesNotExist as exc:
        raise InsufficientStockError(
            f"No stock record for product {product.sku}"
        ) from exc


def _record(
    *,
    item: InventoryItem,
    transaction_type: str,
    direction: str,
    quantity: int,
    user=None,
    reference: str = "",
    notes: str = "",
    unit_cost=None,
) -> InventoryTransaction:
    return InventoryTransaction.objects.create(
        item=item,
        transaction_type=transaction_type,
        direction=direction,
        quantity=quantity,
        quantity_after=item.quantity_on_hand,
        unit_cost=unit_cost,
        reference=(reference or "")[:64],
        notes=notes or "",
        performed_by=user if getattr(user, "is_authenticated", False) else None,
    )


@transaction.atomic
def receive_stock(
    *,
    product: Product,
    quantity,
    user=None,
    reference: str = "",
    unit_cost=None,
    notes: str = "",
) -> StockMovementResult:
    """
    Upsert the product's stock record and add `quantity` to it.
    """
    qty = _to_positive_int(quantity)

    item, created = InventoryItem.objects.select_for_update().get_or_create(
        product=product,
        defaults=default_item_fields(),
    )

    on_hand = int(item.quantity_on_hand or 0)

    if unit_cost is not None:
        # weighted average over the units on hand
        incoming_cost = money(unit_cost)
        if on_hand > 0:
            total_value = item.unit_cost * Decimal(on_hand) + incoming_cost * Decimal(qty)
            item.unit_cost = money(total_value / Decimal(on_hand + qty))
        else:
            item.unit_cost = incoming_cost

    item.quantity_on_hand = on_hand + qty
    item.last_received_at = timezone.now()
    item.save()

    txn = _record(
        item=item,
        transaction_type=InventoryTransaction.TransactionType.RECEIPT,
        direction=InventoryTransaction.Direction.IN,
        quantity=qty,
        user=user,
        reference=reference,
        notes=notes,
        unit_cost=money(unit_cost) if unit_cost is not None else None,
    )

    logger.info(
        "Stock received",
        extra={
            "product_id": str(product.id),
            "sku": product.sku,
            "quantity": qty,
            "on_hand": item.quantity_on_hand,
            "reference": reference,
            "item_created": created,
        },
    )

    return StockMovementResult(item=item, transaction=txn, created=created)


@transaction.atomic
def issue_stock(
    *,
    product: Product,
    quantity,
    user=None,
    reference: str = "",
    notes: str = "",
) -> StockMovementResult:
    """Take `quantity` out of stock (production consumption, shipments)."""
    qty = _to_positive_int(quantity)
    item = _lock_item_for_product(product)

    on_hand = int(item.quantity_on_hand or 0)
    if qty > on_hand:
        raise InsufficientStockError(
            f"Insufficient stock for {product.sku}. On hand: {on_hand}, requested: {qty}"
        )

    item.quantity_on_hand = on_hand - qty
    item.save()

    txn = _record(
        item=item,
        transaction_type=InventoryTransaction.TransactionType.ISSUE,
        direction=InventoryTransaction.Direction.OUT,
        quantity=qty,
        user=user,
        reference=reference,
        notes=notes,
    )

    logger.info(
        "Stock issued",
        extra={"sku": product.sku, "quantity": qty, "on_hand": item.quantity_on_hand, "reference": reference},
    )
    return StockMovementResult(item=item, transaction=txn)


@transaction.atomic
def return_stock(
    *,
    product: Product,
    quantity,
    user=None,
    reference: str = "",
    notes: str = "",
) -> StockMovementResult:
    """Put previously issued units back on hand (customer / line returns)."""
    qty = _to_positive_int(quantity)
    item = _lock_item_for_product(product)

    item.quantity_on_hand = int(item.quantity_on_hand or 0) + qty
    item.save()

    txn = _record(
        item=item,
        transaction_type=InventoryTransaction.TransactionType.RETURN,
        direction=InventoryTransaction.Direction.IN,
        quantity=qty,
        user=user,
        reference=reference,
        notes=notes,
    )
    return StockMovementResult(item=item, transaction=txn)


@transaction.atomic
def adjust_stock(
    *,
    item: InventoryItem,
    quantity_delta,
    user=None,
    notes: str = "",
) -> StockMovementResult:
    """
    Manual signed adjustment (cycle counts, damage, write-offs).

    quantity_delta:
      +N -> IN adjustment
      -N -> OUT adjustment (cannot go below zero)
    """
    if isinstance(quantity_delta, bool):
        raise ValidationFailed("quantity_delta must be an integer")
    try:
        delta = int(quantity_delta)
    except (TypeError, ValueError):
        raise ValidationFailed("quantity_delta must be an integer")
    if delta == 0:
        raise ValidationFailed("quantity_delta cannot be 0")

    locked = InventoryItem.objects.select_for_update().select_related("product").get(pk=item.pk)
    on_hand = int(locked.quantity_on_hand or 0)

    if delta < 0 and abs(delta) > on_hand:
        raise InsufficientStockError(
            f"Cannot reduce stock below zero. On hand: {on_hand}, requested OUT: {abs(delta)}"
        )

    locked.quantity_on_hand = on_hand + delta
    locked.save()

    txn = _record(
        item=locked,
        transaction_type=InventoryTransaction.TransactionType.ADJUSTMENT,
        direction=(
            InventoryTransaction.Direction.IN if delta > 0 else InventoryTransaction.Direction.OUT
        ),
        quantity=abs(delta),
        user=user,
        reference="ADJUSTMENT",
        notes=notes,
    )

    logger.info(
        "Stock adjusted",
        extra={"sku": locked.product.sku, "delta": delta, "on_hand": locked.quantity_on_hand},
    )
    return StockMovementResult(item=locked, transaction=txn)
