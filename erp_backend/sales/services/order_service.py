# sales/services/order_service.py

"""
======================================================
PATH: sales/services/order_service.py
======================================================
SALES ORDER SERVICE

SINGLE SOURCE OF TRUTH for:
- Sales order numbering (SO-YYYY-NNNN)
- Line pricing and order totals
- Status changes (explicit transition table + audit stamps)

GUARANTEES:
- Header, lines and number are written atomically
- Totals are recomputed from lines, never trusted from input
- Orders are edited only while draft/confirmed
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.money import ZERO, money
from core.services.sequences import next_document_number
from inventory.models import Product
from sales.models import Customer, SalesOrder, SalesOrderItem
from sales.services.lifecycle import EDITABLE_STATUSES, STATUS_STAMPS, SalesOrderLifecycle

logger = logging.getLogger("erp.sales")

SALES_ORDER_PREFIX = "SO"

HEADER_FIELDS = {
    "required_date",
    "priority",
    "shipping_address",
    "notes",
    "tax_amount",
    "discount_amount",
}

HUNDRED = Decimal("100")


def lock_sales_order(order_id) -> SalesOrder:
    try:
        return SalesOrder.objects.select_for_update().get(id=order_id)
    except SalesOrder.DoesNotExist as exc:
        raise NotFoundError("Sales order not found") from exc


def line_total(*, quantity, unit_price, discount_percentage=ZERO) -> Decimal:
    discount = Decimal(str(discount_percentage or 0))
    if discount < 0 or discount > HUNDRED:
        raise ValidationFailed(
            "discount_percentage must be between 0 and 100",
            errors={"items": ["discount_percentage must be between 0 and 100"]},
        )
    gross = Decimal(str(unit_price)) * int(quantity)
    return money(gross * (HUNDRED - discount) / HUNDRED)


def _order_total(subtotal, tax_amount, discount_amount) -> Decimal:
    total = money(subtotal) + money(tax_amount) - money(discount_amount)
    if total < 0:
        raise ValidationFailed(
            "Discount cannot exceed order value",
            errors={"discount_amount": ["exceeds subtotal + tax"]},
        )
    return money(total)


def _build_lines(items) -> list[dict]:
    if not items:
        raise ValidationFailed("At least one item is required", errors={"items": ["required"]})

    product_ids = {str(it["product_id"]) for it in items}
    products = {str(p.id): p for p in Product.objects.filter(id__in=product_ids, is_active=True)}
    missing = sorted(product_ids - set(products))
    if missing:
        raise ValidationFailed(
            "Unknown or inactive product(s)",
            errors={"items": [f"product_id {pid} not found" for pid in missing]},
        )

    lines = []
    for number, it in enumerate(items, start=1):
        qty = int(it["quantity"])
        if qty <= 0:
            raise ValidationFailed("Item quantity must be > 0", errors={"items": ["quantity must be > 0"]})

        product = products[str(it["product_id"])]
        unit_price = money(it.get("unit_price", product.selling_price))
        if unit_price < 0:
            raise ValidationFailed("Item unit_price cannot be negative", errors={"items": ["unit_price < 0"]})

        discount = money(it.get("discount_percentage") or 0)
        lines.append(
            {
                "product": product,
                "line_number": number,
                "quantity_ordered": qty,
                "unit_price": unit_price,
                "discount_percentage": discount,
                "line_total": line_total(quantity=qty, unit_price=unit_price, discount_percentage=discount),
            }
        )
    return lines


@transaction.atomic
def create_sales_order(
    *,
    customer_id,
    items: list[dict],
    user=None,
    order_date=None,
    required_date=None,
    priority: str = SalesOrder.Priority.MEDIUM,
    tax_amount=ZERO,
    discount_amount=ZERO,
    shipping_address: str = "",
    notes: str = "",
) -> SalesOrder:
    """
    items: [{product_id, quantity, unit_price?, discount_percentage?}, ...]
    unit_price defaults to the product's selling price.
    """
    customer = Customer.objects.filter(id=customer_id, is_active=True).first()
    if customer is None:
        raise ValidationFailed("Customer not found", errors={"customer_id": ["not found"]})

    lines = _build_lines(items)

    subtotal = money(sum((line["line_total"] for line in lines), ZERO))
    total = _order_total(subtotal, tax_amount, discount_amount)

    header = {
        "customer": customer,
        "required_date": required_date,
        "priority": priority or SalesOrder.Priority.MEDIUM,
        "subtotal": subtotal,
        "tax_amount": money(tax_amount),
        "discount_amount": money(discount_amount),
        "total_amount": total,
        "shipping_address": shipping_address or customer.shipping_address,
        "notes": notes or "",
        "created_by": user if getattr(user, "is_authenticated", False) else None,
    }
    if order_date:
        header["order_date"] = order_date

    order = SalesOrder.objects.create(
        order_number=next_document_number(SALES_ORDER_PREFIX),
        **header,
    )
    SalesOrderItem.objects.bulk_create([SalesOrderItem(sales_order=order, **line) for line in lines])

    logger.info(
        "Sales order created",
        extra={
            "order_number": order.order_number,
            "customer_id": str(customer.id),
            "total_amount": str(order.total_amount),
            "line_count": len(lines),
        },
    )
    return order


@transaction.atomic
def update_sales_order(*, order_id, changes: dict, items: list[dict] | None = None, user=None) -> SalesOrder:
    """
    Edit header fields (and optionally replace the lines) of a draft/confirmed order.
    Totals are recomputed whenever tax, discount or lines change.
    """
    order = lock_sales_order(order_id)

    if order.status not in EDITABLE_STATUSES:
        raise InvalidStateError(f"Cannot update {order.status} sales order")

    unknown = set(changes) - HEADER_FIELDS
    if unknown:
        raise ValidationFailed(
            "Fields cannot be updated",
            errors={field: ["read-only"] for field in sorted(unknown)},
        )

    for field, value in changes.items():
        if field in {"tax_amount", "discount_amount"}:
            value = money(value)
        setattr(order, field, value)

    if items is not None:
        lines = _build_lines(items)
        order.items.all().delete()
        SalesOrderItem.objects.bulk_create([SalesOrderItem(sales_order=order, **line) for line in lines])

    order.subtotal = money(sum((i.line_total for i in order.items.all()), ZERO))
    order.total_amount = _order_total(order.subtotal, order.tax_amount, order.discount_amount)
    order.save()

    logger.info(
        "Sales order updated",
        extra={"order_number": order.order_number, "fields": sorted(changes), "lines_replaced": items is not None},
    )
    return order


@transaction.atomic
def transition_sales_order(*, order_id, status: str, user=None, reason: str = "") -> SalesOrder:
    order = lock_sales_order(order_id)
    previous = order.status

    SalesOrderLifecycle.validate_transition(instance=order, target_status=status)

    order.status = status
    update_fields = ["status", "updated_at"]

    action = STATUS_STAMPS.get(status)
    if action:
        update_fields += stamp_transition(order, action=action, user=user)

    if status == SalesOrder.STATUS_CANCELLED:
        order.cancellation_reason = reason or ""
        update_fields.append("cancellation_reason")

    if status == SalesOrder.STATUS_SHIPPED:
        # the whole order leaves in one shipment
        for line in order.items.all():
            line.quantity_shipped = line.quantity_ordered
            line.save(update_fields=["quantity_shipped"])

    order.save(update_fields=update_fields)

    logger.info(
        "Sales order status changed",
        extra={"order_number": order.order_number, "from_status": previous, "to_status": status},
    )
    return order
