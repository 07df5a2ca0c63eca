# finance/services/invoice_service.py

"""
INVOICE SERVICE

- create_invoice: number (INV-YYYY-NNNN) + row in one transaction
- update_invoice: header edits until the invoice is paid; lowering the
  total to the paid amount settles it

paid_amount is owned by payment_service.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from django.db import transaction
from django.utils import timezone

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.money import ZERO, money
from core.services.sequences import next_document_number
from finance.models import Invoice
from finance.services.lifecycle import InvoiceLifecycle
from sales.models import Customer, SalesOrder

logger = logging.getLogger("erp.finance")

INVOICE_PREFIX = "INV"
DEFAULT_PAYMENT_TERM_DAYS = 30

UPDATABLE_FIELDS = {"invoice_date", "due_date", "subtotal", "tax_amount", "notes"}


def lock_invoice(invoice_id) -> Invoice:
    try:
        return Invoice.objects.select_for_update().get(id=invoice_id)
    except Invoice.DoesNotExist as exc:
        raise NotFoundError("Invoice not found") from exc


def _check_total(total, *, paid=ZERO):
    if total <= 0:
        raise ValidationFailed(
            "Invoice total must be greater than zero",
            errors={"total_amount": ["must be > 0"]},
        )
    if total < paid:
        raise ValidationFailed(
            "Invoice total cannot be lower than the amount already paid",
            errors={"total_amount": [f"already paid {paid}"]},
        )


@transaction.atomic
def create_invoice(
    *,
    customer_id=None,
    sales_order_id=None,
    subtotal=None,
    tax_amount=None,
    invoice_date=None,
    due_date=None,
    notes: str = "",
    user=None,
) -> Invoice:
    """
    Amounts default to the linked sales order:
        subtotal = order.subtotal - order.discount_amount
        tax      = order.tax_amount
    """
    sales_order = None
    if sales_order_id:
        sales_order = SalesOrder.objects.select_related("customer").filter(id=sales_order_id).first()
        if sales_order is None:
            raise ValidationFailed("Sales order not found", errors={"sales_order_id": ["not found"]})
        if customer_id and str(sales_order.customer_id) != str(customer_id):
            raise ValidationFailed(
                "Sales order belongs to another customer",
                errors={"sales_order_id": ["customer mismatch"]},
            )
        customer_id = customer_id or sales_order.customer_id

        if subtotal is None:
            subtotal = sales_order.subtotal - sales_order.discount_amount
        if tax_amount is None:
            tax_amount = sales_order.tax_amount

    customer = Customer.objects.filter(id=customer_id).first() if customer_id else None
    if customer is None:
        raise ValidationFailed("Customer not found", errors={"customer_id": ["not found"]})

    subtotal = money(subtotal)
    tax_amount = money(tax_amount)
    total = money(subtotal + tax_amount)
    _check_total(total)

    invoice_date = invoice_date or timezone.localdate()
    due_date = due_date or invoice_date + timedelta(days=DEFAULT_PAYMENT_TERM_DAYS)

    invoice = Invoice(
        invoice_number=next_document_number(INVOICE_PREFIX),
        customer=customer,
        sales_order=sales_order,
        invoice_date=invoice_date,
        due_date=due_date,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total,
        notes=notes or "",
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )
    invoice.full_clean()
    invoice.save()

    logger.info(
        "Invoice created",
        extra={
            "invoice_number": invoice.invoice_number,
            "customer_id": str(customer.id),
            "total_amount": str(invoice.total_amount),
        },
    )
    return invoice


@transaction.atomic
def update_invoice(*, invoice_id, changes: dict, user=None) -> Invoice:
    """
    Header edits while unpaid.

    Lowering the total to the amount already paid settles the invoice:
    status becomes paid and payment_date is stamped, exactly as if the
    last payment had covered it.
    """
    invoice = lock_invoice(invoice_id)

    if invoice.status == Invoice.STATUS_PAID:
        raise InvalidStateError("Cannot update paid invoice")

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationFailed(
            "Fields cannot be updated",
            errors={field: ["read-only"] for field in sorted(unknown)},
        )

    for field, value in changes.items():
        if field in {"subtotal", "tax_amount"}:
            value = money(value)
        setattr(invoice, field, value)

    invoice.total_amount = money(invoice.subtotal + invoice.tax_amount)
    _check_total(invoice.total_amount, paid=invoice.paid_amount)

    settled = invoice.paid_amount > 0 and invoice.paid_amount >= invoice.total_amount
    if settled:
        InvoiceLifecycle.validate_transition(instance=invoice, target_status=Invoice.STATUS_PAID)
        invoice.status = Invoice.STATUS_PAID
        invoice.payment_date = timezone.localdate()

    invoice.full_clean()
    invoice.save()

    logger.info(
        "Invoice updated",
        extra={"invoice_number": invoice.invoice_number, "fields": sorted(changes), "status": invoice.status},
    )
    return invoice
