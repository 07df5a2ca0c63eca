# finance/services/payment_service.py

"""
======================================================
PATH: finance/services/payment_service.py
======================================================
PAYMENT RECONCILER

record_payment() is the ONLY writer of Payment rows and of
Invoice.paid_amount. Status and payment_date also move in
invoice_service.update_invoice when an edit settles the invoice.

Canonical flow (one transaction):
1) Lock the invoice row
2) Reject if already paid
3) Insert a completed Payment (PAY-YYYY-NNNN)
4) paid_amount = Σ completed payments (aggregate, never +=)
5) status = paid if paid_amount >= total_amount else partially_paid
6) payment_date stamped only when the invoice becomes paid

Overpayment is accepted; the invoice simply becomes paid.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from django.db.models import Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from core.exceptions import InvalidStateError, ValidationFailed
from core.services.money import money
from core.services.sequences import next_document_number
from finance.models import Invoice, Payment
from finance.services.invoice_service import lock_invoice
from finance.services.lifecycle import InvoiceLifecycle

logger = logging.getLogger("erp.finance")

PAYMENT_PREFIX = "PAY"


@dataclass(frozen=True)
class PaymentResult:
    invoice: Invoice
    payment: Payment


def completed_total(invoice: Invoice) -> Decimal:
    total = Payment.objects.filter(
        invoice=invoice,
        status=Payment.STATUS_COMPLETED,
    ).aggregate(total=Coalesce(Sum("amount"), Value(Decimal("0.00"))))["total"]
    return money(total)


@transaction.atomic
def record_payment(
    *,
    invoice_id,
    amount,
    payment_method: str,
    payment_reference: str = "",
    user=None,
) -> PaymentResult:
    amount = money(amount)
    if amount <= 0:
        raise ValidationFailed("Payment amount must be greater than zero", errors={"payment_amount": ["must be > 0"]})
    if payment_method not in Payment.Method.values:
        raise ValidationFailed("Invalid payment method", errors={"payment_method": [f"'{payment_method}' is not supported"]})

    invoice = lock_invoice(invoice_id)

    if invoice.status == Invoice.STATUS_PAID:
        raise InvalidStateError("Invoice is already paid")

    payment = Payment.objects.create(
        payment_number=next_document_number(PAYMENT_PREFIX),
        invoice=invoice,
        amount=amount,
        payment_method=payment_method,
        payment_reference=payment_reference or "",
        status=Payment.STATUS_COMPLETED,
        processed_by=user if getattr(user, "is_authenticated", False) else None,
    )

    paid = completed_total(invoice)
    target = Invoice.STATUS_PAID if paid >= invoice.total_amount else Invoice.STATUS_PARTIALLY_PAID
    InvoiceLifecycle.validate_transition(instance=invoice, target_status=target)

    invoice.paid_amount = paid
    invoice.status = target
    update_fields = ["paid_amount", "status", "updated_at"]
    if target == Invoice.STATUS_PAID:
        invoice.payment_date = timezone.localdate()
        update_fields.append("payment_date")
    invoice.save(update_fields=update_fields)

    logger.info(
        "Payment recorded",
        extra={
            "invoice_number": invoice.invoice_number,
            "payment_number": payment.payment_number,
            "amount": str(amount),
            "paid_amount": str(invoice.paid_amount),
            "status": invoice.status,
        },
    )
    return PaymentResult(invoice=invoice, payment=payment)
