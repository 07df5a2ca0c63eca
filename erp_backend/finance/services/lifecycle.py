"""
INVOICE LIFECYCLE RULES

partially_paid -> partially_paid is allowed: every further installment
that does not settle the invoice keeps it there.
"""

from core.services.lifecycle import machine
from finance.models import Invoice

InvoiceLifecycle = machine(
    "Invoice",
    transitions={
        Invoice.STATUS_PENDING: {
            Invoice.STATUS_PARTIALLY_PAID,
            Invoice.STATUS_PAID,
        },
        Invoice.STATUS_PARTIALLY_PAID: {
            Invoice.STATUS_PARTIALLY_PAID,
            Invoice.STATUS_PAID,
        },
    },
    terminal={Invoice.STATUS_PAID},
)
