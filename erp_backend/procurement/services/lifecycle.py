"""
PROCUREMENT LIFECYCLE RULES

Allowed transitions for purchase requests and purchase orders.

DESIGN PRINCIPLES:
- No database writes
- Single source of truth for procurement status changes
"""

from core.services.lifecycle import machine
from procurement.models import PurchaseOrder, PurchaseRequest

PurchaseRequestLifecycle = machine(
    "Purchase request",
    transitions={
        PurchaseRequest.STATUS_PENDING: {
            PurchaseRequest.STATUS_APPROVED,
            PurchaseRequest.STATUS_REJECTED,
            PurchaseRequest.STATUS_CANCELLED,
        },
        PurchaseRequest.STATUS_APPROVED: {
            PurchaseRequest.STATUS_COMPLETED,
            PurchaseRequest.STATUS_CANCELLED,
        },
    },
    terminal={
        PurchaseRequest.STATUS_REJECTED,
        PurchaseRequest.STATUS_COMPLETED,
        PurchaseRequest.STATUS_CANCELLED,
    },
)

PurchaseOrderLifecycle = machine(
    "Purchase order",
    transitions={
        PurchaseOrder.STATUS_PENDING: {
            PurchaseOrder.STATUS_CONFIRMED,
            PurchaseOrder.STATUS_CANCELLED,
        },
        PurchaseOrder.STATUS_CONFIRMED: {
            PurchaseOrder.STATUS_PARTIALLY_RECEIVED,
            PurchaseOrder.STATUS_COMPLETED,
            PurchaseOrder.STATUS_CANCELLED,
        },
        PurchaseOrder.STATUS_PARTIALLY_RECEIVED: {
            PurchaseOrder.STATUS_PARTIALLY_RECEIVED,
            PurchaseOrder.STATUS_COMPLETED,
            PurchaseOrder.STATUS_CANCELLED,
        },
    },
    terminal={
        PurchaseOrder.STATUS_COMPLETED,
        PurchaseOrder.STATUS_CANCELLED,
    },
)

# Orders that can accept deliveries.
RECEIVABLE_ORDER_STATUSES = {
    PurchaseOrder.STATUS_CONFIRMED,
    PurchaseOrder.STATUS_PARTIALLY_RECEIVED,
}
