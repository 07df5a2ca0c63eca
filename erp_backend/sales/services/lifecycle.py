"""
SALES ORDER LIFECYCLE RULES

DESIGN PRINCIPLES:
- No database writes
- Single source of truth for sales order status changes
"""

from core.services.lifecycle import machine
from sales.models import SalesOrder

SalesOrderLifecycle = machine(
    "Sales order",
    transitions={
        SalesOrder.STATUS_DRAFT: {
            SalesOrder.STATUS_CONFIRMED,
            SalesOrder.STATUS_CANCELLED,
        },
        SalesOrder.STATUS_CONFIRMED: {
            SalesOrder.STATUS_IN_PRODUCTION,
            SalesOrder.STATUS_READY_TO_SHIP,
            SalesOrder.STATUS_CANCELLED,
        },
        SalesOrder.STATUS_IN_PRODUCTION: {
            SalesOrder.STATUS_READY_TO_SHIP,
            SalesOrder.STATUS_CANCELLED,
        },
        SalesOrder.STATUS_READY_TO_SHIP: {
            SalesOrder.STATUS_SHIPPED,
            SalesOrder.STATUS_CANCELLED,
        },
        SalesOrder.STATUS_SHIPPED: {
            SalesOrder.STATUS_DELIVERED,
            SalesOrder.STATUS_CANCELLED,
        },
    },
    terminal={
        SalesOrder.STATUS_DELIVERED,
        SalesOrder.STATUS_CANCELLED,
    },
)

# Orders whose header and totals may still change.
EDITABLE_STATUSES = {
    SalesOrder.STATUS_DRAFT,
    SalesOrder.STATUS_CONFIRMED,
}

# status -> audit stamp action (`<action>_at` / `<action>_by`)
STATUS_STAMPS = {
    SalesOrder.STATUS_CONFIRMED: "confirmed",
    SalesOrder.STATUS_SHIPPED: "shipped",
    SalesOrder.STATUS_DELIVERED: "delivered",
    SalesOrder.STATUS_CANCELLED: "cancelled",
}
