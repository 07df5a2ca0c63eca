"""
PRODUCTION ORDER LIFECYCLE RULES

DESIGN PRINCIPLES:
- No database writes
- planned orders may skip release and start directly
"""

from core.services.lifecycle import machine
from production.models import ProductionOrder

ProductionOrderLifecycle = machine(
    "Production order",
    transitions={
        ProductionOrder.STATUS_PLANNED: {
            ProductionOrder.STATUS_RELEASED,
            ProductionOrder.STATUS_IN_PROGRESS,
            ProductionOrder.STATUS_CANCELLED,
        },
        ProductionOrder.STATUS_RELEASED: {
            ProductionOrder.STATUS_IN_PROGRESS,
            ProductionOrder.STATUS_CANCELLED,
        },
        ProductionOrder.STATUS_IN_PROGRESS: {
            ProductionOrder.STATUS_COMPLETED,
            ProductionOrder.STATUS_CANCELLED,
        },
    },
    terminal={
        ProductionOrder.STATUS_COMPLETED,
        ProductionOrder.STATUS_CANCELLED,
    },
)

# Orders still on the shop-floor schedule.
SCHEDULED_STATUSES = (
    ProductionOrder.STATUS_PLANNED,
    ProductionOrder.STATUS_RELEASED,
    ProductionOrder.STATUS_IN_PROGRESS,
)
