"""
MAINTENANCE ORDER LIFECYCLE RULES
"""

from core.services.lifecycle import machine
from maintenance.models import MaintenanceOrder

MaintenanceOrderLifecycle = machine(
    "Maintenance order",
    transitions={
        MaintenanceOrder.STATUS_PENDING: {
            MaintenanceOrder.STATUS_ASSIGNED,
            MaintenanceOrder.STATUS_IN_PROGRESS,
            MaintenanceOrder.STATUS_CANCELLED,
        },
        MaintenanceOrder.STATUS_ASSIGNED: {
            MaintenanceOrder.STATUS_IN_PROGRESS,
            MaintenanceOrder.STATUS_CANCELLED,
        },
        MaintenanceOrder.STATUS_IN_PROGRESS: {
            MaintenanceOrder.STATUS_COMPLETED,
            MaintenanceOrder.STATUS_CANCELLED,
        },
    },
    terminal={
        MaintenanceOrder.STATUS_COMPLETED,
        MaintenanceOrder.STATUS_CANCELLED,
    },
)

OPEN_STATUSES = (
    MaintenanceOrder.STATUS_PENDING,
    MaintenanceOrder.STATUS_ASSIGNED,
    MaintenanceOrder.STATUS_IN_PROGRESS,
)
