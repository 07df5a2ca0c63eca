# maintenance/services/order_service.py

"""
======================================================
PATH: maintenance/services/order_service.py
======================================================
MAINTENANCE ORDER SERVICE

Equipment status follows its work orders:
- start    -> equipment under maintenance
- complete -> history row written, equipment back to active
- cancel   -> equipment back to active when no other order is running

Every step locks the order and the equipment row in one transaction.
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.money import money
from core.services.sequences import next_document_number
from maintenance.models import Equipment, MaintenanceHistory, MaintenanceOrder
from maintenance.services.lifecycle import MaintenanceOrderLifecycle

logger = logging.getLogger("erp.maintenance")

MAINTENANCE_ORDER_PREFIX = "MO"

EDITABLE_FIELDS = {"title", "description", "maintenance_type", "priority", "scheduled_date"}


def lock_maintenance_order(order_id) -> MaintenanceOrder:
    try:
        return MaintenanceOrder.objects.select_for_update().get(id=order_id)
    except MaintenanceOrder.DoesNotExist as exc:
        raise NotFoundError("Maintenance order not found") from exc


def lock_equipment(equipment_id) -> Equipment:
    try:
        return Equipment.objects.select_for_update().get(id=equipment_id)
    except Equipment.DoesNotExist as exc:
        raise NotFoundError("Equipment not found") from exc


def _technician(user_id):
    if not user_id:
        return None
    technician = get_user_model().objects.filter(id=user_id, is_active=True).first()
    if technician is None:
        raise ValidationFailed("Technician not found", errors={"assigned_to": ["not found or inactive"]})
    return technician


def _release_equipment(equipment: Equipment, *, except_order_id) -> None:
    if equipment.status != Equipment.STATUS_MAINTENANCE:
        return
    still_running = (
        MaintenanceOrder.objects.filter(equipment=equipment, status=MaintenanceOrder.STATUS_IN_PROGRESS)
        .exclude(id=except_order_id)
        .exists()
    )
    if not still_running:
        equipment.status = Equipment.STATUS_ACTIVE
        equipment.save(update_fields=["status", "updated_at"])


@transaction.atomic
def create_maintenance_order(
    *,
    equipment_id,
    title: str,
    maintenance_type: str,
    description: str = "",
    priority: str = MaintenanceOrder.Priority.MEDIUM,
    scheduled_date=None,
    assigned_to=None,
    user=None,
) -> MaintenanceOrder:
    equipment = Equipment.objects.filter(id=equipment_id).first()
    if equipment is None:
        raise ValidationFailed("Equipment not found", errors={"equipment_id": ["not found"]})
    if equipment.status == Equipment.STATUS_RETIRED:
        raise InvalidStateError("Cannot schedule maintenance for retired equipment")

    technician = _technician(assigned_to)

    order = MaintenanceOrder(
        order_number=next_document_number(MAINTENANCE_ORDER_PREFIX),
        equipment=equipment,
        title=title,
        description=description or "",
        maintenance_type=maintenance_type,
        priority=priority,
        scheduled_date=scheduled_date,
        assigned_to=technician,
        status=MaintenanceOrder.STATUS_ASSIGNED if technician else MaintenanceOrder.STATUS_PENDING,
        created_by=user if getattr(user, "is_authenticated", False) else None,
    )
    order.full_clean()
    order.save()

    logger.info(
        "Maintenance order created",
        extra={"order_number": order.order_number, "equipment_code": equipment.code, "status": order.status},
    )
    return order


@transaction.atomic
def update_maintenance_order(*, order_id, changes: dict, user=None) -> MaintenanceOrder:
    order = lock_maintenance_order(order_id)

    if MaintenanceOrderLifecycle.is_terminal(order.status):
        raise InvalidStateError(f"Cannot update {order.status} maintenance order")

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationFailed(
            "Fields cannot be updated",
            errors={field: ["read-only"] for field in sorted(unknown)},
        )

    for field, value in changes.items():
        setattr(order, field, value)

    order.full_clean()
    order.save()
    return order


@transaction.atomic
def assign_maintenance_order(*, order_id, assigned_to, user=None) -> MaintenanceOrder:
    order = lock_maintenance_order(order_id)
    technician = _technician(assigned_to)
    if technician is None:
        raise ValidationFailed("Technician is required", errors={"assigned_to": ["required"]})

    if order.status != MaintenanceOrder.STATUS_ASSIGNED:
        MaintenanceOrderLifecycle.validate_transition(instance=order, target_status=MaintenanceOrder.STATUS_ASSIGNED)
        order.status = MaintenanceOrder.STATUS_ASSIGNED

    order.assigned_to = technician
    order.save(update_fields=["status", "assigned_to", "updated_at"])

    logger.info(
        "Maintenance order assigned",
        extra={"order_number": order.order_number, "assigned_to": str(technician.id)},
    )
    return order


@transaction.atomic
def start_maintenance_order(*, order_id, user=None) -> MaintenanceOrder:
    order = lock_maintenance_order(order_id)
    MaintenanceOrderLifecycle.validate_transition(instance=order, target_status=MaintenanceOrder.STATUS_IN_PROGRESS)

    equipment = lock_equipment(order.equipment_id)
    if equipment.status == Equipment.STATUS_RETIRED:
        raise InvalidStateError("Cannot start maintenance on retired equipment")

    order.status = MaintenanceOrder.STATUS_IN_PROGRESS
    order.started_at = timezone.now()
    if order.assigned_to_id is None and getattr(user, "is_authenticated", False):
        order.assigned_to = user
    order.save(update_fields=["status", "started_at", "assigned_to", "updated_at"])

    equipment.status = Equipment.STATUS_MAINTENANCE
    equipment.save(update_fields=["status", "updated_at"])

    logger.info(
        "Maintenance started",
        extra={"order_number": order.order_number, "equipment_code": equipment.code},
    )
    return order


@transaction.atomic
def complete_maintenance_order(
    *,
    order_id,
    completion_notes: str = "",
    parts_used: str = "",
    labor_hours=None,
    cost=None,
    result: str = MaintenanceHistory.Result.SUCCESSFUL,
    next_maintenance_date=None,
    user=None,
) -> MaintenanceOrder:
    order = lock_maintenance_order(order_id)
    MaintenanceOrderLifecycle.validate_transition(instance=order, target_status=MaintenanceOrder.STATUS_COMPLETED)

    labor_hours = money(labor_hours)
    cost = money(cost)
    if labor_hours < 0 or cost < 0:
        raise ValidationFailed(
            "Labor hours and cost cannot be negative",
            errors={"labor_hours": ["must be >= 0"], "cost": ["must be >= 0"]},
        )

    now = timezone.now()
    order.status = MaintenanceOrder.STATUS_COMPLETED
    order.completed_at = now
    order.completion_notes = completion_notes or ""
    order.labor_hours = labor_hours
    order.cost = cost
    order.save(update_fields=["status", "completed_at", "completion_notes", "labor_hours", "cost", "updated_at"])

    MaintenanceHistory.objects.create(
        maintenance_order=order,
        equipment_id=order.equipment_id,
        maintenance_type=order.maintenance_type,
        performed_at=now,
        performed_by=order.assigned_to or (user if getattr(user, "is_authenticated", False) else None),
        work_performed=completion_notes or order.title,
        parts_used=parts_used or "",
        labor_hours=labor_hours,
        cost=cost,
        result=result,
        next_maintenance_date=next_maintenance_date,
    )

    _release_equipment(lock_equipment(order.equipment_id), except_order_id=order.id)

    logger.info(
        "Maintenance completed",
        extra={"order_number": order.order_number, "labor_hours": str(labor_hours), "cost": str(cost)},
    )
    return order


@transaction.atomic
def cancel_maintenance_order(*, order_id, user=None) -> MaintenanceOrder:
    order = lock_maintenance_order(order_id)
    was_running = order.status == MaintenanceOrder.STATUS_IN_PROGRESS

    MaintenanceOrderLifecycle.validate_transition(instance=order, target_status=MaintenanceOrder.STATUS_CANCELLED)

    order.status = MaintenanceOrder.STATUS_CANCELLED
    touched = stamp_transition(order, action="cancelled", user=user)
    order.save(update_fields=["status", *touched, "updated_at"])

    if was_running:
        _release_equipment(lock_equipment(order.equipment_id), except_order_id=order.id)

    logger.info("Maintenance order cancelled", extra={"order_number": order.order_number})
    return order
