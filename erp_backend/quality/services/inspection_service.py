# quality/services/inspection_service.py

"""
======================================================
PATH: quality/services/inspection_service.py
======================================================
QUALITY INSPECTION SERVICE

- create_inspection: QC-YYYY-NNNN number + pending row
- record_inspection_result: move along the lifecycle; a final result
  carries passed / failed counts and stamps inspector + inspected_at
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from core.exceptions import NotFoundError, ValidationFailed
from core.services.sequences import next_document_number
from inventory.models import Product
from production.models import ProductionOrder
from quality.models import QualityControl
from quality.services.lifecycle import RESULT_STATUSES, InspectionLifecycle

logger = logging.getLogger("erp.quality")

INSPECTION_PREFIX = "QC"


def lock_inspection(inspection_id) -> QualityControl:
    try:
        return QualityControl.objects.select_for_update().get(id=inspection_id)
    except QualityControl.DoesNotExist as exc:
        raise NotFoundError("Quality inspection not found") from exc


@transaction.atomic
def create_inspection(
    *,
    product_id,
    inspection_type: str,
    quantity_inspected: int,
    production_order_id=None,
    batch_number: str = "",
    notes: str = "",
    user=None,
) -> QualityControl:
    product = Product.objects.filter(id=product_id).first()
    if product is None:
        raise ValidationFailed("Product not found", errors={"product_id": ["not found"]})

    production_order = None
    if production_order_id:
        production_order = ProductionOrder.objects.filter(id=production_order_id).first()
        if production_order is None:
            raise ValidationFailed("Production order not found", errors={"production_order_id": ["not found"]})
        if production_order.product_id != product.id:
            raise ValidationFailed(
                "Production order is for a different product",
                errors={"production_order_id": ["product mismatch"]},
            )

    if int(quantity_inspected) <= 0:
        raise ValidationFailed(
            "quantity_inspected must be greater than zero",
            errors={"quantity_inspected": ["must be > 0"]},
        )

    inspection = QualityControl(
        inspection_number=next_document_number(INSPECTION_PREFIX),
        product=product,
        production_order=production_order,
        batch_number=batch_number or "",
        inspection_type=inspection_type,
        quantity_inspected=int(quantity_inspected),
        notes=notes or "",
        inspector=user if getattr(user, "is_authenticated", False) else None,
    )
    inspection.full_clean()
    inspection.save()

    logger.info(
        "Quality inspection created",
        extra={"inspection_number": inspection.inspection_number, "inspection_type": inspection_type},
    )
    return inspection


@transaction.atomic
def record_inspection_result(
    *,
    inspection_id,
    status: str,
    quantity_passed=None,
    quantity_failed=None,
    defects_found=None,
    corrective_actions=None,
    notes=None,
    user=None,
) -> QualityControl:
    inspection = lock_inspection(inspection_id)
    previous = inspection.status

    InspectionLifecycle.validate_transition(instance=inspection, target_status=status)

    if quantity_passed is not None:
        inspection.quantity_passed = int(quantity_passed)
    if quantity_failed is not None:
        inspection.quantity_failed = int(quantity_failed)

    if inspection.quantity_passed + inspection.quantity_failed > inspection.quantity_inspected:
        raise ValidationFailed(
            "Passed and failed quantities exceed the inspected quantity",
            errors={"quantity_passed": [f"passed + failed must be <= {inspection.quantity_inspected}"]},
        )

    for field, value in (
        ("defects_found", defects_found),
        ("corrective_actions", corrective_actions),
        ("notes", notes),
    ):
        if value is not None:
            setattr(inspection, field, value)

    inspection.status = status
    if status in RESULT_STATUSES:
        inspection.inspected_at = timezone.now()
        if getattr(user, "is_authenticated", False):
            inspection.inspector = user

    inspection.full_clean()
    inspection.save()

    logger.info(
        "Quality inspection updated",
        extra={
            "inspection_number": inspection.inspection_number,
            "from_status": previous,
            "to_status": status,
            "quantity_passed": inspection.quantity_passed,
            "quantity_failed": inspection.quantity_failed,
        },
    )
    return inspection
