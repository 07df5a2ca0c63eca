# quality/services/test_service.py

"""
======================================================
PATH: quality/services/test_service.py
======================================================
QUALITY TEST SERVICE

record_quality_test():
- only while the inspection is open (pending / in_progress)
- expected_value, tolerance and unit are copied from the standard
- a measured value decides passed / failed against the standard;
  an explicit status that contradicts the measurement is rejected
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from core.exceptions import InvalidStateError, ValidationFailed
from quality.models import QualityStandard, QualityTest
from quality.services.inspection_service import lock_inspection
from quality.services.lifecycle import OPEN_INSPECTION_STATUSES

logger = logging.getLogger("erp.quality")

TEST_STATUSES = {value for value, _ in QualityTest.STATUSES}


def _measurement(value) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationFailed(
            "measured_value must be a number",
            errors={"measured_value": ["must be a number"]},
        ) from exc


@transaction.atomic
def record_quality_test(
    *,
    inspection_id,
    standard_id,
    test_name: str,
    test_type: str,
    measured_value=None,
    status: str | None = None,
    test_method: str = "",
    result_text: str = "",
    equipment_used: str = "",
    notes: str = "",
    user=None,
) -> QualityTest:
    inspection = lock_inspection(inspection_id)
    if inspection.status not in OPEN_INSPECTION_STATUSES:
        raise InvalidStateError("Tests can only be recorded on open inspections")

    standard = QualityStandard.objects.filter(id=standard_id, is_active=True).first()
    if standard is None:
        raise ValidationFailed("Quality standard not found", errors={"standard_id": ["not found or inactive"]})
    if standard.product_id and standard.product_id != inspection.product_id:
        raise ValidationFailed(
            "Quality standard is for a different product",
            errors={"standard_id": ["product mismatch"]},
        )

    if status is not None and status not in TEST_STATUSES:
        raise ValidationFailed("Invalid test status", errors={"status": [f"must be one of {sorted(TEST_STATUSES)}"]})

    measured = _measurement(measured_value)
    if measured is not None:
        derived = QualityTest.STATUS_PASSED if standard.accepts(measured) else QualityTest.STATUS_FAILED
        if status is not None and status != derived:
            raise ValidationFailed(
                "Status contradicts the measured value",
                errors={"status": [f"measurement {measured} is {derived} against {standard.parameter_name}"]},
            )
        status = derived

    test = QualityTest(
        quality_control=inspection,
        standard=standard,
        test_name=test_name,
        test_type=test_type,
        test_method=test_method or standard.test_method,
        measured_value=measured,
        expected_value=standard.target_value,
        tolerance=standard.tolerance,
        unit_of_measure=standard.unit_of_measure,
        result_text=result_text or "",
        status=status or QualityTest.STATUS_PENDING,
        tested_by=user if getattr(user, "is_authenticated", False) else None,
        equipment_used=equipment_used or "",
        notes=notes or "",
    )
    test.full_clean()
    test.save()

    logger.info(
        "Quality test recorded",
        extra={
            "inspection_number": inspection.inspection_number,
            "parameter": standard.parameter_name,
            "status": test.status,
            "critical": standard.is_critical,
        },
    )
    return test
