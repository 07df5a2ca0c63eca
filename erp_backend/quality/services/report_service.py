# quality/services/report_service.py

"""
QUALITY REPORT SERVICE

- create_quality_report: QR-YYYY-NNNN number, draft status
- update_quality_report: text edits until approved
- complete / approve: draft -> completed -> approved (approval stamps approved_by / approved_at)
"""

from __future__ import annotations

import logging

from django.db import transaction

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.sequences import next_document_number
from quality.models import QualityControl, QualityReport
from quality.services.lifecycle import QualityReportLifecycle

logger = logging.getLogger("erp.quality")

REPORT_PREFIX = "QR"

UPDATABLE_FIELDS = {"report_date", "summary", "findings", "recommendations", "corrective_actions"}


def lock_quality_report(report_id) -> QualityReport:
    try:
        return QualityReport.objects.select_for_update().get(id=report_id)
    except QualityReport.DoesNotExist as exc:
        raise NotFoundError("Quality report not found") from exc


@transaction.atomic
def create_quality_report(
    *,
    inspection_id,
    report_date=None,
    summary: str = "",
    findings: str = "",
    recommendations: str = "",
    corrective_actions: str = "",
    user=None,
) -> QualityReport:
    inspection = QualityControl.objects.filter(id=inspection_id).first()
    if inspection is None:
        raise ValidationFailed("Quality inspection not found", errors={"inspection_id": ["not found"]})

    report = QualityReport(
        report_number=next_document_number(REPORT_PREFIX),
        quality_control=inspection,
        summary=summary or "",
        findings=findings or "",
        recommendations=recommendations or "",
        corrective_actions=corrective_actions or "",
        generated_by=user if getattr(user, "is_authenticated", False) else None,
    )
    if report_date is not None:
        report.report_date = report_date
    report.full_clean()
    report.save()

    logger.info(
        "Quality report created",
        extra={"report_number": report.report_number, "inspection_number": inspection.inspection_number},
    )
    return report


@transaction.atomic
def update_quality_report(*, report_id, changes: dict, user=None) -> QualityReport:
    report = lock_quality_report(report_id)
    if report.status == QualityReport.STATUS_APPROVED:
        raise InvalidStateError("Cannot update approved quality report")

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationFailed("Fields cannot be updated", errors={f: ["read-only"] for f in sorted(unknown)})

    for field, value in changes.items():
        setattr(report, field, value)
    report.full_clean()
    report.save()

    logger.info("Quality report updated", extra={"report_number": report.report_number, "fields": sorted(changes)})
    return report


@transaction.atomic
def complete_quality_report(*, report_id, user=None) -> QualityReport:
    report = lock_quality_report(report_id)

    QualityReportLifecycle.validate_transition(instance=report, target_status=QualityReport.STATUS_COMPLETED)

    report.status = QualityReport.STATUS_COMPLETED
    report.save(update_fields=["status", "updated_at"])

    logger.info("Quality report completed", extra={"report_number": report.report_number})
    return report


@transaction.atomic
def approve_quality_report(*, report_id, user=None) -> QualityReport:
    report = lock_quality_report(report_id)

    QualityReportLifecycle.validate_transition(instance=report, target_status=QualityReport.STATUS_APPROVED)

    report.status = QualityReport.STATUS_APPROVED
    touched = stamp_transition(report, action="approved", user=user)
    report.save(update_fields=["status", *touched, "updated_at"])

    logger.info("Quality report approved", extra={"report_number": report.report_number})
    return report
