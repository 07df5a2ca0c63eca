"""
QUALITY LIFECYCLE RULES

Inspections:
    pending -> in_progress -> {passed, failed, conditional}
    A pending inspection may record its result directly.

Reports:
    draft -> completed -> approved
"""

from core.services.lifecycle import machine
from quality.models import QualityControl, QualityReport

RESULT_STATUSES = {
    QualityControl.STATUS_PASSED,
    QualityControl.STATUS_FAILED,
    QualityControl.STATUS_CONDITIONAL,
}

OPEN_INSPECTION_STATUSES = {
    QualityControl.STATUS_PENDING,
    QualityControl.STATUS_IN_PROGRESS,
}

InspectionLifecycle = machine(
    "Inspection",
    transitions={
        QualityControl.STATUS_PENDING: {QualityControl.STATUS_IN_PROGRESS, *RESULT_STATUSES},
        QualityControl.STATUS_IN_PROGRESS: set(RESULT_STATUSES),
    },
    terminal=set(RESULT_STATUSES),
)

QualityReportLifecycle = machine(
    "Quality report",
    transitions={
        QualityReport.STATUS_DRAFT: {QualityReport.STATUS_COMPLETED},
        QualityReport.STATUS_COMPLETED: {QualityReport.STATUS_APPROVED},
    },
    terminal={QualityReport.STATUS_APPROVED},
)
