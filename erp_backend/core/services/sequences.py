# core/services/sequences.py

"""
DOCUMENT NUMBER SEQUENCES

Human-readable document numbers:
    PO-2024-0007, INV-2024-0003, ...
and master-data codes:
    CUST-0001, SUP-0012, EMP-0104

Rules:
- One DocumentSequence row per (prefix, year), locked with select_for_update.
- The increment is an F() update, so two writers can never read the same value.
- Must run inside the caller's transaction: if the document insert rolls back,
  the counter increment rolls back with it.
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from core.models import DocumentSequence

logger = logging.getLogger("erp.sequences")

CODE_YEAR = 0
NUMBER_WIDTH = 4


def _normalize_prefix(prefix: str) -> str:
    value = (prefix or "").strip().upper()
    if not value:
        raise ValueError("Sequence prefix is required")
    return value


def format_document_number(prefix: str, year: int, value: int) -> str:
    return f"{prefix}-{year}-{value:0{NUMBER_WIDTH}d}"


def format_code(prefix: str, value: int) -> str:
    return f"{prefix}-{value:0{NUMBER_WIDTH}d}"


@transaction.atomic
def _increment(*, prefix: str, year: int) -> int:
    sequence, _ = DocumentSequence.objects.select_for_update().get_or_create(
        prefix=prefix,
        year=year,
    )

    DocumentSequence.objects.filter(pk=sequence.pk).update(
        last_value=F("last_value") + 1
    )
    sequence.refresh_from_db(fields=["last_value"])
    return sequence.last_value


def next_document_number(prefix: str, *, year: int | None = None) -> str:
    """
    Issue the next year-scoped document number: <PREFIX>-<YEAR>-<NNNN>.

    Numbering restarts at 0001 every year.
    """
    prefix = _normalize_prefix(prefix)
    year = int(year or timezone.localdate().year)

    value = _increment(prefix=prefix, year=year)
    number = format_document_number(prefix, year, value)

    logger.debug("Issued document number", extra={"prefix": prefix, "number": number})
    return number


def next_code(prefix: str) -> str:
    """Issue the next non-year-scoped code: <PREFIX>-<NNNN>."""
    prefix = _normalize_prefix(prefix)
    value = _increment(prefix=prefix, year=CODE_YEAR)
    return format_code(prefix, value)
