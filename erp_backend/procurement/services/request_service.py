# procurement/services/request_service.py

"""
======================================================
PATH: procurement/services/request_service.py
======================================================
PURCHASE REQUEST SERVICE

Internal purchase requests: create, edit while pending, approve / reject / cancel.
Conversion to an order lives in order_service.create_purchase_order.
"""

from __future__ import annotations

import logging

from django.db import transaction

from core.exceptions import InvalidStateError, NotFoundError, ValidationFailed
from core.services.lifecycle import stamp_transition
from core.services.money import money
from core.services.sequences import next_document_number
from procurement.models import PurchaseRequest
from procurement.services.lifecycle import PurchaseRequestLifecycle

logger = logging.getLogger("erp.procurement")

PURCHASE_REQUEST_PREFIX = "PR"

EDITABLE_FIELDS = {
    "title",
    "description",
    "justification",
    "product",
    "quantity",
    "department",
    "priority",
    "estimated_cost",
    "required_date",
}


def lock_purchase_request(request_id) -> PurchaseRequest:
    try:
        return PurchaseRequest.objects.select_for_update().get(id=request_id)
    except PurchaseRequest.DoesNotExist as exc:
        raise NotFoundError("Purchase request not found") from exc


def _actor(user):
    return user if getattr(user, "is_authenticated", False) else None


@transaction.atomic
def create_purchase_request(*, data: dict, user=None) -> PurchaseRequest:
    unknown = set(data) - EDITABLE_FIELDS
    if unknown:
        raise ValidationFailed(
            "Unknown purchase request fields",
            errors={field: ["not allowed"] for field in sorted(unknown)},
        )

    values = dict(data)
    if "estimated_cost" in values and values["estimated_cost"] is not None:
        values["estimated_cost"] = money(values["estimated_cost"])

    purchase_request = PurchaseRequest.objects.create(
        request_number=next_document_number(PURCHASE_REQUEST_PREFIX),
        requested_by=_actor(user),
        **values,
    )

    logger.info(
        "Purchase request created",
        extra={
            "request_number": purchase_request.request_number,
            "priority": purchase_request.priority,
            "user_id": str(getattr(user, "id", "") or ""),
        },
    )
    return purchase_request


@transaction.atomic
def update_purchase_request(*, request_id, changes: dict, user=None) -> PurchaseRequest:
    purchase_request = lock_purchase_request(request_id)

    if purchase_request.status != PurchaseRequest.STATUS_PENDING:
        raise InvalidStateError(f"Cannot update {purchase_request.status} purchase request")

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise ValidationFailed(
            "Fields cannot be updated",
            errors={field: ["read-only"] for field in sorted(unknown)},
        )

    for field, value in changes.items():
        if field == "estimated_cost" and value is not None:
            value = money(value)
        setattr(purchase_request, field, value)
    purchase_request.save(update_fields=[*changes.keys(), "updated_at"])

    return purchase_request


@transaction.atomic
def approve_purchase_request(*, request_id, user=None, notes: str = "") -> PurchaseRequest:
    purchase_request = lock_purchase_request(request_id)

    if purchase_request.status != PurchaseRequest.STATUS_PENDING:
        raise InvalidStateError("Only pending purchase requests can be approved")

    purchase_request.status = PurchaseRequest.STATUS_APPROVED
    purchase_request.approval_notes = notes or ""
    touched = stamp_transition(purchase_request, action="approved", user=user)
    purchase_request.save(update_fields=["status", "approval_notes", "updated_at", *touched])

    logger.info("Purchase request approved", extra={"request_number": purchase_request.request_number})
    return purchase_request


@transaction.atomic
def reject_purchase_request(*, request_id, user=None, reason: str = "") -> PurchaseRequest:
    purchase_request = lock_purchase_request(request_id)

    if purchase_request.status != PurchaseRequest.STATUS_PENDING:
        raise InvalidStateError("Only pending purchase requests can be rejected")

    purchase_request.status = PurchaseRequest.STATUS_REJECTED
    purchase_request.rejection_reason = reason or ""
    touched = stamp_transition(purchase_request, action="rejected", user=user)
    purchase_request.save(update_fields=["status", "rejection_reason", "updated_at", *touched])

    logger.info(
        "Purchase request rejected",
        extra={"request_number": purchase_request.request_number, "reason": purchase_request.rejection_reason},
    )
    return purchase_request


@transaction.atomic
def cancel_purchase_request(*, request_id, user=None) -> PurchaseRequest:
    purchase_request = lock_purchase_request(request_id)

    PurchaseRequestLifecycle.validate_transition(
        instance=purchase_request, target_status=PurchaseRequest.STATUS_CANCELLED
    )
    purchase_request.status = PurchaseRequest.STATUS_CANCELLED
    touched = stamp_transition(purchase_request, action="cancelled", user=user)
    purchase_request.save(update_fields=["status", "updated_at", *touched])

    logger.info("Purchase request cancelled", extra={"request_number": purchase_request.request_number})
    return purchase_request
