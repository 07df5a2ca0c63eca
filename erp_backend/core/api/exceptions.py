# core/api/exceptions.py

"""
API EXCEPTION HANDLER

Maps every failure onto the shared envelope:

    {"success": false, "error": "<message>", "errors": {...}?}

Taxonomy:
- DRF / Django validation errors     -> 400, field-level `errors`
- ERPError subclasses                -> their status_code (400 / 404)
- authentication / permission errors -> 401 / 403
- anything else                      -> 500, generic message; traceback logged server-side only
"""

from __future__ import annotations

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from core.exceptions import ERPError

logger = logging.getLogger("erp.api")

SERVER_ERROR_MESSAGE = "Server error"


def _error(message: str, *, code: int, errors=None) -> Response:
    body = {"success": False, "error": message}
    if errors:
        body["errors"] = errors
    return Response(body, status=code)


def _django_validation_errors(exc: DjangoValidationError):
    if hasattr(exc, "error_dict"):
        return exc.message_dict
    return {"non_field_errors": exc.messages}


def _first_message(detail) -> str:
    if isinstance(detail, dict):
        detail = detail.get("detail", detail)
    if isinstance(detail, (list, tuple)) and detail:
        return str(detail[0])
    return str(detail)


def envelope_exception_handler(exc, context):
    view = context.get("view")
    view_name = view.__class__.__name__ if view is not None else ""

    if isinstance(exc, ERPError):
        logger.warning(
            "Business rule rejected request",
            extra={"view": view_name, "error": exc.message, "status": exc.status_code},
        )
        return _error(exc.message, code=exc.status_code, errors=exc.errors)

    if isinstance(exc, DjangoValidationError):
        return _error(
            "Validation failed",
            code=status.HTTP_400_BAD_REQUEST,
            errors=_django_validation_errors(exc),
        )

    if isinstance(exc, IntegrityError):
        # Unique/check constraints that slipped past service pre-checks.
        logger.warning("Integrity error", extra={"view": view_name, "error": str(exc)})
        return _error(
            "Request conflicts with existing data",
            code=status.HTTP_400_BAD_REQUEST,
        )

    response = drf_exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled API error", extra={"view": view_name})
        return _error(SERVER_ERROR_MESSAGE, code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        response.data = {
            "success": False,
            "error": "Validation failed",
            "errors": response.data,
        }
        return response

    response.data = {"success": False, "error": _first_message(response.data)}
    return response
