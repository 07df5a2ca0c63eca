# core/exceptions.py

"""
ERP DOMAIN ERRORS

Centralized domain errors raised by services across every module.
The API exception handler maps them onto the response envelope:

- ValidationFailed     -> 400 (field-level details in `errors`)
- NotFoundError        -> 404
- InvalidStateError    -> 400 (locked / terminal / duplicate business key)
"""

from __future__ import annotations


class ERPError(Exception):
    """Base exception for all ERP service failures."""

    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: str | None = None, *, errors: dict | None = None):
        self.message = message or self.default_message
        self.errors = errors or {}
        super().__init__(self.message)


class ValidationFailed(ERPError):
    """Raised when service input is malformed or references foreign rows."""

    default_message = "Validation failed"


class NotFoundError(ERPError):
    """Raised when a referenced record does not exist."""

    status_code = 404
    default_message = "Not found"


class InvalidStateError(ERPError):
    """Raised when the current state of a record forbids the operation."""

    default_message = "Operation not allowed in the current state"


class InvalidTransitionError(InvalidStateError):
    """Raised when a status change is not in the entity's transition table."""
