# core/api/responses.py

from __future__ import annotations

from rest_framework import status as http_status
from rest_framework.response import Response


def envelope(data=None, *, status: int = http_status.HTTP_200_OK, message: str | None = None) -> Response:
    """Successful response in the shared {success, data, message?} shape."""
    body = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return Response(body, status=status)


def is_enveloped(data) -> bool:
    return isinstance(data, dict) and "success" in data
