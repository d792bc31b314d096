"""Standardized API envelope: ``{success, code, data, description}``.

The HTTP status always equals ``code`` and ``success`` is true exactly when the
status is 2xx, so clients may branch on either.
"""

from typing import Any

from rest_framework import status
from rest_framework.response import Response


def envelope(data: Any, code: int, description: str) -> dict[str, Any]:
    return {
        "success": status.is_success(code),
        "code": code,
        "data": data,
        "description": description,
    }


def success_response(
    data: Any = None,
    code: int = status.HTTP_200_OK,
    description: str = "Operation successful",
) -> Response:
    return Response(envelope(data, code, description), status=code)


def error_response(
    description: str = "An error occurred",
    code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    headers: dict[str, str] | None = None,
) -> Response:
    return Response(envelope(None, code, description), status=code, headers=headers)
