"""Single route-level mapping from exceptions to the response envelope."""

import logging
from typing import Any

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from common.errors import DomainError, ErrorCategory
from common.responses import error_response

logger = logging.getLogger(__name__)


def envelope_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown view"

    if isinstance(exc, DomainError):
        if exc.category in (ErrorCategory.UPSTREAM, ErrorCategory.INTERNAL):
            logger.error("%s failed: %s", view_name, exc)
        else:
            logger.info("%s rejected request: %s", view_name, exc)
        return error_response(exc.message, exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception("Unhandled error in %s", view_name, exc_info=exc)
        return error_response("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR)

    headers = {
        name: value
        for name, value in response.items()
        if name in ("WWW-Authenticate", "Retry-After", "Allow")
    }
    description = _describe(response.data)
    if isinstance(response.data, dict) and "detail" not in response.data:
        description = f"Validation failed: {description}"
    return error_response(description, response.status_code, headers=headers)


def _describe(detail: Any) -> str:
    """Flatten DRF error details into one human-readable sentence."""
    if isinstance(detail, dict):
        if "detail" in detail:
            return _describe(detail["detail"])
        parts = []
        for field, value in detail.items():
            message = _describe(value)
            if message:
                parts.append(message if field == "non_field_errors" else f"{field}: {message}")
        return "; ".join(parts)
    if isinstance(detail, list):
        return " ".join(message for message in map(_describe, detail) if message)
    return str(detail)
