"""Domain error taxonomy shared by every app.

Each app defines its concrete errors in ``<app>/domain/errors.py`` by
subclassing one of the category bases below. Handlers never build error
responses themselves; the DRF exception handler maps these to the envelope.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar


class ErrorCategory(Enum):
    """Broad classes of failure, each mapped to one HTTP status."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    CONFLICT = "conflict"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


HTTP_STATUS = {
    ErrorCategory.VALIDATION: 400,
    ErrorCategory.NOT_FOUND: 404,
    ErrorCategory.FORBIDDEN: 403,
    ErrorCategory.CONFLICT: 409,
    ErrorCategory.UPSTREAM: 500,
    ErrorCategory.INTERNAL: 500,
}


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ID = "INVALID_ID"
    INVALID_INPUT = "INVALID_INPUT"
    ACCESS_DENIED = "ACCESS_DENIED"
    PAYMENT_PROVIDER_ERROR = "PAYMENT_PROVIDER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    # events
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    TICKET_TYPE_NOT_FOUND = "TICKET_TYPE_NOT_FOUND"
    TICKET_NOT_FOUND = "TICKET_NOT_FOUND"
    INVALID_PURCHASE = "INVALID_PURCHASE"
    SOLD_OUT = "SOLD_OUT"
    PAYMENT_NOT_CONFIRMED = "PAYMENT_NOT_CONFIRMED"
    PAYMENT_SESSION_USED = "PAYMENT_SESSION_USED"
    TICKET_ALREADY_USED = "TICKET_ALREADY_USED"
    # venues
    VENUE_NOT_FOUND = "VENUE_NOT_FOUND"
    VENUE_IN_USE = "VENUE_IN_USE"
    VENUE_NOT_OWNED = "VENUE_NOT_OWNED"
    RENTAL_NOT_FOUND = "RENTAL_NOT_FOUND"
    RENTAL_OVERLAP = "RENTAL_OVERLAP"
    RENTAL_ALREADY_PAID = "RENTAL_ALREADY_PAID"
    INVALID_STATUS_TRANSITION = "INVALID_STATUS_TRANSITION"
    CASHIER_NOT_FOUND = "CASHIER_NOT_FOUND"
    DUPLICATE_CASHIER = "DUPLICATE_CASHIER"
    INVALID_PERMISSIONS = "INVALID_PERMISSIONS"
    # subscriptions
    PLAN_NOT_FOUND = "PLAN_NOT_FOUND"
    EVENT_LIMIT_REACHED = "EVENT_LIMIT_REACHED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    category: ClassVar[ErrorCategory] = ErrorCategory.INTERNAL

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    @property
    def status_code(self) -> int:
        return HTTP_STATUS[self.category]


class ValidationError(DomainError):
    """Malformed or missing input."""

    category = ErrorCategory.VALIDATION


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    category = ErrorCategory.NOT_FOUND


class ForbiddenError(DomainError):
    """Role or ownership mismatch."""

    category = ErrorCategory.FORBIDDEN


class ConflictError(DomainError):
    """The request collides with current state (inventory, duplicates, transitions)."""

    category = ErrorCategory.CONFLICT


class UpstreamFailureError(DomainError):
    """An external provider failed. Logged, never retried automatically."""

    category = ErrorCategory.UPSTREAM

    def __init__(self, message: str, code: ErrorCode = ErrorCode.PAYMENT_PROVIDER_ERROR) -> None:
        super().__init__(code=code, message=message)


class InternalError(DomainError):
    """Unexpected failure."""

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(code=ErrorCode.INTERNAL_ERROR, message=message)


class InvalidIdError(ValidationError):
    """Raised when an identifier is not a valid UUID."""

    def __init__(self, entity: str) -> None:
        super().__init__(code=ErrorCode.INVALID_ID, message=f"Invalid {entity} ID format")


class AccessDeniedError(ForbiddenError):
    """Raised when the caller does not own the resource it is acting on."""

    def __init__(self, message: str = "You do not have permission to perform this action") -> None:
        super().__init__(code=ErrorCode.ACCESS_DENIED, message=message)
