"""Domain errors for the events module."""

from common.errors import ConflictError, ErrorCode, NotFoundError, ValidationError


class EventNotFoundError(NotFoundError):
    """Raised when an event is not found."""

    def __init__(self, event_id: str) -> None:
        super().__init__(code=ErrorCode.EVENT_NOT_FOUND, message=f"Event {event_id} not found")


class TicketTypeNotFoundError(NotFoundError):
    """Raised when a ticket type is missing or belongs to another event."""

    def __init__(self, ticket_type_id: str) -> None:
        super().__init__(
            code=ErrorCode.TICKET_TYPE_NOT_FOUND,
            message=f"Ticket type {ticket_type_id} not found for this event",
        )


class TicketNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.TICKET_NOT_FOUND, message="Ticket not found")


class InvalidPurchaseError(ValidationError):
    """Raised when a purchase request is structurally invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PURCHASE, message=message)


class SoldOutError(ConflictError):
    """Raised when a ticket type cannot cover the requested quantity."""

    def __init__(self, ticket_type_name: str, available: int | None = None) -> None:
        message = f"Not enough tickets available for {ticket_type_name}"
        if available is not None:
            message += f" ({available} left)"
        super().__init__(code=ErrorCode.SOLD_OUT, message=message)


class PaymentNotConfirmedError(ValidationError):
    def __init__(self, message: str = "Payment has not been completed for this session") -> None:
        super().__init__(code=ErrorCode.PAYMENT_NOT_CONFIRMED, message=message)


class TicketAlreadyUsedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.TICKET_ALREADY_USED, message="Ticket has already been checked in")


class PaymentSessionUsedError(ConflictError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.PAYMENT_SESSION_USED,
            message="Tickets have already been issued for this payment session",
        )
