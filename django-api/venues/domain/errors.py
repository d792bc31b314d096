"""Domain errors for venues, rentals and cashiers."""

from common.errors import ConflictError, ErrorCode, ForbiddenError, NotFoundError, ValidationError


class VenueNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.VENUE_NOT_FOUND, message="Venue not found")


class VenueNotOwnedError(ForbiddenError):
    """Raised when a venue id belongs to another center."""

    def __init__(self, venue_id: str | None = None) -> None:
        message = "You do not own this venue"
        if venue_id:
            message = f"Venue {venue_id} does not belong to you"
        super().__init__(code=ErrorCode.VENUE_NOT_OWNED, message=message)


class VenueInUseError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.VENUE_IN_USE, message="Venue has rentals and cannot be deleted")


class RentalNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.RENTAL_NOT_FOUND, message="Rental not found")


class RentalOverlapError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.RENTAL_OVERLAP, message="Venue is already booked for the requested time")


class RentalAlreadyPaidError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.RENTAL_ALREADY_PAID, message="Rental has already been paid")


class InvalidStatusTransitionError(ConflictError):
    """Raised when a rental status change is not allowed from its current state."""

    def __init__(self, field: str, current: str, target: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STATUS_TRANSITION,
            message=f"Cannot change {field} from {current} to {target}",
        )


class CashierNotFoundError(NotFoundError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.CASHIER_NOT_FOUND, message="Cashier not found")


class DuplicateCashierError(ConflictError):
    def __init__(self) -> None:
        super().__init__(code=ErrorCode.DUPLICATE_CASHIER, message="This user is already one of your cashiers")


class InvalidPermissionsError(ValidationError):
    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_PERMISSIONS, message=message)
