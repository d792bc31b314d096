from venues.domain.errors import (
    CashierNotFoundError,
    DuplicateCashierError,
    InvalidPermissionsError,
    InvalidStatusTransitionError,
    RentalAlreadyPaidError,
    RentalNotFoundError,
    RentalOverlapError,
    VenueInUseError,
    VenueNotFoundError,
    VenueNotOwnedError,
)
from venues.domain.models import Cashier, Rental, Venue
from venues.domain.reports import PeriodBreakdown, SalesReport, VenueBreakdown
from venues.domain.value_objects import CashierId, CashierPermissions, RentalId, VenueId

__all__ = [
    "Cashier",
    "CashierId",
    "CashierNotFoundError",
    "CashierPermissions",
    "DuplicateCashierError",
    "InvalidPermissionsError",
    "InvalidStatusTransitionError",
    "PeriodBreakdown",
    "Rental",
    "RentalAlreadyPaidError",
    "RentalId",
    "RentalNotFoundError",
    "RentalOverlapError",
    "SalesReport",
    "Venue",
    "VenueBreakdown",
    "VenueId",
    "VenueInUseError",
    "VenueNotFoundError",
    "VenueNotOwnedError",
]
