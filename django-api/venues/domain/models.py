"""Domain models for venues, rentals and cashiers."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from venues.domain.value_objects import CashierId, CashierPermissions, RentalId, VenueId


@dataclass(frozen=True)
class Venue:
    id: VenueId
    owner_id: int
    name: str
    description: str
    location: str
    capacity: int | None
    hourly_rate: Decimal
    daily_rate: Decimal | None
    facilities: tuple[str, ...]
    availability_hours: dict | None
    images: tuple[str, ...]
    is_active: bool
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class Rental:
    id: RentalId
    venue_id: VenueId
    venue_name: str
    venue_owner_id: int
    customer_id: int
    customer_name: str
    start_time: datetime
    end_time: datetime
    total_price: Decimal
    status: str
    payment_status: str
    notes: str
    created_at: datetime
    payment_session_id: str | None = None


@dataclass(frozen=True)
class Cashier:
    id: CashierId
    user_id: int
    owner_id: int
    email: str
    name: str
    permissions: CashierPermissions
    venue_ids: tuple[VenueId, ...]
    created_at: datetime
