"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in events/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from events.domain.value_objects import Capacity, EventId, Money, TicketId, TicketTypeId


@dataclass(frozen=True)
class TicketType:
    """Domain representation of a TicketType."""

    id: TicketTypeId
    event_id: EventId
    name: str
    description: str
    price: Money
    quantity: Capacity
    available_quantity: Capacity
    features: dict | None = None

    def __post_init__(self) -> None:
        if self.available_quantity.value > self.quantity.value:
            raise ValueError("Available quantity cannot exceed total quantity")

    @property
    def sold(self) -> int:
        return self.quantity.value - self.available_quantity.value


@dataclass(frozen=True)
class Speaker:
    name: str
    bio: str
    profile_image: str | None = None


@dataclass(frozen=True)
class Workshop:
    title: str
    description: str
    start_time: datetime
    end_time: datetime
    capacity: Capacity
    presenter: str = ""


@dataclass(frozen=True)
class AddOn:
    name: str
    description: str
    price: Money
    is_required: bool = False
    maximum_quantity: int = 1


@dataclass(frozen=True)
class Event:
    """Domain representation of an Event.

    Catalog listings carry no associations; detail reads fill ``ticket_types``,
    ``speakers``, ``workshops`` and ``add_ons``.
    """

    id: EventId
    title: str
    description: str
    location: str
    category: str
    event_type: str
    organizer_id: int
    start_date: datetime
    end_date: datetime | None
    image_url: str | None
    featured: bool
    tags: tuple[str, ...]
    tickets_sold: int
    created_at: datetime
    updated_at: datetime
    seating_map: dict | None = None
    ticket_types: tuple[TicketType, ...] = ()
    speakers: tuple[Speaker, ...] = ()
    workshops: tuple[Workshop, ...] = ()
    add_ons: tuple[AddOn, ...] = ()


@dataclass(frozen=True)
class Attendee:
    """Person a ticket unit is issued for."""

    name: str
    email: str
    phone: str = ""

    def as_dict(self) -> dict:
        return {"name": self.name, "email": self.email, "phone": self.phone}


@dataclass(frozen=True)
class Ticket:
    """Domain representation of an issued Ticket."""

    id: TicketId
    event_id: EventId
    ticket_type_id: TicketTypeId
    user_id: int
    order_id: str
    quantity: int
    total_price: Money
    qr_code: str
    purchase_date: datetime
    attendees: tuple[Attendee, ...] = ()
    seat_assignment: dict | None = None
    is_used: bool = False
    checked_in_at: datetime | None = None
    email_sent: bool = False
    payment_session_id: str | None = None


@dataclass(frozen=True)
class TicketTypeSales:
    ticket_type: TicketType
    revenue: Money

    @property
    def sold(self) -> int:
        return self.ticket_type.sold


@dataclass(frozen=True)
class EventSales:
    """Sales summary of one event, per ticket type."""

    event: Event
    lines: tuple[TicketTypeSales, ...]

    @property
    def total_sold(self) -> int:
        return sum(line.sold for line in self.lines)

    @property
    def total_capacity(self) -> int:
        return sum(line.ticket_type.quantity.value for line in self.lines)

    @property
    def total_revenue(self) -> Money:
        total = Money.zero()
        for line in self.lines:
            total = total + line.revenue
        return total
