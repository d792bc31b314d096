"""Inputs and intermediate values of the ticket purchase workflow."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from events.domain.models import Attendee, Event, Ticket, TicketType
from events.domain.value_objects import EventId, Money, TicketId, TicketTypeId


@dataclass(frozen=True)
class Purchaser:
    """The buying user and the contact details entered at checkout."""

    user_id: int
    name: str
    email: str
    phone: str = ""

    def as_attendee(self) -> Attendee:
        return Attendee(name=self.name, email=self.email, phone=self.phone)


@dataclass(frozen=True)
class PurchaseLine:
    """One ticket-type selection in a checkout."""

    ticket_type_id: TicketTypeId
    quantity: int
    attendees: tuple[Attendee, ...] = ()
    seat_assignment: dict | None = None


@dataclass(frozen=True)
class TicketDraft:
    """A ticket row prepared before the inventory transaction."""

    id: TicketId
    ticket_type_id: TicketTypeId
    quantity: int
    total_price: Money
    qr_code: str
    attendees: tuple[Attendee, ...]
    seat_assignment: dict | None = None


@dataclass(frozen=True)
class Order:
    """Everything the store needs to issue the tickets of one checkout."""

    order_id: str
    event_id: EventId
    user_id: int
    drafts: tuple[TicketDraft, ...]
    payment_session_id: str | None = None

    @property
    def total_quantity(self) -> int:
        return sum(draft.quantity for draft in self.drafts)

    @property
    def total_price(self) -> Money:
        total = Money.zero()
        for draft in self.drafts:
            total = total + draft.total_price
        return total


@dataclass(frozen=True)
class EventQuery:
    """Catalog filters and ordering."""

    search: str | None = None
    category: str | None = None
    event_type: str | None = None
    min_date: datetime | None = None
    max_date: datetime | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    price_filter: str | None = None
    featured: bool | None = None
    organizer_id: int | None = None
    sort: str = "date-asc"
    include_past: bool = False


@dataclass(frozen=True)
class WalletPass:
    """A ticket opened through a signed Apple (``apple``) or Google (``google``) pass link."""

    kind: str
    ticket: Ticket
    event: Event
    ticket_type: TicketType
