"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod

from events.domain import (
    Event,
    EventId,
    EventQuery,
    Money,
    NewEvent,
    Order,
    Ticket,
    TicketId,
    TicketType,
)


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    def list_events(self, query: EventQuery) -> list[Event]:
        """Return events matching ``query`` in the requested order, without associations."""
        ...

    @abstractmethod
    def get_event(self, event_id: EventId) -> Event | None:
        """Return an event with ticket types, speakers, workshops and add-ons, or None."""
        ...

    @abstractmethod
    def get_ticket_types(self, event_id: EventId) -> list[TicketType]:
        """Return the ticket types of an event."""
        ...

    @abstractmethod
    def create_event(self, organizer_id: int, new_event: NewEvent) -> Event:
        """Persist an event and its associations atomically."""
        ...

    @abstractmethod
    def update_event(self, event_id: EventId, changes: dict) -> Event | None:
        """Apply scalar field changes. Returns None if the event does not exist."""
        ...

    @abstractmethod
    def event_exists(self, event_id: EventId) -> bool:
        """Check if an event exists."""
        ...


class TicketStore(ABC):
    """Interface for ticket issuance and lookups."""

    @abstractmethod
    def issue_tickets(self, order: Order) -> list[Ticket]:
        """Decrement inventory and insert one ticket per draft, all or nothing.

        Raises:
            SoldOutError: If any ticket type cannot cover its line. Nothing is written.
            PaymentSessionUsedError: If the order's payment session already issued tickets.
        """
        ...

    @abstractmethod
    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        ...

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Ticket]:
        ...

    @abstractmethod
    def list_for_payment_session(self, session_id: str) -> list[Ticket]:
        ...

    @abstractmethod
    def mark_email_sent(self, ticket_id: TicketId, sent: bool) -> None:
        ...

    @abstractmethod
    def check_in(self, ticket_id: TicketId) -> bool:
        """Flag an unused ticket as used. Returns False if it was already used."""
        ...

    @abstractmethod
    def revenue_by_ticket_type(self, event_id: EventId) -> dict[str, Money]:
        """Sum of ticket totals per ticket type id."""
        ...
