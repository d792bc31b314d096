"""Event service - catalog business logic lives here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

import logging

from common.actors import Actor
from common.errors import AccessDeniedError, ErrorCode, InvalidIdError, ValidationError
from events.domain import (
    UPDATABLE_EVENT_FIELDS,
    Event,
    EventId,
    EventNotFoundError,
    EventQuery,
    EventSales,
    Money,
    NewEvent,
    TicketTypeSales,
)
from events.stores.interfaces import EventStore, TicketStore
from subscriptions.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except ValueError:
        raise InvalidIdError("event")


class EventService:
    """Service for event catalog operations."""

    def __init__(
        self,
        store: EventStore,
        ticket_store: TicketStore,
        subscriptions: SubscriptionService | None = None,
    ) -> None:
        self._store = store
        self._tickets = ticket_store
        self._subscriptions = subscriptions

    def list_events(self, query: EventQuery) -> list[Event]:
        """Return events matching the catalog filters."""
        return self._store.list_events(query)

    def get_event(self, event_id: str) -> Event:
        """Return an event with its ticket types and associations.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = self._store.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    def create_event(self, actor: Actor, new_event: NewEvent) -> Event:
        """Publish an event with its ticket types; every tier starts fully available.

        Raises:
            ValidationError: If no ticket types are given or the dates are inverted.
            EventLimitReachedError: If the organizer's plan allows no more events.
        """
        if not new_event.ticket_types:
            raise ValidationError(code=ErrorCode.INVALID_INPUT, message="At least one ticket type is required")
        _check_dates(new_event.start_date, new_event.end_date)
        if self._subscriptions is not None:
            self._subscriptions.ensure_can_create_event(actor)
        event = self._store.create_event(actor.user_id, new_event)
        if self._subscriptions is not None and not actor.is_admin:
            self._subscriptions.record_event_created(actor.user_id)
        return event

    def update_event(self, actor: Actor, event_id: str, changes: dict) -> Event:
        """Apply scalar changes to an event owned by the caller.

        Raises:
            InvalidIdError, EventNotFoundError: As for get_event.
            AccessDeniedError: If the caller is neither organizer nor admin.
            ValidationError: If a field cannot be updated or the dates are inverted.
        """
        event = self.get_event(event_id)
        if not actor.owns(event.organizer_id):
            raise AccessDeniedError("Only the organizer can update this event")
        unknown = set(changes) - UPDATABLE_EVENT_FIELDS
        if unknown:
            raise ValidationError(
                code=ErrorCode.INVALID_INPUT,
                message=f"Fields cannot be updated: {', '.join(sorted(unknown))}",
            )
        if not changes:
            return event
        _check_dates(changes.get("start_date", event.start_date), changes.get("end_date", event.end_date))
        updated = self._store.update_event(event.id, changes)
        if updated is None:
            raise EventNotFoundError(event_id)
        logger.info("Event %s updated by user %s: %s", event.id, actor.user_id, sorted(changes))
        return updated

    def get_sales(self, actor: Actor, event_id: str) -> EventSales:
        event = self.get_event(event_id)
        if not actor.owns(event.organizer_id):
            raise AccessDeniedError("Only the organizer can view sales for this event")
        revenue = self._tickets.revenue_by_ticket_type(event.id)
        return EventSales(
            event=event,
            lines=tuple(
                TicketTypeSales(ticket_type=tt, revenue=revenue.get(str(tt.id), Money.zero()))
                for tt in event.ticket_types
            ),
        )


def _check_dates(start_date, end_date) -> None:
    if end_date is not None and end_date < start_date:
        raise ValidationError(code=ErrorCode.INVALID_INPUT, message="End date must be after start date")
