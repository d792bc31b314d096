"""Checkout sessions and payment webhooks.

Prices always come from the database, never from the client. Webhook payloads
only name a session; its status and metadata are re-read from the gateway.
"""

import json
import logging
from collections import defaultdict
from dataclasses import dataclass

from common.actors import Actor
from common.errors import ErrorCode, InvalidIdError, ValidationError
from events.domain import (
    EventNotFoundError,
    InvalidPurchaseError,
    SoldOutError,
    TicketTypeId,
    TicketTypeNotFoundError,
)
from events.services.event_service import parse_event_id
from events.stores.interfaces import EventStore
from payments.gateway import CheckoutItem, CheckoutSession, PaymentGateway
from venues.services.venue_service import RentalService

logger = logging.getLogger(__name__)

PAYMENT_COMPLETED = "payment_completed"
TICKET_PURCHASE = "ticket"
RENTAL_PURCHASE = "rental"


@dataclass(frozen=True)
class TicketSelection:
    ticket_type_id: str
    quantity: int


@dataclass(frozen=True)
class WebhookOutcome:
    """What a webhook delivery did, echoed back to the provider."""

    action: str
    session_id: str | None = None

    @property
    def message(self) -> str:
        return WEBHOOK_MESSAGES[self.action]


WEBHOOK_MESSAGES = {
    "ignored": "Event ignored",
    "unpaid": "Session is not paid",
    "rental_paid": "Rental marked as paid",
    "rental_unchanged": "Rental was already settled",
    "ticket_acknowledged": "Ticket payment acknowledged",
}


class PaymentService:
    def __init__(self, event_store: EventStore, rentals: RentalService, payment_gateway: PaymentGateway) -> None:
        self._events = event_store
        self._rentals = rentals
        self._gateway = payment_gateway

    def ticket_checkout(self, actor: Actor, event_id: str, selections: list[TicketSelection]) -> CheckoutSession:
        """Open a checkout session for ticket selections of one event.

        Raises:
            EventNotFoundError: If the event does not exist.
            TicketTypeNotFoundError: If a ticket type is not part of the event.
            InvalidPurchaseError: If no selection is given or a quantity is below one.
            SoldOutError: If a selection exceeds current availability.
        """
        event = self._events.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        if not selections:
            raise InvalidPurchaseError("At least one ticket selection is required")

        ticket_types = {tt.id: tt for tt in event.ticket_types}
        requested: dict = defaultdict(int)
        for selection in selections:
            try:
                ticket_type_id = TicketTypeId.from_string(selection.ticket_type_id)
            except ValueError:
                raise InvalidIdError("ticket type")
            if ticket_type_id not in ticket_types:
                raise TicketTypeNotFoundError(selection.ticket_type_id)
            if selection.quantity < 1:
                raise InvalidPurchaseError("Quantity must be at least 1")
            requested[ticket_type_id] += selection.quantity

        items = []
        for ticket_type_id, quantity in requested.items():
            ticket_type = ticket_types[ticket_type_id]
            if ticket_type.available_quantity.value < quantity:
                raise SoldOutError(ticket_type.name, ticket_type.available_quantity.value)
            items.append(
                CheckoutItem(
                    name=f"{ticket_type.name} - {event.title}",
                    quantity=quantity,
                    unit_amount=ticket_type.price.to_minor_units(),
                )
            )
        metadata = {
            "purchase_type": TICKET_PURCHASE,
            "user_id": str(actor.user_id),
            "event_id": str(event.id),
            "items": json.dumps({str(k): v for k, v in requested.items()}),
        }
        return self._gateway.create_session(f"event-{event.id}-user-{actor.user_id}", items, metadata)

    def rental_checkout(self, actor: Actor, rental_id: str) -> CheckoutSession:
        """Open a checkout session for a rental's total price.

        Raises:
            RentalNotFoundError: If the rental does not exist.
            AccessDeniedError: If the caller is neither the customer nor the venue owner.
            RentalAlreadyPaidError: If the rental is not unpaid.
        """
        rental = self._rentals.rental_for_payment(actor, rental_id)
        amount = max(1, int((rental.total_price * 1000).to_integral_value()))
        session = self._gateway.create_session(
            f"rental-{rental.id}",
            [CheckoutItem(name=f"Venue Rental: {rental.venue_name}", quantity=1, unit_amount=amount)],
            {"purchase_type": RENTAL_PURCHASE, "user_id": str(actor.user_id), "rental_id": str(rental.id)},
        )
        self._rentals.attach_payment_session(rental, session.session_id)
        return session

    def status(self, session_id: str) -> str:
        return self._gateway.check_payment_status(session_id)

    def handle_webhook(self, event_name: str | None, session_id: str | None) -> WebhookOutcome:
        if event_name != PAYMENT_COMPLETED:
            logger.info("Ignoring payment webhook event %s", event_name)
            return WebhookOutcome("ignored", session_id)
        if not session_id:
            raise ValidationError(code=ErrorCode.INVALID_INPUT, message="Webhook payload has no session id")

        session = self._gateway.get_session(session_id)
        if not session.is_paid:
            logger.warning("Webhook for session %s but gateway reports %s", session_id, session.payment_status)
            return WebhookOutcome("unpaid", session_id)

        purchase_type = session.metadata.get("purchase_type")
        if purchase_type == RENTAL_PURCHASE:
            paid = self._rentals.mark_paid(str(session.metadata.get("rental_id", "")))
            return WebhookOutcome("rental_paid" if paid else "rental_unchanged", session_id)
        if purchase_type == TICKET_PURCHASE:
            logger.info("Ticket payment session %s completed", session_id)
            return WebhookOutcome("ticket_acknowledged", session_id)
        logger.error("Session %s has unknown purchase type %r", session_id, purchase_type)
        raise ValidationError(code=ErrorCode.INVALID_INPUT, message="Invalid session data")
