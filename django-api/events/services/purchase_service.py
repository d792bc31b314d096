"""Ticket purchase workflow and issued-ticket operations.

A purchase is validated against current availability, optionally checked
against a paid payment session, then handed to the ticket store, which
decrements inventory and inserts tickets in one transaction. Confirmation
emails go out afterwards; their failure never undoes a purchase.
"""

import logging
import uuid
from collections import defaultdict
from dataclasses import replace

from common.actors import Actor
from common.errors import AccessDeniedError, ErrorCode, InvalidIdError, ValidationError
from events.domain import (
    Event,
    EventNotFoundError,
    InvalidPurchaseError,
    Order,
    PaymentNotConfirmedError,
    PurchaseLine,
    Purchaser,
    SoldOutError,
    Ticket,
    TicketAlreadyUsedError,
    TicketDraft,
    TicketId,
    TicketNotFoundError,
    TicketType,
    TicketTypeNotFoundError,
    WalletPass,
)
from events.services.event_service import parse_event_id
from events.stores.interfaces import EventStore, TicketStore
from notifications.mailers import TicketEmail, TicketNotifier
from notifications.qr import ticket_qr_payload
from notifications.wallet import WalletPassData, verify_wallet_signature, wallet_pass_url
from payments.gateway import PaymentGateway
from subscriptions.services.subscription_service import SubscriptionService

logger = logging.getLogger(__name__)


def new_order_id() -> str:
    return f"ORD-{uuid.uuid4().hex[:12].upper()}"


def unique_recipients(attendees) -> list:
    """First attendee record per email address, case-insensitively."""
    seen = set()
    recipients = []
    for attendee in attendees:
        key = attendee.email.strip().lower()
        if key not in seen:
            seen.add(key)
            recipients.append(attendee)
    return recipients


class PurchaseService:
    """Issues tickets and serves ticket holders and organizers."""

    def __init__(
        self,
        event_store: EventStore,
        ticket_store: TicketStore,
        payment_gateway: PaymentGateway,
        notifier: TicketNotifier,
        subscriptions: SubscriptionService | None = None,
    ) -> None:
        self._events = event_store
        self._tickets = ticket_store
        self._gateway = payment_gateway
        self._notifier = notifier
        self._subscriptions = subscriptions

    def purchase(
        self,
        purchaser: Purchaser,
        event_id: str,
        lines: list[PurchaseLine],
        payment_session_id: str | None = None,
    ) -> list[Ticket]:
        """Buy tickets for one event. Either every line is issued or none is.

        Raises:
            InvalidIdError: If event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            TicketTypeNotFoundError: If a ticket type is absent or belongs to another event.
            InvalidPurchaseError: If a quantity or the attendee list is malformed.
            SoldOutError: If any line exceeds availability.
            PaymentNotConfirmedError: If the payment session is unpaid or underpaid.
            UpstreamFailureError: If the payment provider cannot be reached.
        """
        event = self._events.get_event(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        if not lines:
            raise InvalidPurchaseError("At least one ticket selection is required")

        ticket_types = {tt.id: tt for tt in event.ticket_types}
        requested: dict = defaultdict(int)
        for line in lines:
            if line.quantity < 1:
                raise InvalidPurchaseError("Quantity must be at least 1")
            if line.ticket_type_id not in ticket_types:
                raise TicketTypeNotFoundError(str(line.ticket_type_id))
            if line.attendees and len(line.attendees) != line.quantity:
                raise InvalidPurchaseError(
                    f"Expected {line.quantity} attendee records for {ticket_types[line.ticket_type_id].name}, "
                    f"got {len(line.attendees)}"
                )
            requested[line.ticket_type_id] += line.quantity
        for ticket_type_id, quantity in requested.items():
            ticket_type = ticket_types[ticket_type_id]
            if ticket_type.available_quantity.value < quantity:
                raise SoldOutError(ticket_type.name, ticket_type.available_quantity.value)

        order_id = new_order_id()
        drafts = tuple(
            self._draft(event, ticket_types[line.ticket_type_id], line, purchaser, order_id) for line in lines
        )
        order = Order(
            order_id=order_id,
            event_id=event.id,
            user_id=purchaser.user_id,
            drafts=drafts,
            payment_session_id=payment_session_id,
        )
        if payment_session_id:
            self._verify_payment(payment_session_id, order)

        tickets = self._tickets.issue_tickets(order)
        logger.info(
            "Order %s issued %d tickets for event %s to user %s",
            order_id,
            order.total_quantity,
            event.id,
            purchaser.user_id,
        )
        self._record_usage(event, order)
        return [self._send_confirmations(event, ticket_types[t.ticket_type_id], t) for t in tickets]

    def list_user_tickets(self, user_id: int) -> list[Ticket]:
        return self._tickets.list_for_user(user_id)

    def tickets_for_payment_session(self, actor: Actor, session_id: str) -> list[Ticket]:
        tickets = self._tickets.list_for_payment_session(session_id)
        if actor.is_admin:
            return tickets
        return [t for t in tickets if t.user_id == actor.user_id]

    def check_in(self, actor: Actor, ticket_id: str, qr_code: str | None = None) -> Ticket:
        """Mark a ticket as used at the door.

        Raises:
            TicketNotFoundError: If the ticket does not exist.
            AccessDeniedError: If the caller does not organize the ticket's event.
            ValidationError: If a scanned QR code does not belong to the ticket.
            TicketAlreadyUsedError: If the ticket was already checked in.
        """
        ticket = self._get_ticket(ticket_id)
        event = self._events.get_event(ticket.event_id)
        if event is None or not actor.owns(event.organizer_id):
            raise AccessDeniedError("Only the event organizer can check in tickets")
        if qr_code is not None and qr_code != ticket.qr_code:
            raise ValidationError(code=ErrorCode.INVALID_INPUT, message="QR code does not match this ticket")
        if not self._tickets.check_in(ticket.id):
            raise TicketAlreadyUsedError()
        logger.info("Ticket %s checked in by user %s", ticket.id, actor.user_id)
        return self._tickets.get_ticket(ticket.id)

    def resend_confirmation(self, actor: Actor, ticket_id: str) -> Ticket:
        ticket = self._get_ticket(ticket_id)
        if not actor.owns(ticket.user_id):
            raise AccessDeniedError("You can only resend confirmations for your own tickets")
        event = self._events.get_event(ticket.event_id)
        if event is None:
            raise EventNotFoundError(str(ticket.event_id))
        ticket_type = next(tt for tt in event.ticket_types if tt.id == ticket.ticket_type_id)
        return self._send_confirmations(event, ticket_type, ticket)

    def wallet_pass(self, actor: Actor, ticket_id: str, kind: str) -> str:
        """Return a signed Apple (``apple``) or Google (``google``) wallet pass URL."""
        ticket = self._get_ticket(ticket_id)
        if not actor.owns(ticket.user_id):
            raise AccessDeniedError("You can only add your own tickets to a wallet")
        event = self._events.get_event(ticket.event_id)
        if event is None:
            raise EventNotFoundError(str(ticket.event_id))
        attendee_name = ticket.attendees[0].name if ticket.attendees else ""
        return wallet_pass_url(
            kind,
            WalletPassData(
                ticket_id=str(ticket.id),
                event_id=str(event.id),
                ticket_type_id=str(ticket.ticket_type_id),
                attendee_name=attendee_name,
                event_name=event.title,
                event_date=event.start_date,
            ),
        )

    def open_wallet_pass(
        self, kind: str, ticket_id: str, event_id: str, ticket_type_id: str, timestamp: str, signature: str
    ) -> WalletPass:
        """Resolve a signed wallet pass link to its ticket.

        Raises:
            AccessDeniedError: If the signature does not match the ticket and timestamp.
            TicketNotFoundError: If the ticket is gone or the link names another event or ticket type.
        """
        if not verify_wallet_signature(kind, ticket_id, timestamp, signature):
            logger.warning("Rejected %s wallet pass link for ticket %s", kind, ticket_id)
            raise AccessDeniedError("Invalid wallet pass request")
        ticket = self._get_ticket(ticket_id)
        event = self._events.get_event(ticket.event_id)
        if event is None or str(event.id) != event_id.lower():
            raise TicketNotFoundError()
        ticket_type = next((tt for tt in event.ticket_types if tt.id == ticket.ticket_type_id), None)
        if ticket_type is None or str(ticket_type.id) != ticket_type_id.lower():
            raise TicketNotFoundError()
        return WalletPass(kind=kind, ticket=ticket, event=event, ticket_type=ticket_type)

    def _get_ticket(self, ticket_id: str) -> Ticket:
        try:
            parsed = TicketId.from_string(ticket_id)
        except ValueError:
            raise InvalidIdError("ticket")
        ticket = self._tickets.get_ticket(parsed)
        if ticket is None:
            raise TicketNotFoundError()
        return ticket

    def _draft(
        self, event: Event, ticket_type: TicketType, line: PurchaseLine, purchaser: Purchaser, order_id: str
    ) -> TicketDraft:
        ticket_id = TicketId(uuid.uuid4())
        return TicketDraft(
            id=ticket_id,
            ticket_type_id=ticket_type.id,
            quantity=line.quantity,
            total_price=ticket_type.price * line.quantity,
            qr_code=ticket_qr_payload(ticket_id, event.id, order_id),
            attendees=line.attendees or (purchaser.as_attendee(),) * line.quantity,
            seat_assignment=line.seat_assignment,
        )

    def _verify_payment(self, session_id: str, order: Order) -> None:
        session = self._gateway.get_session(session_id)
        if not session.is_paid:
            logger.info("Order %s rejected: session %s is %s", order.order_id, session_id, session.payment_status)
            raise PaymentNotConfirmedError()
        metadata = session.metadata
        if metadata.get("event_id") != str(order.event_id) or metadata.get("user_id") != str(order.user_id):
            logger.warning(
                "Order %s rejected: session %s was opened for event %s by user %s",
                order.order_id,
                session_id,
                metadata.get("event_id"),
                metadata.get("user_id"),
            )
            raise PaymentNotConfirmedError("This payment session does not belong to this purchase")
        expected = order.total_price.to_minor_units()
        if session.total_amount is not None and session.total_amount < expected:
            logger.warning(
                "Order %s rejected: session %s paid %s, expected %s",
                order.order_id,
                session_id,
                session.total_amount,
                expected,
            )
            raise PaymentNotConfirmedError()

    def _record_usage(self, event: Event, order: Order) -> None:
        if self._subscriptions is None:
            return
        try:
            self._subscriptions.record_ticket_sale(event.organizer_id, order.total_quantity, order.total_price)
        except Exception:
            logger.exception("Failed to record subscription usage for order %s", order.order_id)

    def _send_confirmations(self, event: Event, ticket_type: TicketType, ticket: Ticket) -> Ticket:
        sent = True
        for attendee in unique_recipients(ticket.attendees):
            message = TicketEmail(
                recipient=attendee.email,
                attendee_name=attendee.name,
                ticket_id=str(ticket.id),
                event_id=str(event.id),
                ticket_type_id=str(ticket_type.id),
                event_title=event.title,
                event_date=event.start_date,
                location=event.location,
                ticket_type_name=ticket_type.name,
                order_id=ticket.order_id,
                qr_payload=ticket.qr_code,
            )
            try:
                self._notifier.send_ticket_confirmation(message)
            except Exception:
                sent = False
                logger.exception("Failed to send confirmation for ticket %s to %s", ticket.id, attendee.email)
        self._tickets.mark_email_sent(ticket.id, sent)
        return replace(ticket, email_sent=sent)
