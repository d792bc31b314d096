from events.domain.commands import UPDATABLE_EVENT_FIELDS, NewEvent, NewTicketType
from events.domain.errors import (
    EventNotFoundError,
    InvalidPurchaseError,
    PaymentNotConfirmedError,
    PaymentSessionUsedError,
    SoldOutError,
    TicketAlreadyUsedError,
    TicketNotFoundError,
    TicketTypeNotFoundError,
)
from events.domain.models import (
    AddOn,
    Attendee,
    Event,
    EventSales,
    Speaker,
    Ticket,
    TicketType,
    TicketTypeSales,
    Workshop,
)
from events.domain.purchases import EventQuery, Order, PurchaseLine, Purchaser, TicketDraft, WalletPass
from events.domain.value_objects import Capacity, EventId, Money, TicketId, TicketTypeId

__all__ = [
    "AddOn",
    "Attendee",
    "Capacity",
    "Event",
    "EventId",
    "EventNotFoundError",
    "EventQuery",
    "EventSales",
    "InvalidPurchaseError",
    "Money",
    "NewEvent",
    "NewTicketType",
    "Order",
    "PaymentNotConfirmedError",
    "PaymentSessionUsedError",
    "PurchaseLine",
    "Purchaser",
    "SoldOutError",
    "Speaker",
    "Ticket",
    "TicketAlreadyUsedError",
    "TicketDraft",
    "TicketId",
    "TicketNotFoundError",
    "TicketType",
    "TicketTypeId",
    "TicketTypeNotFoundError",
    "TicketTypeSales",
    "UPDATABLE_EVENT_FIELDS",
    "WalletPass",
    "Workshop",
]
