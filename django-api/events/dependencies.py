"""Service providers for the events handlers.

Services and their adapters are built once per process. Tests replace them
with ``cache_clear()`` and monkeypatching.
"""

from functools import cache

from events.services.event_service import EventService
from events.services.purchase_service import PurchaseService
from events.stores.django_store import DjangoEventStore, DjangoTicketStore
from notifications.dependencies import get_ticket_notifier
from payments.dependencies import get_payment_gateway
from subscriptions.dependencies import get_subscription_service


@cache
def get_event_service() -> EventService:
    return EventService(DjangoEventStore(), DjangoTicketStore(), get_subscription_service())


@cache
def get_purchase_service() -> PurchaseService:
    return PurchaseService(
        DjangoEventStore(),
        DjangoTicketStore(),
        get_payment_gateway(),
        get_ticket_notifier(),
        get_subscription_service(),
    )
