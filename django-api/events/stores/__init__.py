from events.stores.django_store import DjangoEventStore, DjangoTicketStore
from events.stores.interfaces import EventStore, TicketStore

__all__ = ["DjangoEventStore", "DjangoTicketStore", "EventStore", "TicketStore"]
