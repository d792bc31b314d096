from venues.stores.django_store import DjangoCashierStore, DjangoRentalStore, DjangoVenueStore
from venues.stores.interfaces import CashierStore, RentalStore, VenueStore

__all__ = [
    "CashierStore",
    "DjangoCashierStore",
    "DjangoRentalStore",
    "DjangoVenueStore",
    "RentalStore",
    "VenueStore",
]
