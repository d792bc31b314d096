"""Service providers for the venues handlers."""

from functools import cache

from accounts.directory import UserDirectory
from notifications.dependencies import get_cashier_notifier
from venues.services.cashier_service import CashierService
from venues.services.sales_report_service import SalesReportService
from venues.services.venue_service import RentalService, VenueService
from venues.stores.django_store import DjangoCashierStore, DjangoRentalStore, DjangoVenueStore


@cache
def get_venue_service() -> VenueService:
    return VenueService(DjangoVenueStore())


@cache
def get_rental_service() -> RentalService:
    return RentalService(DjangoRentalStore(), DjangoVenueStore())


@cache
def get_cashier_service() -> CashierService:
    return CashierService(DjangoCashierStore(), DjangoVenueStore(), UserDirectory(), get_cashier_notifier())


@cache
def get_sales_report_service() -> SalesReportService:
    return SalesReportService(DjangoRentalStore(), DjangoVenueStore())
