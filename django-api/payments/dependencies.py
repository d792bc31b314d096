"""Process-wide payment gateway and service providers."""

from functools import cache

from events.stores.django_store import DjangoEventStore
from payments.gateway import PaymentGateway, ThawaniGateway
from payments.services.payment_service import PaymentService
from venues.dependencies import get_rental_service


@cache
def get_payment_gateway() -> PaymentGateway:
    return ThawaniGateway.from_settings()


@cache
def get_payment_service() -> PaymentService:
    return PaymentService(DjangoEventStore(), get_rental_service(), get_payment_gateway())
