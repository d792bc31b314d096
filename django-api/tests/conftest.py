"""Pytest configuration and shared fixtures."""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient

from events import dependencies as event_providers
from events.models import Event as EventModel
from events.models import TicketType as TicketTypeModel
from notifications import dependencies as notification_providers
from payments import dependencies as payment_providers
from payments.gateway import CheckoutSession, PaymentGateway, PaymentSession, ThawaniGateway
from subscriptions import dependencies as subscription_providers
from venues import dependencies as venue_providers
from venues.models import Venue as VenueModel

PROVIDERS = (
    event_providers.get_event_service,
    event_providers.get_purchase_service,
    notification_providers.get_ticket_notifier,
    notification_providers.get_cashier_notifier,
    payment_providers.get_payment_gateway,
    payment_providers.get_payment_service,
    subscription_providers.get_subscription_service,
    venue_providers.get_venue_service,
    venue_providers.get_rental_service,
    venue_providers.get_cashier_service,
    venue_providers.get_sales_report_service,
)


class FakeGateway(PaymentGateway):
    """In-memory payment gateway. Sessions are registered with ``add_session``."""

    def __init__(self) -> None:
        self.sessions: dict[str, PaymentSession] = {}
        self.created: list[dict] = []
        self.lookups: list[str] = []

    def add_session(self, session_id: str, status: str = "paid", total_amount: int | None = None, **metadata):
        self.sessions[session_id] = PaymentSession(
            session_id=session_id,
            payment_status=status,
            total_amount=total_amount,
            metadata=metadata,
        )

    def create_session(self, client_reference_id, items, metadata, customer_id=None) -> CheckoutSession:
        session_id = f"sess_{len(self.created) + 1}"
        self.created.append({"reference": client_reference_id, "items": items, "metadata": metadata})
        self.add_session(session_id, status="unpaid", **metadata)
        return CheckoutSession(session_id=session_id, checkout_url=f"https://pay.test/pay/{session_id}?key=pk")

    def get_session(self, session_id: str) -> PaymentSession:
        self.lookups.append(session_id)
        return self.sessions.get(session_id) or PaymentSession(session_id=session_id, payment_status="unpaid")


@pytest.fixture
def gateway(monkeypatch) -> FakeGateway:
    fake = FakeGateway()
    monkeypatch.setattr(ThawaniGateway, "from_settings", classmethod(lambda cls: fake))
    return fake


@pytest.fixture(autouse=True)
def reset_providers(gateway):
    """Rebuild process-wide services around the fake gateway for every test."""
    for provider in PROVIDERS:
        provider.cache_clear()
    yield
    for provider in PROVIDERS:
        provider.cache_clear()


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def make_user(django_user_model):
    def _make(username: str, role: str = "customer", **extra):
        return django_user_model.objects.create_user(
            username=username,
            email=f"{username}@example.com",
            password="secret-pass-123",
            role=role,
            **extra,
        )

    return _make


@pytest.fixture
def customer(make_user):
    return make_user("alice", first_name="Alice", last_name="Buyer")


@pytest.fixture
def other_customer(make_user):
    return make_user("bob")


@pytest.fixture
def manager(make_user):
    return make_user("organizer", role="eventManager")


@pytest.fixture
def other_manager(make_user):
    return make_user("rival", role="eventManager")


@pytest.fixture
def center(make_user):
    return make_user("center", role="center", first_name="Grand", last_name="Hall")


@pytest.fixture
def other_center(make_user):
    return make_user("othercenter", role="center")


@pytest.fixture
def admin_user(make_user):
    return make_user("root", role="customer", is_superuser=True, is_staff=True)


@pytest.fixture
def client_for():
    def _client(user) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _client


@pytest.fixture
def make_event(manager):
    def _make(title: str = "Jazz Night", organizer=None, days_ahead: int = 7, ticket_types=None, **fields):
        event = EventModel.objects.create(
            title=title,
            description=f"{title} description",
            location="Muscat",
            category=fields.pop("category", EventModel.Category.MUSIC),
            organizer=organizer or manager,
            start_date=timezone.now() + timedelta(days=days_ahead),
            **fields,
        )
        for name, price, quantity in ticket_types or [("General", "10.00", 100)]:
            TicketTypeModel.objects.create(
                event=event,
                name=name,
                price=Decimal(price),
                quantity=quantity,
                available_quantity=quantity,
            )
        return event

    return _make


@pytest.fixture
def event(make_event):
    return make_event(ticket_types=[("General", "10.00", 100), ("VIP", "50.00", 5)])


@pytest.fixture
def make_venue(center):
    def _make(name: str = "Grand Hall", owner=None, **fields):
        return VenueModel.objects.create(
            name=name,
            owner=owner or center,
            location="Muscat",
            hourly_rate=fields.pop("hourly_rate", Decimal("20.00")),
            daily_rate=fields.pop("daily_rate", Decimal("150.00")),
            **fields,
        )

    return _make


@pytest.fixture
def venue(make_venue):
    return make_venue()
