"""Unit tests for domain value objects and models.

Run with: pytest tests/test_domain.py -v
"""

import uuid
from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest

from common.errors import ErrorCode
from events.domain import (
    Capacity,
    EventId,
    EventNotFoundError,
    Money,
    SoldOutError,
    TicketType,
    TicketTypeId,
)
from subscriptions.domain import Plan, Subscription
from venues.domain import CashierPermissions, Rental, RentalId, SalesReport, Venue, VenueId
from venues.services.venue_service import quote_rental_price


def _ticket_type(quantity: int = 10, available: int = 10) -> TicketType:
    return TicketType(
        id=TicketTypeId(uuid.uuid4()),
        event_id=EventId(uuid.uuid4()),
        name="General",
        description="",
        price=Money(Decimal("12.50")),
        quantity=Capacity(quantity),
        available_quantity=Capacity(available),
        features=None,
    )


class TestMoney:
    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            Money(Decimal("-1"))

    def test_multiplication_and_addition(self):
        total = Money(Decimal("12.50")) * 3 + Money(Decimal("0.50"))
        assert total == Money(Decimal("38.00"))

    def test_minor_units_are_baisa(self):
        assert Money(Decimal("12.345")).to_minor_units() == 12345

    def test_free_amount_is_at_least_one_baisa(self):
        """The gateway rejects zero amounts, so free tickets cost one baisa."""
        assert Money.zero().to_minor_units() == 1

    def test_percentage(self):
        assert Money(Decimal("200.00")).percentage(Decimal("2.5")) == Money(Decimal("5.00"))


class TestTicketType:
    def test_available_cannot_exceed_quantity(self):
        with pytest.raises(ValueError):
            _ticket_type(quantity=5, available=6)

    def test_sold_is_quantity_minus_available(self):
        assert _ticket_type(quantity=100, available=60).sold == 40

    def test_capacity_cannot_be_negative(self):
        with pytest.raises(ValueError):
            Capacity(-1)


class TestDomainErrors:
    def test_event_not_found_maps_to_404(self):
        error = EventNotFoundError("abc")
        assert error.status_code == 404
        assert error.code is ErrorCode.EVENT_NOT_FOUND
        assert error.message == "Event abc not found"

    def test_sold_out_is_a_conflict(self):
        error = SoldOutError("VIP", 2)
        assert error.status_code == 409
        assert "VIP" in error.message


class TestCashierPermissions:
    def test_defaults(self):
        assert CashierPermissions.defaults().granted() == (
            "can_view_bookings",
            "can_create_bookings",
            "can_process_payments",
        )

    def test_missing_storage_means_defaults(self):
        assert CashierPermissions.from_storage(None) == CashierPermissions.defaults()

    def test_legacy_index_list(self):
        """Stored lists hold 1-based indices into the canonical order."""
        permissions = CashierPermissions.from_storage([1, 4, 9])
        assert permissions.granted() == ("can_view_bookings", "can_view_reports")

    def test_camel_case_map(self):
        permissions = CashierPermissions.from_storage({"canViewReports": True, "canCancelBookings": False})
        assert permissions.granted() == ("can_view_reports",)

    def test_payload_omitted_keys_are_revoked(self):
        permissions = CashierPermissions.from_payload({"can_process_payments": True})
        assert permissions.granted() == ("can_process_payments",)

    def test_payload_rejects_unknown_key(self):
        with pytest.raises(ValueError):
            CashierPermissions.from_payload({"can_fly": True})

    def test_payload_rejects_non_boolean(self):
        with pytest.raises(ValueError):
            CashierPermissions.from_payload({"can_view_reports": "yes"})

    def test_storage_holds_every_key(self):
        assert set(CashierPermissions().to_storage()) == set(CashierPermissions.keys())


def _venue(hourly: str = "20.00", daily: str | None = "150.00") -> Venue:
    now = datetime(2026, 1, 1, tzinfo=dt_timezone.utc)
    return Venue(
        id=VenueId(uuid.uuid4()),
        owner_id=1,
        name="Hall",
        description="",
        location="Muscat",
        capacity=None,
        hourly_rate=Decimal(hourly),
        daily_rate=Decimal(daily) if daily else None,
        facilities=(),
        availability_hours=None,
        images=(),
        is_active=True,
        created_at=now,
        updated_at=now,
    )


class TestRentalPricing:
    start = datetime(2026, 3, 1, 9, 0, tzinfo=dt_timezone.utc)

    def test_started_hours_are_charged(self):
        assert quote_rental_price(_venue(), self.start, self.start + timedelta(hours=2, minutes=10)) == Decimal("60.00")

    def test_daily_rate_for_full_days(self):
        end = self.start + timedelta(days=1, hours=1)
        assert quote_rental_price(_venue(), self.start, end) == Decimal("300.00")

    def test_hourly_rate_when_no_daily_rate(self):
        end = self.start + timedelta(days=1)
        assert quote_rental_price(_venue(daily=None), self.start, end) == Decimal("480.00")


def _rental(venue_id: VenueId, price: str, status: str, payment: str, month: int) -> Rental:
    start = datetime(2026, month, 10, 10, tzinfo=dt_timezone.utc)
    return Rental(
        id=RentalId(uuid.uuid4()),
        venue_id=venue_id,
        venue_name="Hall",
        venue_owner_id=1,
        customer_id=2,
        customer_name="Alice",
        start_time=start,
        end_time=start + timedelta(hours=2),
        total_price=Decimal(price),
        status=status,
        payment_status=payment,
        notes="",
        created_at=start,
    )


class TestSalesReport:
    def test_revenue_counts_paid_rentals_only(self):
        venue_id = VenueId(uuid.uuid4())
        report = SalesReport.from_rentals(
            [
                _rental(venue_id, "100.00", "completed", "paid", 1),
                _rental(venue_id, "50.00", "confirmed", "paid", 2),
                _rental(venue_id, "80.00", "pending", "unpaid", 2),
                _rental(venue_id, "40.00", "canceled", "refunded", 2),
            ]
        )
        assert report.total_revenue == Decimal("150.00")
        assert report.total_bookings == 4
        assert report.paid_bookings == 2
        assert report.pending_payments == 1
        assert report.refunded_bookings == 1
        assert report.completed_bookings == 1
        assert report.canceled_bookings == 1
        assert report.average_booking_value == Decimal("75.00")
        assert [(p.period, p.bookings, p.revenue) for p in report.time_breakdown] == [
            ("2026-01", 1, Decimal("100.00")),
            ("2026-02", 3, Decimal("50.00")),
        ]

    def test_empty_report_is_all_zero(self):
        report = SalesReport.empty("No venues found", venue_id=None)
        assert report.total_revenue == Decimal("0.00")
        assert report.total_bookings == 0
        assert report.venue_breakdown == ()
        assert report.message == "No venues found"


class TestSubscriptionUsage:
    def _subscription(self, max_events: int, created: int) -> Subscription:
        plan = Plan(
            id=uuid.uuid4(),
            name="Starter",
            description="",
            type="eventManager",
            price=Decimal("10.00"),
            billing_period="monthly",
            max_events_allowed=max_events,
            service_fee_percentage=Decimal("5"),
            features=(),
            is_active=True,
        )
        now = datetime(2026, 1, 1, tzinfo=dt_timezone.utc)
        return Subscription(
            id=uuid.uuid4(),
            user_id=1,
            plan=plan,
            status="active",
            start_date=now,
            end_date=now + plan.duration,
            events_created=created,
            tickets_sold=0,
            fees_collected=Decimal("0"),
        )

    def test_events_remaining(self):
        assert self._subscription(max_events=3, created=1).events_remaining == 2
        assert self._subscription(max_events=3, created=5).events_remaining == 0

    def test_zero_limit_is_unlimited(self):
        assert self._subscription(max_events=0, created=50).events_remaining is None
