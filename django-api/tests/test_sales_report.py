"""Integration tests for GET /api/venues/sales-report.

The report never fails: problems come back as an all-zero report with a message.
Run with: pytest tests/test_sales_report.py -v
"""

import uuid
from datetime import datetime
from datetime import timezone as dt_timezone
from decimal import Decimal

import pytest
from django.db import DatabaseError

from venues.models import Rental as RentalModel
from venues.stores.django_store import DjangoRentalStore

URL = "/api/venues/sales-report"


@pytest.fixture
def make_rental(customer):
    def _make(venue, price: str, status: str = "confirmed", payment: str = "paid", month: int = 3, day: int = 10):
        start = datetime(2026, month, day, 10, tzinfo=dt_timezone.utc)
        return RentalModel.objects.create(
            venue=venue,
            customer=customer,
            customer_name="Alice",
            start_time=start,
            end_time=start.replace(hour=12),
            total_price=Decimal(price),
            status=status,
            payment_status=payment,
        )

    return _make


def assert_zero(data: dict) -> None:
    assert data["total_revenue"] == "0.00"
    assert data["total_bookings"] == 0
    assert data["venue_breakdown"] == []
    assert data["time_breakdown"] == []


@pytest.mark.django_db
class TestSalesReport:
    def test_aggregates_owned_venues(self, client_for, center, other_center, make_venue, make_rental):
        hall, garden = make_venue("Hall"), make_venue("Garden")
        elsewhere = make_venue("Elsewhere", owner=other_center)
        make_rental(hall, "100.00", status="completed", month=3)
        make_rental(hall, "60.00", payment="unpaid", month=3, day=20)
        make_rental(garden, "40.00", month=4)
        make_rental(garden, "25.00", status="canceled", payment="refunded", month=4, day=20)
        make_rental(elsewhere, "999.00")

        response = client_for(center).get(URL)

        assert response.status_code == 200
        body = response.json()
        assert body["description"] == "Sales report generated"
        data = body["data"]
        assert data["total_revenue"] == "140.00"
        assert data["total_bookings"] == 4
        assert data["paid_bookings"] == 2
        assert data["pending_payments"] == 1
        assert data["refunded_bookings"] == 1
        assert data["canceled_bookings"] == 1
        assert data["completed_bookings"] == 1
        assert data["average_booking_value"] == "70.00"
        assert {v["venue_name"]: v["revenue"] for v in data["venue_breakdown"]} == {
            "Hall": "100.00",
            "Garden": "40.00",
        }
        assert [(p["period"], p["bookings"]) for p in data["time_breakdown"]] == [("2026-03", 2), ("2026-04", 2)]

    def test_single_venue_and_date_range(self, client_for, center, make_venue, make_rental):
        hall, garden = make_venue("Hall"), make_venue("Garden")
        make_rental(hall, "100.00", month=3)
        make_rental(hall, "50.00", month=5)
        make_rental(garden, "40.00", month=3)

        response = client_for(center).get(
            URL, {"venue_id": str(hall.pk), "start_date": "2026-03-01", "end_date": "2026-03-31"}
        )

        data = response.json()["data"]
        assert data["total_bookings"] == 1
        assert data["total_revenue"] == "100.00"

    def test_end_date_includes_whole_day(self, client_for, center, venue, make_rental):
        make_rental(venue, "80.00", month=3, day=31)
        response = client_for(center).get(URL, {"end_date": "2026-03-31"})
        assert response.json()["data"]["total_bookings"] == 1

    def test_admin_sees_every_venue(self, client_for, admin_user, other_center, make_venue, make_rental):
        make_rental(make_venue("Hall"), "10.00")
        make_rental(make_venue("Far", owner=other_center), "20.00")
        response = client_for(admin_user).get(URL)
        assert response.json()["data"]["total_revenue"] == "30.00"

    def test_no_venues(self, client_for, center):
        response = client_for(center).get(URL)
        assert response.status_code == 200
        assert response.json()["description"] == "No venues found"
        assert_zero(response.json()["data"])

    def test_invalid_venue_id(self, client_for, center, venue):
        response = client_for(center).get(URL, {"venue_id": "abc"})
        assert response.status_code == 200
        assert response.json()["description"] == "Invalid venue ID"
        assert_zero(response.json()["data"])

    def test_unknown_venue(self, client_for, center, venue):
        response = client_for(center).get(URL, {"venue_id": str(uuid.uuid4())})
        assert response.status_code == 200
        assert response.json()["description"] == "Venue not found"

    def test_foreign_venue(self, client_for, center, other_center, make_venue, make_rental):
        theirs = make_venue("Theirs", owner=other_center)
        make_rental(theirs, "500.00")
        response = client_for(center).get(URL, {"venue_id": str(theirs.pk)})
        assert response.status_code == 200
        assert response.json()["description"] == "You do not have access to this venue"
        assert_zero(response.json()["data"])

    def test_storage_failure_degrades_to_empty_report(self, client_for, center, venue, monkeypatch):
        def broken(self, venue_ids, start, end):
            raise DatabaseError("connection lost")

        monkeypatch.setattr(DjangoRentalStore, "rentals_for_report", broken)
        response = client_for(center).get(URL)
        assert response.status_code == 200
        assert response.json()["description"] == "Sales data is temporarily unavailable"
        assert_zero(response.json()["data"])

    def test_customer_is_forbidden(self, client_for, customer):
        assert client_for(customer).get(URL).status_code == 403
