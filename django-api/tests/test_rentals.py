"""Integration tests for venues and venue rentals.

Run with: pytest tests/test_rentals.py -v
"""

import uuid
from datetime import timedelta

import pytest
from django.utils import timezone

from venues.models import Rental as RentalModel
from venues.models import Venue as VenueModel


def slot(days_ahead: int = 3, hour: int = 10, hours: int = 2) -> tuple[str, str]:
    start = (timezone.now() + timedelta(days=days_ahead)).replace(hour=hour, minute=0, second=0, microsecond=0)
    return start.isoformat(), (start + timedelta(hours=hours)).isoformat()


def book(client, venue, days_ahead: int = 3, hour: int = 10, hours: int = 2, **extra):
    start, end = slot(days_ahead, hour, hours)
    body = {"venue_id": str(venue.pk), "start_time": start, "end_time": end, **extra}
    return client.post("/api/rentals", body, format="json")


@pytest.mark.django_db
class TestVenues:
    """Tests for /api/venues"""

    def test_center_creates_venue_with_default_daily_rate(self, client_for, center):
        response = client_for(center).post(
            "/api/venues",
            {"name": "Rooftop", "location": "Muscat", "hourly_rate": "15.00", "facilities": ["wifi"]},
            format="json",
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["owner_id"] == center.pk
        assert data["daily_rate"] == "120.00"
        assert data["facilities"] == ["wifi"]

    def test_center_lists_only_own_venues(self, client_for, center, other_center, make_venue):
        make_venue("Mine")
        make_venue("Theirs", owner=other_center)
        response = client_for(center).get("/api/venues")
        assert [v["name"] for v in response.json()["data"]] == ["Mine"]

    def test_admin_lists_all_venues(self, client_for, admin_user, other_center, make_venue):
        make_venue("Mine")
        make_venue("Theirs", owner=other_center)
        response = client_for(admin_user).get("/api/venues")
        assert len(response.json()["data"]) == 2

    def test_customer_cannot_manage_venues(self, client_for, customer):
        response = client_for(customer).post(
            "/api/venues", {"name": "Nope", "location": "X", "hourly_rate": "1.00"}, format="json"
        )
        assert response.status_code == 403

    def test_customer_sees_active_venue(self, client_for, customer, venue):
        response = client_for(customer).get(f"/api/venues/{venue.pk}")
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Grand Hall"

    def test_customer_cannot_see_inactive_venue(self, client_for, customer, make_venue):
        hidden = make_venue("Hidden", is_active=False)
        response = client_for(customer).get(f"/api/venues/{hidden.pk}")
        assert response.status_code == 404

    def test_other_center_gets_forbidden(self, client_for, other_center, venue):
        response = client_for(other_center).get(f"/api/venues/{venue.pk}")
        assert response.status_code == 403

    def test_owner_updates_venue(self, client_for, center, venue):
        response = client_for(center).patch(f"/api/venues/{venue.pk}", {"capacity": 300}, format="json")
        assert response.status_code == 200
        assert response.json()["data"]["capacity"] == 300
        venue.refresh_from_db()
        assert venue.name == "Grand Hall"

    def test_other_center_cannot_update(self, client_for, other_center, venue):
        response = client_for(other_center).patch(f"/api/venues/{venue.pk}", {"capacity": 1}, format="json")
        assert response.status_code == 403

    def test_delete_unused_venue(self, client_for, center, venue):
        response = client_for(center).delete(f"/api/venues/{venue.pk}")
        assert response.status_code == 200
        assert not VenueModel.objects.filter(pk=venue.pk).exists()

    def test_venue_with_rentals_cannot_be_deleted(self, client_for, center, customer, venue):
        book(client_for(customer), venue)
        response = client_for(center).delete(f"/api/venues/{venue.pk}")
        assert response.status_code == 409
        assert VenueModel.objects.filter(pk=venue.pk).exists()

    def test_malformed_venue_id(self, client_for, center):
        assert client_for(center).get("/api/venues/123").status_code == 400

    def test_unknown_venue(self, client_for, center):
        assert client_for(center).get(f"/api/venues/{uuid.uuid4()}").status_code == 404


@pytest.mark.django_db
class TestRentalBooking:
    """Tests for POST /api/rentals"""

    def test_booking_is_priced_server_side(self, client_for, customer, venue):
        response = book(client_for(customer), venue, hours=3, total_price="1.00")

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["total_price"] == "60.00"
        assert data["status"] == "pending"
        assert data["payment_status"] == "unpaid"
        assert data["customer_name"] == "Alice Buyer"
        assert data["venue_name"] == "Grand Hall"

    def test_full_day_uses_daily_rate(self, client_for, customer, venue):
        response = book(client_for(customer), venue, hours=26)
        assert response.json()["data"]["total_price"] == "300.00"

    def test_overlapping_booking_rejected(self, client_for, customer, other_customer, venue):
        assert book(client_for(customer), venue, hour=10, hours=2).status_code == 201
        response = book(client_for(other_customer), venue, hour=11, hours=2)
        assert response.status_code == 409
        assert RentalModel.objects.count() == 1

    def test_adjacent_booking_allowed(self, client_for, customer, other_customer, venue):
        assert book(client_for(customer), venue, hour=10, hours=2).status_code == 201
        assert book(client_for(other_customer), venue, hour=12, hours=2).status_code == 201

    def test_canceled_booking_frees_the_slot(self, client_for, customer, other_customer, venue):
        rental = book(client_for(customer), venue).json()["data"]
        client_for(customer).patch(f"/api/rentals/{rental['id']}/status", {"status": "canceled"}, format="json")
        assert book(client_for(other_customer), venue).status_code == 201

    def test_past_start_rejected(self, client_for, customer, venue):
        response = book(client_for(customer), venue, days_ahead=-2)
        assert response.status_code == 400

    def test_end_before_start_rejected(self, client_for, customer, venue):
        start, end = slot()
        response = client_for(customer).post(
            "/api/rentals",
            {"venue_id": str(venue.pk), "start_time": end, "end_time": start},
            format="json",
        )
        assert response.status_code == 400

    def test_inactive_venue_cannot_be_booked(self, client_for, customer, make_venue):
        hidden = make_venue("Closed", is_active=False)
        assert book(client_for(customer), hidden).status_code == 404

    def test_center_cannot_book(self, client_for, center, venue):
        assert book(client_for(center), venue).status_code == 403


@pytest.mark.django_db
class TestRentalLifecycle:
    """Tests for rental listing, detail and status transitions."""

    @pytest.fixture
    def rental(self, client_for, customer, venue):
        return book(client_for(customer), venue).json()["data"]

    def test_listing_is_scoped_by_role(self, client_for, customer, other_customer, center, other_center, rental):
        assert [r["id"] for r in client_for(customer).get("/api/rentals").json()["data"]] == [rental["id"]]
        assert [r["id"] for r in client_for(center).get("/api/rentals").json()["data"]] == [rental["id"]]
        assert client_for(other_customer).get("/api/rentals").json()["data"] == []
        assert client_for(other_center).get("/api/rentals").json()["data"] == []

    def test_stranger_cannot_read_rental(self, client_for, other_customer, rental):
        response = client_for(other_customer).get(f"/api/rentals/{rental['id']}")
        assert response.status_code == 403

    def test_owner_confirms_then_completes(self, client_for, center, rental):
        client = client_for(center)
        url = f"/api/rentals/{rental['id']}/status"

        assert client.patch(url, {"status": "confirmed"}, format="json").json()["data"]["status"] == "confirmed"
        assert client.patch(url, {"status": "completed"}, format="json").json()["data"]["status"] == "completed"

    def test_pending_cannot_jump_to_completed(self, client_for, center, rental):
        response = client_for(center).patch(
            f"/api/rentals/{rental['id']}/status", {"status": "completed"}, format="json"
        )
        assert response.status_code == 409

    def test_canceled_is_terminal(self, client_for, center, rental):
        client = client_for(center)
        url = f"/api/rentals/{rental['id']}/status"
        client.patch(url, {"status": "canceled"}, format="json")
        assert client.patch(url, {"status": "confirmed"}, format="json").status_code == 409

    def test_customer_may_only_cancel(self, client_for, customer, rental):
        client = client_for(customer)
        url = f"/api/rentals/{rental['id']}/status"
        assert client.patch(url, {"status": "confirmed"}, format="json").status_code == 403
        assert client.patch(url, {"status": "canceled"}, format="json").status_code == 200

    def test_other_center_cannot_change_status(self, client_for, other_center, rental):
        response = client_for(other_center).patch(
            f"/api/rentals/{rental['id']}/status", {"status": "confirmed"}, format="json"
        )
        assert response.status_code == 403

    def test_unknown_status_value(self, client_for, center, rental):
        response = client_for(center).patch(
            f"/api/rentals/{rental['id']}/status", {"status": "archived"}, format="json"
        )
        assert response.status_code == 400

    def test_payment_status_transitions(self, client_for, center, rental):
        client = client_for(center)
        url = f"/api/rentals/{rental['id']}/payment-status"

        assert client.patch(url, {"payment_status": "refunded"}, format="json").status_code == 409
        assert client.patch(url, {"payment_status": "paid"}, format="json").status_code == 200
        response = client.patch(url, {"payment_status": "refunded"}, format="json")
        assert response.json()["data"]["payment_status"] == "refunded"

    def test_customer_cannot_mark_paid(self, client_for, customer, rental):
        response = client_for(customer).patch(
            f"/api/rentals/{rental['id']}/payment-status", {"payment_status": "paid"}, format="json"
        )
        assert response.status_code == 403
