"""Tests for checkout sessions, the payment webhook and the gateway client.

Run with: pytest tests/test_payments.py -v
"""

import json
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
import requests
from django.utils import timezone

from common.errors import UpstreamFailureError
from payments.gateway import CheckoutItem, ThawaniGateway
from venues.models import Rental as RentalModel


@pytest.fixture
def rental(customer, venue):
    start = timezone.now() + timedelta(days=5)
    return RentalModel.objects.create(
        venue=venue,
        customer=customer,
        customer_name="Alice",
        start_time=start,
        end_time=start + timedelta(hours=2),
        total_price="40.00",
    )


@pytest.mark.django_db
class TestTicketCheckout:
    """Tests for POST /api/payments/tickets"""

    def test_session_is_priced_from_the_catalog(self, client_for, customer, event, gateway):
        vip = event.ticket_types.get(name="VIP")
        response = client_for(customer).post(
            "/api/payments/tickets",
            {"event_id": str(event.pk), "items": [{"ticket_type_id": str(vip.pk), "quantity": 2, "subtotal": 1}]},
            format="json",
        )

        assert response.status_code == 200
        assert response.json()["data"]["checkout_url"].startswith("https://pay.test/pay/")
        [created] = gateway.created
        [item] = created["items"]
        assert (item.quantity, item.unit_amount) == (2, 50000)
        assert created["metadata"]["purchase_type"] == "ticket"
        assert created["metadata"]["event_id"] == str(event.pk)
        assert json.loads(created["metadata"]["items"]) == {str(vip.pk): 2}

    def test_free_tier_costs_one_baisa(self, client_for, customer, make_event, gateway):
        event = make_event(ticket_types=[("Free", "0.00", 10)])
        free = event.ticket_types.get()
        client_for(customer).post(
            "/api/payments/tickets",
            {"event_id": str(event.pk), "items": [{"ticket_type_id": str(free.pk), "quantity": 1}]},
            format="json",
        )
        assert gateway.created[0]["items"][0].unit_amount == 1

    def test_more_than_available(self, client_for, customer, event, gateway):
        vip = event.ticket_types.get(name="VIP")
        response = client_for(customer).post(
            "/api/payments/tickets",
            {"event_id": str(event.pk), "items": [{"ticket_type_id": str(vip.pk), "quantity": 6}]},
            format="json",
        )
        assert response.status_code == 409
        assert gateway.created == []


@pytest.mark.django_db
class TestRentalCheckout:
    """Tests for POST /api/payments/rentals"""

    def test_session_attached_to_rental(self, client_for, customer, rental, gateway):
        response = client_for(customer).post("/api/payments/rentals", {"rental_id": str(rental.pk)}, format="json")

        assert response.status_code == 200
        session_id = response.json()["data"]["session_id"]
        rental.refresh_from_db()
        assert rental.payment_session_id == session_id
        assert gateway.created[0]["items"][0].unit_amount == 40000
        assert gateway.created[0]["metadata"] == {
            "purchase_type": "rental",
            "user_id": str(rental.customer_id),
            "rental_id": str(rental.pk),
        }

    def test_paid_rental_rejected(self, client_for, customer, rental):
        RentalModel.objects.filter(pk=rental.pk).update(payment_status="paid")
        response = client_for(customer).post("/api/payments/rentals", {"rental_id": str(rental.pk)}, format="json")
        assert response.status_code == 409

    def test_stranger_cannot_pay(self, client_for, other_customer, rental):
        response = client_for(other_customer).post(
            "/api/payments/rentals", {"rental_id": str(rental.pk)}, format="json"
        )
        assert response.status_code == 403


@pytest.mark.django_db
class TestPaymentStatusAndWebhook:
    def test_status_is_public(self, api_client, gateway):
        gateway.add_session("sess_ok", status="paid")
        response = api_client.get("/api/payments/status/sess_ok")
        assert response.json()["data"] == {"session_id": "sess_ok", "payment_status": "paid"}
        assert api_client.get("/api/payments/status/unknown").json()["data"]["payment_status"] == "unpaid"

    def test_other_events_ignored(self, api_client, gateway):
        response = api_client.post(
            "/api/payments/webhook", {"event": "payment_failed", "data": {"session_id": "x"}}, format="json"
        )
        assert response.status_code == 200
        assert response.json()["data"]["action"] == "ignored"
        assert gateway.lookups == []

    def test_completed_rental_payment_marks_rental_paid(self, api_client, rental, gateway):
        gateway.add_session("sess_rent", status="paid", purchase_type="rental", rental_id=str(rental.pk))

        response = api_client.post(
            "/api/payments/webhook", {"event": "payment_completed", "data": {"session_id": "sess_rent"}}, format="json"
        )

        assert response.json()["data"]["action"] == "rental_paid"
        rental.refresh_from_db()
        assert rental.payment_status == "paid"

    def test_repeated_delivery_is_harmless(self, api_client, rental, gateway):
        gateway.add_session("sess_rent", status="paid", purchase_type="rental", rental_id=str(rental.pk))
        body = {"event": "payment_completed", "data": {"session_id": "sess_rent"}}

        api_client.post("/api/payments/webhook", body, format="json")
        response = api_client.post("/api/payments/webhook", body, format="json")

        assert response.status_code == 200
        assert response.json()["data"]["action"] == "rental_unchanged"

    def test_payload_is_not_trusted(self, api_client, rental, gateway):
        """The gateway says unpaid, so the rental stays unpaid whatever the payload claims."""
        gateway.add_session("sess_rent", status="unpaid", purchase_type="rental", rental_id=str(rental.pk))

        api_client.post(
            "/api/payments/webhook",
            {"event": "payment_completed", "data": {"session_id": "sess_rent", "payment_status": "paid"}},
            format="json",
        )

        rental.refresh_from_db()
        assert rental.payment_status == "unpaid"

    def test_ticket_session_acknowledged(self, api_client, gateway):
        gateway.add_session("sess_tix", status="paid", purchase_type="ticket")
        response = api_client.post(
            "/api/payments/webhook", {"event": "payment_completed", "data": {"session_id": "sess_tix"}}, format="json"
        )
        assert response.json()["data"]["action"] == "ticket_acknowledged"

    def test_missing_session_id(self, api_client):
        response = api_client.post("/api/payments/webhook", {"event": "payment_completed"}, format="json")
        assert response.status_code == 400


def _response(payload=None, status: int = 200, invalid_json: bool = False) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    if invalid_json:
        response.json.side_effect = ValueError("not json")
    else:
        response.json.return_value = payload
    return response


class TestThawaniGateway:
    """The HTTP client, with the requests session mocked out."""

    @pytest.fixture
    def http(self):
        session = MagicMock(spec=requests.Session)
        session.headers = {}
        return session

    @pytest.fixture
    def client(self, http):
        return ThawaniGateway(
            api_key="sk_test",
            public_key="pk_test",
            base_url="https://checkout.test/api/v1",
            checkout_url="https://checkout.test/",
            success_url="https://shop.test/success",
            cancel_url="https://shop.test/cancel",
            timeout=5,
            session=http,
        )

    def test_api_key_header(self, client, http):
        assert http.headers["thawani-api-key"] == "sk_test"

    def test_create_session(self, client, http):
        http.request.return_value = _response({"data": {"session_id": "cs_1"}})
        long_name = "A" * 60

        session = client.create_session("ref-1", [CheckoutItem(long_name, 2, 1500)], {"purchase_type": "ticket"})

        assert session.session_id == "cs_1"
        assert session.checkout_url == "https://checkout.test/pay/cs_1?key=pk_test"
        method, url = http.request.call_args.args
        payload = http.request.call_args.kwargs["json"]
        assert (method, url) == ("POST", "https://checkout.test/api/v1/checkout/session")
        assert http.request.call_args.kwargs["timeout"] == 5
        assert payload["products"] == [{"name": "A" * 40, "quantity": 2, "unit_amount": 1500}]
        assert payload["client_reference_id"] == "ref-1"

    def test_get_session(self, client, http):
        http.request.return_value = _response(
            {"data": {"session_id": "cs_1", "payment_status": "paid", "total_amount": 3000, "metadata": None}}
        )
        session = client.get_session("cs_1")
        assert session.is_paid
        assert session.total_amount == 3000
        assert session.metadata == {}
        assert client.check_payment_status("cs_1") == "paid"

    def test_http_error_becomes_upstream_failure(self, client, http):
        http.request.return_value = _response(status=502)
        with pytest.raises(UpstreamFailureError):
            client.get_session("cs_1")

    def test_timeout_becomes_upstream_failure(self, client, http):
        http.request.side_effect = requests.Timeout("slow")
        with pytest.raises(UpstreamFailureError):
            client.get_session("cs_1")

    def test_invalid_json_becomes_upstream_failure(self, client, http):
        http.request.return_value = _response(invalid_json=True)
        with pytest.raises(UpstreamFailureError):
            client.get_session("cs_1")

    def test_missing_session_id_is_upstream_failure(self, client, http):
        http.request.return_value = _response({"data": {}})
        with pytest.raises(UpstreamFailureError):
            client.create_session("ref", [CheckoutItem("x", 1, 1)], {})
