"""Integration tests for subscription plans and usage accounting.

Run with: pytest tests/test_subscriptions.py -v
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from subscriptions.models import Subscription as SubscriptionModel
from subscriptions.models import SubscriptionPlan as PlanModel


@pytest.fixture
def make_plan():
    def _make(name: str = "Starter", plan_type: str = "eventManager", **fields):
        return PlanModel.objects.create(
            name=name,
            type=plan_type,
            price=fields.pop("price", Decimal("25.00")),
            max_events_allowed=fields.pop("max_events_allowed", 3),
            service_fee_percentage=fields.pop("service_fee_percentage", Decimal("5.00")),
            **fields,
        )

    return _make


@pytest.fixture
def plan(make_plan):
    return make_plan()


def subscribe(client, plan, session_id: str = "sess_sub"):
    return client.post(
        "/api/subscriptions", {"plan_id": str(plan.pk), "payment_session_id": session_id}, format="json"
    )


@pytest.mark.django_db
class TestPlans:
    """Tests for GET /api/subscriptions/plans"""

    def test_lists_active_plans(self, api_client, make_plan):
        make_plan("Starter")
        make_plan("Venue Pro", plan_type="center")
        make_plan("Retired", is_active=False)

        response = api_client.get("/api/subscriptions/plans")

        assert response.status_code == 200
        assert {p["name"] for p in response.json()["data"]} == {"Starter", "Venue Pro"}

    def test_type_filter(self, api_client, make_plan):
        make_plan("Starter")
        make_plan("Venue Pro", plan_type="center", max_events_allowed=0)

        data = api_client.get("/api/subscriptions/plans", {"type": "center"}).json()["data"]

        assert [p["name"] for p in data] == ["Venue Pro"]
        assert data[0]["unlimited_events"] is True

    def test_unknown_type_rejected(self, api_client):
        assert api_client.get("/api/subscriptions/plans", {"type": "gold"}).status_code == 400


@pytest.mark.django_db
class TestSubscribe:
    """Tests for POST /api/subscriptions and GET /api/subscriptions/me"""

    def test_no_subscription(self, client_for, manager):
        response = client_for(manager).get("/api/subscriptions/me")
        assert response.status_code == 200
        assert response.json()["data"] is None
        assert response.json()["description"] == "No active subscription"

    def test_paid_session_activates_plan(self, client_for, manager, plan, gateway):
        gateway.add_session("sess_sub", status="paid")
        client = client_for(manager)

        response = subscribe(client, plan)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "active"
        assert data["plan"]["id"] == str(plan.pk)
        assert data["events_remaining"] == 3
        assert client.get("/api/subscriptions/me").json()["data"]["id"] == data["id"]

    def test_new_subscription_replaces_active_one(self, client_for, manager, make_plan, gateway):
        gateway.add_session("sess_a", status="paid")
        gateway.add_session("sess_b", status="paid")
        client = client_for(manager)
        subscribe(client, make_plan("Starter"), "sess_a")
        subscribe(client, make_plan("Growth"), "sess_b")

        statuses = sorted(SubscriptionModel.objects.values_list("status", flat=True))

        assert statuses == ["active", "cancelled"]
        assert client.get("/api/subscriptions/me").json()["data"]["plan"]["name"] == "Growth"

    def test_unpaid_session_rejected(self, client_for, manager, plan, gateway):
        gateway.add_session("sess_sub", status="unpaid")
        response = subscribe(client_for(manager), plan)
        assert response.status_code == 400
        assert not SubscriptionModel.objects.exists()

    def test_session_cannot_be_reused(self, client_for, manager, other_manager, plan, gateway):
        gateway.add_session("sess_sub", status="paid")
        subscribe(client_for(manager), plan)
        response = subscribe(client_for(other_manager), plan)
        assert response.status_code == 409

    def test_plan_for_other_role_rejected(self, client_for, center, plan, gateway):
        gateway.add_session("sess_sub", status="paid")
        response = subscribe(client_for(center), plan)
        assert response.status_code == 400
        assert gateway.lookups == []

    def test_unknown_plan(self, client_for, manager, make_plan, gateway):
        retired = make_plan("Retired", is_active=False)
        assert subscribe(client_for(manager), retired).status_code == 404

    def test_customer_cannot_subscribe(self, client_for, customer, plan):
        assert subscribe(client_for(customer), plan).status_code == 403


@pytest.mark.django_db
class TestUsageAccounting:
    @pytest.fixture
    def subscription(self, manager, plan):
        now = timezone.now()
        return SubscriptionModel.objects.create(
            user=manager,
            plan=plan,
            status=SubscriptionModel.Status.ACTIVE,
            start_date=now - timedelta(days=1),
            end_date=now + timedelta(days=29),
        )

    def test_ticket_sale_records_usage_and_fee(self, client_for, customer, event, subscription):
        general = event.ticket_types.get(name="General")

        response = client_for(customer).post(
            "/api/tickets/purchase",
            {"event_id": str(event.pk), "tickets": [{"ticket_type_id": str(general.pk), "quantity": 2}]},
            format="json",
        )

        assert response.status_code == 201
        subscription.refresh_from_db()
        assert subscription.tickets_sold == 2
        assert subscription.fees_collected == Decimal("1.00")

    def test_expired_subscription_is_not_active(self, client_for, manager, subscription):
        SubscriptionModel.objects.filter(pk=subscription.pk).update(end_date=timezone.now() - timedelta(days=1))
        assert client_for(manager).get("/api/subscriptions/me").json()["data"] is None
