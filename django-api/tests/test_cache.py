"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

import pytest
from django.core.cache import cache

from common.cache import TTL, get_or_fetch, invalidate_namespace, namespaced_key
from events.cache import EVENT_LIST_NAMESPACE, event_detail_key
from events.models import Speaker


class TestReadThrough:
    def test_value_is_fetched_once(self):
        calls = []

        def fetch():
            calls.append(1)
            return {"answer": 42}

        assert get_or_fetch("k", fetch, TTL.SHORT) == {"answer": 42}
        assert get_or_fetch("k", fetch, TTL.SHORT) == {"answer": 42}
        assert len(calls) == 1

    def test_none_is_not_cached(self):
        calls = []

        def fetch():
            calls.append(1)

        get_or_fetch("missing", fetch)
        get_or_fetch("missing", fetch)
        assert len(calls) == 2

    def test_namespace_bump_changes_keys(self):
        before = namespaced_key("things", {"page": 1})
        assert namespaced_key("things", {"page": 1}) == before
        invalidate_namespace("things")
        assert namespaced_key("things", {"page": 1}) != before

    def test_params_order_does_not_matter(self):
        assert namespaced_key("things", {"a": 1, "b": 2}) == namespaced_key("things", {"b": 2, "a": 1})


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_event_list_is_served_from_cache(self, api_client, make_event):
        make_event("Cached")
        assert len(api_client.get("/api/events").json()["data"]) == 1

        list_key = namespaced_key(EVENT_LIST_NAMESPACE, {"sort": "date-asc", "include_past": False})
        cache.set(list_key, [{"title": "From cache"}], TTL.MEDIUM)

        assert api_client.get("/api/events").json()["data"] == [{"title": "From cache"}]

    def test_event_save_invalidates_list_cache(self, api_client, make_event):
        """Saving an event invalidates every cached listing."""
        event = make_event("Original")
        api_client.get("/api/events")

        event.title = "Renamed"
        event.save()

        assert [e["title"] for e in api_client.get("/api/events").json()["data"]] == ["Renamed"]

    def test_event_save_invalidates_detail_cache(self, api_client, event):
        """Saving an event drops the events:{id} key."""
        api_client.get(f"/api/events/{event.pk}")
        assert cache.get(event_detail_key(event.pk)) is not None

        event.featured = True
        event.save()

        assert cache.get(event_detail_key(event.pk)) is None

    def test_association_change_invalidates_detail_cache(self, api_client, event):
        api_client.get(f"/api/events/{event.pk}")
        Speaker.objects.create(event=event, name="Late addition")
        assert cache.get(event_detail_key(event.pk)) is None

    def test_purchase_invalidates_after_commit(
        self, api_client, client_for, customer, event, django_capture_on_commit_callbacks
    ):
        """Inventory updates bypass model signals; the store invalidates on commit."""
        api_client.get(f"/api/events/{event.pk}")
        general = event.ticket_types.get(name="General")

        with django_capture_on_commit_callbacks(execute=True):
            client_for(customer).post(
                "/api/tickets/purchase",
                {"event_id": str(event.pk), "tickets": [{"ticket_type_id": str(general.pk), "quantity": 4}]},
                format="json",
            )

        detail = api_client.get(f"/api/events/{event.pk}").json()["data"]
        available = {tt["name"]: tt["available_quantity"] for tt in detail["ticket_types"]}
        assert available["General"] == 96

    def test_uppercase_id_shares_the_detail_entry(
        self, api_client, client_for, customer, event, django_capture_on_commit_callbacks
    ):
        url = f"/api/events/{str(event.pk).upper()}"
        api_client.get(url)
        general = event.ticket_types.get(name="General")

        with django_capture_on_commit_callbacks(execute=True):
            client_for(customer).post(
                "/api/tickets/purchase",
                {"event_id": str(event.pk), "tickets": [{"ticket_type_id": str(general.pk), "quantity": 7}]},
                format="json",
            )

        detail = api_client.get(url).json()["data"]
        available = {tt["name"]: tt["available_quantity"] for tt in detail["ticket_types"]}
        assert available["General"] == 93
