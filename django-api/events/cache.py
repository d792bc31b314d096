"""Cache keys for catalog reads."""

from common.cache import invalidate, invalidate_namespace

EVENT_LIST_NAMESPACE = "events:list"


def event_detail_key(event_id) -> str:
    return f"events:{event_id}"


def invalidate_event(event_id) -> None:
    """Drop the detail entry for one event and every cached listing."""
    invalidate(event_detail_key(event_id))
    invalidate_namespace(EVENT_LIST_NAMESPACE)
