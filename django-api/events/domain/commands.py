"""Write-side inputs for the event catalog."""

from dataclasses import dataclass
from datetime import datetime

from events.domain.models import AddOn, Speaker, Workshop
from events.domain.value_objects import Capacity, Money


@dataclass(frozen=True)
class NewTicketType:
    name: str
    price: Money
    quantity: Capacity
    description: str = ""
    features: dict | None = None


@dataclass(frozen=True)
class NewEvent:
    """An event to publish together with its ticket tiers."""

    title: str
    description: str
    location: str
    category: str
    event_type: str
    start_date: datetime
    ticket_types: tuple[NewTicketType, ...]
    end_date: datetime | None = None
    image_url: str | None = None
    featured: bool = False
    tags: tuple[str, ...] = ()
    seating_map: dict | None = None
    speakers: tuple[Speaker, ...] = ()
    workshops: tuple[Workshop, ...] = ()
    add_ons: tuple[AddOn, ...] = ()


UPDATABLE_EVENT_FIELDS = frozenset(
    {
        "title",
        "description",
        "location",
        "category",
        "event_type",
        "start_date",
        "end_date",
        "image_url",
        "featured",
        "tags",
        "seating_map",
    }
)
