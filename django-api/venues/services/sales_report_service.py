"""Revenue and booking statistics for a center's venues.

Reports never fail: a bad venue id, a venue owned by someone else or a
database error yields a zero-valued report that explains why.
"""

import logging
from datetime import date, datetime, time

from django.db import DatabaseError
from django.utils import timezone

from common.actors import Actor
from venues.domain import SalesReport, VenueId
from venues.stores.interfaces import RentalStore, VenueStore

logger = logging.getLogger(__name__)


class SalesReportService:
    def __init__(self, rental_store: RentalStore, venue_store: VenueStore) -> None:
        self._rentals = rental_store
        self._venues = venue_store

    def report(
        self,
        actor: Actor,
        venue_id: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> SalesReport:
        filters = {"venue_id": venue_id, "start_date": start_date, "end_date": end_date}
        try:
            if venue_id:
                try:
                    parsed = VenueId.from_string(venue_id)
                except ValueError:
                    return SalesReport.empty("Invalid venue ID", **filters)
                venue = self._venues.get_venue(parsed)
                if venue is None:
                    return SalesReport.empty("Venue not found", **filters)
                if not actor.owns(venue.owner_id):
                    logger.warning("User %s requested sales for venue %s they do not own", actor.user_id, venue_id)
                    return SalesReport.empty("You do not have access to this venue", **filters)
                venue_ids = {venue.id.value}
            elif actor.is_admin:
                venue_ids = None
            else:
                venue_ids = self._venues.owned_venue_ids(actor.user_id)
                if not venue_ids:
                    return SalesReport.empty("No venues found", **filters)
            rentals = self._rentals.rentals_for_report(venue_ids, _day_start(start_date), _day_end(end_date))
        except DatabaseError:
            logger.exception("Sales report for user %s failed", actor.user_id)
            return SalesReport.empty("Sales data is temporarily unavailable", **filters)
        return SalesReport.from_rentals(rentals, **filters)


def _day_start(value: date | None) -> datetime | None:
    if value is None:
        return None
    return timezone.make_aware(datetime.combine(value, time.min))


def _day_end(value: date | None) -> datetime | None:
    if value is None:
        return None
    return timezone.make_aware(datetime.combine(value, time.max))
