"""Venue catalog and rental lifecycle."""

import logging
import math
from datetime import datetime, timedelta
from decimal import Decimal

from django.utils import timezone

from common.actors import Actor
from common.errors import AccessDeniedError, ErrorCode, InvalidIdError, ValidationError
from common.permissions import CENTER
from venues.domain import (
    InvalidStatusTransitionError,
    Rental,
    RentalAlreadyPaidError,
    RentalId,
    RentalNotFoundError,
    Venue,
    VenueId,
    VenueNotFoundError,
    VenueNotOwnedError,
)
from venues.stores.interfaces import RentalStore, VenueStore

logger = logging.getLogger(__name__)

DAILY_RATE_MULTIPLIER = 8

STATUS_TRANSITIONS = {
    "pending": {"confirmed", "canceled"},
    "confirmed": {"completed", "canceled"},
}

PAYMENT_TRANSITIONS = {
    "unpaid": {"paid"},
    "paid": {"refunded"},
}


def parse_venue_id(venue_id: str) -> VenueId:
    try:
        return VenueId.from_string(venue_id)
    except ValueError:
        raise InvalidIdError("venue")


def quote_rental_price(venue: Venue, start_time: datetime, end_time: datetime) -> Decimal:
    """Hourly rate per started hour, or daily rate per started day for bookings of 24 hours or more."""
    seconds = (end_time - start_time).total_seconds()
    if seconds >= timedelta(days=1).total_seconds() and venue.daily_rate is not None:
        return venue.daily_rate * math.ceil(seconds / 86400)
    return venue.hourly_rate * math.ceil(seconds / 3600)


class VenueService:
    def __init__(self, store: VenueStore) -> None:
        self._store = store

    def list_venues(self, actor: Actor) -> list[Venue]:
        return self._store.list_venues(None if actor.is_admin else actor.user_id)

    def get_venue(self, actor: Actor, venue_id: str) -> Venue:
        """Centers see their own venues, admins any, everyone else active venues only."""
        venue = self._get(venue_id)
        if actor.is_admin or venue.owner_id == actor.user_id:
            return venue
        if actor.role == CENTER:
            raise VenueNotOwnedError()
        if not venue.is_active:
            raise VenueNotFoundError()
        return venue

    def create_venue(self, actor: Actor, data: dict) -> Venue:
        data = dict(data)
        if data.get("daily_rate") is None:
            data["daily_rate"] = data["hourly_rate"] * DAILY_RATE_MULTIPLIER
        venue = self._store.create_venue(actor.user_id, data)
        logger.info("Venue %s created by user %s", venue.id, actor.user_id)
        return venue

    def update_venue(self, actor: Actor, venue_id: str, changes: dict) -> Venue:
        venue = self._owned(actor, venue_id)
        if not changes:
            return venue
        return self._store.update_venue(venue.id, changes)

    def delete_venue(self, actor: Actor, venue_id: str) -> None:
        venue = self._owned(actor, venue_id)
        self._store.delete_venue(venue.id)
        logger.info("Venue %s deleted by user %s", venue.id, actor.user_id)

    def _get(self, venue_id: str) -> Venue:
        venue = self._store.get_venue(parse_venue_id(venue_id))
        if venue is None:
            raise VenueNotFoundError()
        return venue

    def _owned(self, actor: Actor, venue_id: str) -> Venue:
        venue = self._get(venue_id)
        if not actor.owns(venue.owner_id):
            raise VenueNotOwnedError()
        return venue


class RentalService:
    """Venue bookings and their status state machine."""

    def __init__(self, rental_store: RentalStore, venue_store: VenueStore) -> None:
        self._rentals = rental_store
        self._venues = venue_store

    def list_rentals(self, actor: Actor) -> list[Rental]:
        if actor.is_admin:
            return self._rentals.list_rentals()
        if actor.role == CENTER:
            return self._rentals.list_rentals(owner_id=actor.user_id)
        return self._rentals.list_rentals(customer_id=actor.user_id)

    def get_rental(self, actor: Actor, rental_id: str) -> Rental:
        rental = self._get(rental_id)
        if not (actor.owns(rental.customer_id) or actor.owns(rental.venue_owner_id)):
            raise AccessDeniedError("You do not have access to this rental")
        return rental

    def create_rental(
        self,
        actor: Actor,
        venue_id: str,
        start_time: datetime,
        end_time: datetime,
        customer_name: str,
        notes: str = "",
    ) -> Rental:
        """Book a venue for [start_time, end_time).

        Raises:
            VenueNotFoundError: If the venue does not exist or is inactive.
            ValidationError: If the range is empty or starts in the past.
            RentalOverlapError: If the venue is already booked in that range.
        """
        venue = self._venues.get_venue(parse_venue_id(venue_id))
        if venue is None or not venue.is_active:
            raise VenueNotFoundError()
        if end_time <= start_time:
            raise ValidationError(code=ErrorCode.INVALID_INPUT, message="End time must be after start time")
        if start_time < timezone.now():
            raise ValidationError(code=ErrorCode.INVALID_INPUT, message="Rentals cannot start in the past")
        rental = self._rentals.create_rental(
            venue.id,
            actor.user_id,
            customer_name,
            start_time,
            end_time,
            quote_rental_price(venue, start_time, end_time),
            notes,
        )
        logger.info("Rental %s of venue %s booked by user %s", rental.id, venue.id, actor.user_id)
        return rental

    def update_status(self, actor: Actor, rental_id: str, target: str) -> Rental:
        """Move a rental through pending -> confirmed -> completed, or cancel it.

        The venue owner and admins may apply any allowed transition; the
        customer may only cancel their own pending rental.
        """
        rental = self._get(rental_id)
        customer_cancel = (
            actor.user_id == rental.customer_id and rental.status == "pending" and target == "canceled"
        )
        if not (actor.owns(rental.venue_owner_id) or customer_cancel):
            raise AccessDeniedError("Only the venue owner can change this rental")
        return self._transition(rental, "status", STATUS_TRANSITIONS, target)

    def update_payment_status(self, actor: Actor, rental_id: str, target: str) -> Rental:
        rental = self._get(rental_id)
        if not actor.owns(rental.venue_owner_id):
            raise AccessDeniedError("Only the venue owner can change payment status")
        return self._transition(rental, "payment_status", PAYMENT_TRANSITIONS, target)

    def rental_for_payment(self, actor: Actor, rental_id: str) -> Rental:
        """Return a rental the caller may pay for; already paid rentals are rejected."""
        rental = self.get_rental(actor, rental_id)
        if rental.payment_status != "unpaid":
            raise RentalAlreadyPaidError()
        if rental.status == "canceled":
            raise InvalidStatusTransitionError("payment_status", "unpaid", "paid")
        return rental

    def attach_payment_session(self, rental: Rental, session_id: str) -> None:
        self._rentals.set_payment_session(rental.id, session_id)

    def mark_paid(self, rental_id: str) -> bool:
        """Record a verified payment. Returns False if the rental was not unpaid."""
        try:
            parsed = RentalId.from_string(rental_id)
        except ValueError:
            return False
        paid = self._rentals.transition(parsed, "payment_status", "unpaid", "paid")
        if paid:
            logger.info("Rental %s marked paid", rental_id)
        return paid

    def _get(self, rental_id: str) -> Rental:
        try:
            parsed = RentalId.from_string(rental_id)
        except ValueError:
            raise InvalidIdError("rental")
        rental = self._rentals.get_rental(parsed)
        if rental is None:
            raise RentalNotFoundError()
        return rental

    def _transition(self, rental: Rental, field: str, allowed: dict[str, set[str]], target: str) -> Rental:
        current = getattr(rental, field)
        if target not in allowed.get(current, set()):
            raise InvalidStatusTransitionError(field, current, target)
        if not self._rentals.transition(rental.id, field, current, target):
            latest = self._rentals.get_rental(rental.id)
            raise InvalidStatusTransitionError(field, getattr(latest, field, current), target)
        logger.info("Rental %s %s changed from %s to %s", rental.id, field, current, target)
        return self._rentals.get_rental(rental.id)
