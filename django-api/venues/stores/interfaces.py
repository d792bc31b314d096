"""Store interfaces for venues, rentals and cashiers."""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from venues.domain import Cashier, CashierId, CashierPermissions, Rental, RentalId, Venue, VenueId


class VenueStore(ABC):
    @abstractmethod
    def list_venues(self, owner_id: int | None = None) -> list[Venue]:
        """Return venues of one owner, or every venue when owner_id is None."""
        ...

    @abstractmethod
    def get_venue(self, venue_id: VenueId) -> Venue | None:
        ...

    @abstractmethod
    def create_venue(self, owner_id: int, data: dict) -> Venue:
        ...

    @abstractmethod
    def update_venue(self, venue_id: VenueId, changes: dict) -> Venue:
        ...

    @abstractmethod
    def delete_venue(self, venue_id: VenueId) -> None:
        """Delete a venue.

        Raises:
            VenueInUseError: If rentals reference the venue.
        """
        ...

    @abstractmethod
    def owned_venue_ids(self, owner_id: int) -> set[UUID]:
        ...


class RentalStore(ABC):
    @abstractmethod
    def list_rentals(self, customer_id: int | None = None, owner_id: int | None = None) -> list[Rental]:
        ...

    @abstractmethod
    def get_rental(self, rental_id: RentalId) -> Rental | None:
        ...

    @abstractmethod
    def create_rental(
        self,
        venue_id: VenueId,
        customer_id: int,
        customer_name: str,
        start_time: datetime,
        end_time: datetime,
        total_price: Decimal,
        notes: str,
    ) -> Rental:
        """Insert a pending rental.

        Raises:
            RentalOverlapError: If a pending or confirmed rental of the venue overlaps the range.
        """
        ...

    @abstractmethod
    def transition(self, rental_id: RentalId, field: str, current: str, target: str) -> bool:
        """Set ``field`` to ``target`` only if it still equals ``current``."""
        ...

    @abstractmethod
    def set_payment_session(self, rental_id: RentalId, session_id: str) -> None:
        ...

    @abstractmethod
    def rentals_for_report(
        self, venue_ids: set[UUID] | None, start: datetime | None, end: datetime | None
    ) -> list[Rental]:
        """Rentals starting inside [start, end]; every venue when venue_ids is None."""
        ...


class CashierStore(ABC):
    @abstractmethod
    def list_cashiers(self, owner_id: int | None = None) -> list[Cashier]:
        ...

    @abstractmethod
    def get_cashier(self, cashier_id: CashierId) -> Cashier | None:
        ...

    @abstractmethod
    def exists(self, user_id: int, owner_id: int) -> bool:
        ...

    @abstractmethod
    def create_cashier(
        self, user_id: int, owner_id: int, permissions: CashierPermissions, venue_ids: list[VenueId]
    ) -> Cashier:
        ...

    @abstractmethod
    def update_permissions(self, cashier_id: CashierId, permissions: CashierPermissions) -> Cashier:
        ...

    @abstractmethod
    def replace_venues(self, cashier_id: CashierId, venue_ids: list[VenueId]) -> Cashier:
        """Swap the cashier's venue set in one transaction."""
        ...

    @abstractmethod
    def delete_cashier(self, cashier_id: CashierId) -> None:
        ...
