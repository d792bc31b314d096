"""Django ORM implementations of the venue, rental and cashier stores."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from django.db import transaction
from django.db.models import ProtectedError, Q
from django.utils import timezone

from venues.domain import (
    Cashier,
    CashierId,
    CashierPermissions,
    Rental,
    RentalId,
    RentalOverlapError,
    Venue,
    VenueId,
    VenueInUseError,
)
from venues.models import Cashier as CashierModel
from venues.models import CashierVenue as CashierVenueModel
from venues.models import Rental as RentalModel
from venues.models import Venue as VenueModel
from venues.stores.interfaces import CashierStore, RentalStore, VenueStore

BLOCKING_STATUSES = (RentalModel.Status.PENDING, RentalModel.Status.CONFIRMED)


def venue_to_domain(row: VenueModel) -> Venue:
    return Venue(
        id=VenueId(row.id),
        owner_id=row.owner_id,
        name=row.name,
        description=row.description,
        location=row.location,
        capacity=row.capacity,
        hourly_rate=row.hourly_rate,
        daily_rate=row.daily_rate,
        facilities=tuple(row.facilities or ()),
        availability_hours=row.availability_hours,
        images=tuple(row.images or ()),
        is_active=row.is_active,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def rental_to_domain(row: RentalModel) -> Rental:
    return Rental(
        id=RentalId(row.id),
        venue_id=VenueId(row.venue_id),
        venue_name=row.venue.name,
        venue_owner_id=row.venue.owner_id,
        customer_id=row.customer_id,
        customer_name=row.customer_name,
        start_time=row.start_time,
        end_time=row.end_time,
        total_price=row.total_price,
        status=row.status,
        payment_status=row.payment_status,
        notes=row.notes,
        created_at=row.created_at,
        payment_session_id=row.payment_session_id,
    )


def cashier_to_domain(row: CashierModel) -> Cashier:
    return Cashier(
        id=CashierId(row.id),
        user_id=row.user_id,
        owner_id=row.owner_id,
        email=row.user.email,
        name=row.user.display_name,
        permissions=CashierPermissions.from_storage(row.permissions),
        venue_ids=tuple(VenueId(link.venue_id) for link in row.venue_links.all()),
        created_at=row.created_at,
    )


class DjangoVenueStore(VenueStore):
    def list_venues(self, owner_id: int | None = None) -> list[Venue]:
        qs = VenueModel.objects.all()
        if owner_id is not None:
            qs = qs.filter(owner_id=owner_id)
        return [venue_to_domain(row) for row in qs]

    def get_venue(self, venue_id: VenueId) -> Venue | None:
        row = VenueModel.objects.filter(pk=venue_id.value).first()
        return venue_to_domain(row) if row else None

    def create_venue(self, owner_id: int, data: dict) -> Venue:
        row = VenueModel.objects.create(owner_id=owner_id, **data)
        return venue_to_domain(row)

    def update_venue(self, venue_id: VenueId, changes: dict) -> Venue:
        row = VenueModel.objects.get(pk=venue_id.value)
        for field, value in changes.items():
            setattr(row, field, value)
        row.save(update_fields=[*changes, "updated_at"])
        return venue_to_domain(row)

    def delete_venue(self, venue_id: VenueId) -> None:
        try:
            with transaction.atomic():
                VenueModel.objects.filter(pk=venue_id.value).delete()
        except ProtectedError:
            raise VenueInUseError()

    def owned_venue_ids(self, owner_id: int) -> set[UUID]:
        return set(VenueModel.objects.filter(owner_id=owner_id).values_list("id", flat=True))


class DjangoRentalStore(RentalStore):
    def _queryset(self):
        return RentalModel.objects.select_related("venue")

    def list_rentals(self, customer_id: int | None = None, owner_id: int | None = None) -> list[Rental]:
        qs = self._queryset()
        if customer_id is not None:
            qs = qs.filter(customer_id=customer_id)
        if owner_id is not None:
            qs = qs.filter(venue__owner_id=owner_id)
        return [rental_to_domain(row) for row in qs]

    def get_rental(self, rental_id: RentalId) -> Rental | None:
        row = self._queryset().filter(pk=rental_id.value).first()
        return rental_to_domain(row) if row else None

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
        with transaction.atomic():
            # Serializes bookings of one venue on backends with row locks.
            VenueModel.objects.select_for_update().filter(pk=venue_id.value).first()
            overlapping = RentalModel.objects.filter(
                venue_id=venue_id.value,
                status__in=BLOCKING_STATUSES,
                start_time__lt=end_time,
                end_time__gt=start_time,
            )
            if overlapping.exists():
                raise RentalOverlapError()
            row = RentalModel.objects.create(
                venue_id=venue_id.value,
                customer_id=customer_id,
                customer_name=customer_name,
                start_time=start_time,
                end_time=end_time,
                total_price=total_price,
                notes=notes,
            )
        return self.get_rental(RentalId(row.pk))

    def transition(self, rental_id: RentalId, field: str, current: str, target: str) -> bool:
        updated = RentalModel.objects.filter(pk=rental_id.value, **{field: current}).update(
            **{field: target, "updated_at": timezone.now()}
        )
        return updated == 1

    def set_payment_session(self, rental_id: RentalId, session_id: str) -> None:
        RentalModel.objects.filter(pk=rental_id.value).update(payment_session_id=session_id)

    def rentals_for_report(
        self, venue_ids: set[UUID] | None, start: datetime | None, end: datetime | None
    ) -> list[Rental]:
        qs = self._queryset()
        if venue_ids is not None:
            qs = qs.filter(venue_id__in=venue_ids)
        if start is not None:
            qs = qs.filter(start_time__gte=start)
        if end is not None:
            qs = qs.filter(start_time__lte=end)
        return [rental_to_domain(row) for row in qs.order_by("start_time")]


class DjangoCashierStore(CashierStore):
    def _queryset(self):
        return CashierModel.objects.select_related("user").prefetch_related("venue_links")

    def list_cashiers(self, owner_id: int | None = None) -> list[Cashier]:
        qs = self._queryset()
        if owner_id is not None:
            qs = qs.filter(owner_id=owner_id)
        return [cashier_to_domain(row) for row in qs]

    def get_cashier(self, cashier_id: CashierId) -> Cashier | None:
        row = self._queryset().filter(pk=cashier_id.value).first()
        return cashier_to_domain(row) if row else None

    def exists(self, user_id: int, owner_id: int) -> bool:
        return CashierModel.objects.filter(user_id=user_id, owner_id=owner_id).exists()

    def create_cashier(
        self, user_id: int, owner_id: int, permissions: CashierPermissions, venue_ids: list[VenueId]
    ) -> Cashier:
        with transaction.atomic():
            row = CashierModel.objects.create(
                user_id=user_id, owner_id=owner_id, permissions=permissions.to_storage()
            )
            CashierVenueModel.objects.bulk_create(
                CashierVenueModel(cashier=row, venue_id=venue_id.value) for venue_id in set(venue_ids)
            )
        return self.get_cashier(CashierId(row.pk))

    def update_permissions(self, cashier_id: CashierId, permissions: CashierPermissions) -> Cashier:
        CashierModel.objects.filter(pk=cashier_id.value).update(permissions=permissions.to_storage())
        return self.get_cashier(cashier_id)

    def replace_venues(self, cashier_id: CashierId, venue_ids: list[VenueId]) -> Cashier:
        with transaction.atomic():
            CashierVenueModel.objects.filter(cashier_id=cashier_id.value).delete()
            CashierVenueModel.objects.bulk_create(
                CashierVenueModel(cashier_id=cashier_id.value, venue_id=venue_id.value)
                for venue_id in set(venue_ids)
            )
        return self.get_cashier(cashier_id)

    def delete_cashier(self, cashier_id: CashierId) -> None:
        CashierModel.objects.filter(pk=cashier_id.value).delete()
