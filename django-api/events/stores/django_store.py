"""Django ORM implementations of the event and ticket stores."""

import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import DecimalField, F, Min, Q, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from events.cache import invalidate_event
from events.domain import (
    AddOn,
    Attendee,
    Capacity,
    Event,
    EventId,
    EventQuery,
    Money,
    NewEvent,
    Order,
    PaymentSessionUsedError,
    SoldOutError,
    Speaker,
    Ticket,
    TicketId,
    TicketType,
    TicketTypeId,
    Workshop,
)
from events.models import Event as EventModel
from events.models import EventAddOn as EventAddOnModel
from events.models import Speaker as SpeakerModel
from events.models import Ticket as TicketModel
from events.models import TicketType as TicketTypeModel
from events.models import Workshop as WorkshopModel
from events.stores.interfaces import EventStore, TicketStore

logger = logging.getLogger(__name__)

# Events are priced by their cheapest ticket type; events without tiers count as free.
PRICE_FILTERS = {
    "free": Q(min_price=0),
    "paid": Q(min_price__gt=0),
    "under-25": Q(min_price__lt=25),
    "25-to-50": Q(min_price__gte=25, min_price__lte=50),
    "50-to-100": Q(min_price__gt=50, min_price__lte=100),
    "over-100": Q(min_price__gt=100),
}

ORDERINGS = {
    "date-asc": ("start_date", "title"),
    "date-desc": ("-start_date", "title"),
    "price-asc": ("min_price", "start_date"),
    "price-desc": ("-min_price", "start_date"),
    "popularity-desc": ("-tickets_sold", "start_date"),
}


def ticket_type_to_domain(row: TicketTypeModel) -> TicketType:
    return TicketType(
        id=TicketTypeId(row.id),
        event_id=EventId(row.event_id),
        name=row.name,
        description=row.description,
        price=Money(row.price),
        quantity=Capacity(row.quantity),
        available_quantity=Capacity(row.available_quantity),
        features=row.features,
    )


def event_to_domain(row: EventModel, with_details: bool = False) -> Event:
    details = {}
    if with_details:
        details = {
            "ticket_types": tuple(ticket_type_to_domain(tt) for tt in row.ticket_types.all()),
            "speakers": tuple(
                Speaker(name=s.name, bio=s.bio, profile_image=s.profile_image) for s in row.speakers.all()
            ),
            "workshops": tuple(
                Workshop(
                    title=w.title,
                    description=w.description,
                    start_time=w.start_time,
                    end_time=w.end_time,
                    capacity=Capacity(w.capacity),
                    presenter=w.presenter,
                )
                for w in row.workshops.all()
            ),
            "add_ons": tuple(
                AddOn(
                    name=a.name,
                    description=a.description,
                    price=Money(a.price),
                    is_required=a.is_required,
                    maximum_quantity=a.maximum_quantity,
                )
                for a in row.add_ons.all()
            ),
        }
    return Event(
        id=EventId(row.id),
        title=row.title,
        description=row.description,
        location=row.location,
        category=row.category,
        event_type=row.event_type,
        organizer_id=row.organizer_id,
        start_date=row.start_date,
        end_date=row.end_date,
        image_url=row.image_url,
        featured=row.featured,
        tags=tuple(row.tags or ()),
        tickets_sold=row.tickets_sold,
        created_at=row.created_at,
        updated_at=row.updated_at,
        seating_map=row.seating_map,
        **details,
    )


def ticket_to_domain(row: TicketModel) -> Ticket:
    return Ticket(
        id=TicketId(row.id),
        event_id=EventId(row.event_id),
        ticket_type_id=TicketTypeId(row.ticket_type_id),
        user_id=row.user_id,
        order_id=row.order_id,
        quantity=row.quantity,
        total_price=Money(row.total_price),
        qr_code=row.qr_code,
        purchase_date=row.purchase_date,
        attendees=tuple(
            Attendee(name=a.get("name", ""), email=a.get("email", ""), phone=a.get("phone", ""))
            for a in row.attendee_details or ()
        ),
        seat_assignment=row.seat_assignment,
        is_used=row.is_used,
        checked_in_at=row.checked_in_at,
        email_sent=row.email_sent,
        payment_session_id=row.payment_session_id,
    )


class DjangoEventStore(EventStore):
    """Relational event store using Django ORM."""

    def list_events(self, query: EventQuery) -> list[Event]:
        qs = EventModel.objects.annotate(
            min_price=Coalesce(
                Min("ticket_types__price"),
                Value(Decimal("0")),
                output_field=DecimalField(max_digits=10, decimal_places=2),
            )
        )
        if not query.include_past:
            now = timezone.now()
            qs = qs.filter(Q(end_date__gte=now) | Q(end_date__isnull=True, start_date__gte=now))
        if query.search:
            qs = qs.filter(Q(title__icontains=query.search) | Q(description__icontains=query.search))
        if query.category:
            qs = qs.filter(category=query.category)
        if query.event_type:
            qs = qs.filter(event_type=query.event_type)
        if query.featured is not None:
            qs = qs.filter(featured=query.featured)
        if query.organizer_id is not None:
            qs = qs.filter(organizer_id=query.organizer_id)
        if query.min_date:
            qs = qs.filter(start_date__gte=query.min_date)
        if query.max_date:
            qs = qs.filter(start_date__lte=query.max_date)
        if query.min_price is not None:
            qs = qs.filter(min_price__gte=query.min_price)
        if query.max_price is not None:
            qs = qs.filter(min_price__lte=query.max_price)
        if query.price_filter in PRICE_FILTERS:
            qs = qs.filter(PRICE_FILTERS[query.price_filter])
        qs = qs.order_by(*ORDERINGS.get(query.sort, ORDERINGS["date-asc"]))
        return [event_to_domain(row) for row in qs]

    def get_event(self, event_id: EventId) -> Event | None:
        row = (
            EventModel.objects.prefetch_related("ticket_types", "speakers", "workshops", "add_ons")
            .filter(pk=event_id.value)
            .first()
        )
        if row is None:
            return None
        return event_to_domain(row, with_details=True)

    def get_ticket_types(self, event_id: EventId) -> list[TicketType]:
        return [ticket_type_to_domain(row) for row in TicketTypeModel.objects.filter(event_id=event_id.value)]

    def create_event(self, organizer_id: int, new_event: NewEvent) -> Event:
        with transaction.atomic():
            row = EventModel.objects.create(
                organizer_id=organizer_id,
                title=new_event.title,
                description=new_event.description,
                location=new_event.location,
                category=new_event.category,
                event_type=new_event.event_type,
                start_date=new_event.start_date,
                end_date=new_event.end_date,
                image_url=new_event.image_url,
                featured=new_event.featured,
                tags=list(new_event.tags),
                seating_map=new_event.seating_map,
            )
            TicketTypeModel.objects.bulk_create(
                TicketTypeModel(
                    event=row,
                    name=tt.name,
                    description=tt.description,
                    price=tt.price.amount,
                    quantity=tt.quantity.value,
                    available_quantity=tt.quantity.value,
                    features=tt.features,
                )
                for tt in new_event.ticket_types
            )
            SpeakerModel.objects.bulk_create(
                SpeakerModel(event=row, name=s.name, bio=s.bio, profile_image=s.profile_image)
                for s in new_event.speakers
            )
            WorkshopModel.objects.bulk_create(
                WorkshopModel(
                    event=row,
                    title=w.title,
                    description=w.description,
                    start_time=w.start_time,
                    end_time=w.end_time,
                    capacity=w.capacity.value,
                    presenter=w.presenter,
                )
                for w in new_event.workshops
            )
            EventAddOnModel.objects.bulk_create(
                EventAddOnModel(
                    event=row,
                    name=a.name,
                    description=a.description,
                    price=a.price.amount,
                    is_required=a.is_required,
                    maximum_quantity=a.maximum_quantity,
                )
                for a in new_event.add_ons
            )
            transaction.on_commit(lambda: invalidate_event(row.pk))
        logger.info("Event %s created by user %s", row.pk, organizer_id)
        return self.get_event(EventId(row.pk))

    def update_event(self, event_id: EventId, changes: dict) -> Event | None:
        row = EventModel.objects.filter(pk=event_id.value).first()
        if row is None:
            return None
        for field, value in changes.items():
            setattr(row, field, value)
        row.save(update_fields=[*changes, "updated_at"])
        return self.get_event(event_id)

    def event_exists(self, event_id: EventId) -> bool:
        return EventModel.objects.filter(pk=event_id.value).exists()


class DjangoTicketStore(TicketStore):
    """Ticket issuance backed by conditional updates on ticket type inventory."""

    def issue_tickets(self, order: Order) -> list[Ticket]:
        rows = []
        with transaction.atomic():
            if (
                order.payment_session_id
                and TicketModel.objects.filter(payment_session_id=order.payment_session_id).exists()
            ):
                raise PaymentSessionUsedError()
            for draft in order.drafts:
                updated = TicketTypeModel.objects.filter(
                    pk=draft.ticket_type_id.value,
                    event_id=order.event_id.value,
                    available_quantity__gte=draft.quantity,
                ).update(available_quantity=F("available_quantity") - draft.quantity)
                if updated == 0:
                    name = (
                        TicketTypeModel.objects.filter(pk=draft.ticket_type_id.value)
                        .values_list("name", flat=True)
                        .first()
                    )
                    logger.info("Order %s rejected: %s sold out", order.order_id, draft.ticket_type_id)
                    raise SoldOutError(name or str(draft.ticket_type_id))
                rows.append(
                    TicketModel.objects.create(
                        id=draft.id.value,
                        ticket_type_id=draft.ticket_type_id.value,
                        event_id=order.event_id.value,
                        user_id=order.user_id,
                        order_id=order.order_id,
                        quantity=draft.quantity,
                        total_price=draft.total_price.amount,
                        qr_code=draft.qr_code,
                        seat_assignment=draft.seat_assignment,
                        attendee_details=[a.as_dict() for a in draft.attendees],
                        payment_session_id=order.payment_session_id,
                    )
                )
            EventModel.objects.filter(pk=order.event_id.value).update(
                tickets_sold=F("tickets_sold") + order.total_quantity
            )
            transaction.on_commit(lambda: invalidate_event(order.event_id.value))
        return [ticket_to_domain(row) for row in rows]

    def get_ticket(self, ticket_id: TicketId) -> Ticket | None:
        row = TicketModel.objects.filter(pk=ticket_id.value).first()
        return ticket_to_domain(row) if row else None

    def list_for_user(self, user_id: int) -> list[Ticket]:
        return [ticket_to_domain(row) for row in TicketModel.objects.filter(user_id=user_id)]

    def list_for_payment_session(self, session_id: str) -> list[Ticket]:
        return [ticket_to_domain(row) for row in TicketModel.objects.filter(payment_session_id=session_id)]

    def mark_email_sent(self, ticket_id: TicketId, sent: bool) -> None:
        TicketModel.objects.filter(pk=ticket_id.value).update(email_sent=sent)

    def check_in(self, ticket_id: TicketId) -> bool:
        updated = TicketModel.objects.filter(pk=ticket_id.value, is_used=False).update(
            is_used=True, checked_in_at=timezone.now()
        )
        return updated == 1

    def revenue_by_ticket_type(self, event_id: EventId) -> dict[str, Money]:
        totals = (
            TicketModel.objects.filter(event_id=event_id.value)
            .values("ticket_type_id")
            .annotate(revenue=Sum("total_price"))
        )
        return {str(row["ticket_type_id"]): Money(row["revenue"] or Decimal("0")) for row in totals}
