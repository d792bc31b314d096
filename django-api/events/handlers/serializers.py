"""Serializers for request validation and domain model responses."""

from rest_framework import serializers

from events.domain import (
    AddOn,
    Attendee,
    Capacity,
    EventQuery,
    Money,
    NewEvent,
    NewTicketType,
    PurchaseLine,
    Speaker,
    TicketTypeId,
    Workshop,
)
from events.models import Event as EventModel
from events.stores.django_store import ORDERINGS, PRICE_FILTERS
from notifications.qr import qr_data_uri


class TicketTypeSerializer(serializers.Serializer):
    """Serializer for TicketType domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    price = serializers.CharField()
    quantity = serializers.IntegerField(source="quantity.value")
    available_quantity = serializers.IntegerField(source="available_quantity.value")
    features = serializers.JSONField()


class SpeakerSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    bio = serializers.CharField(allow_blank=True, default="")
    profile_image = serializers.URLField(required=False, allow_null=True, default=None)


class WorkshopSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, default="")
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    capacity = serializers.IntegerField(min_value=0)
    presenter = serializers.CharField(allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["end_time"] <= attrs["start_time"]:
            raise serializers.ValidationError("Workshop end time must be after start time")
        return attrs


class WorkshopOutputSerializer(WorkshopSerializer):
    capacity = serializers.IntegerField(source="capacity.value")


class AddOnSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    is_required = serializers.BooleanField(default=False)
    maximum_quantity = serializers.IntegerField(min_value=1, default=1)


class AddOnOutputSerializer(AddOnSerializer):
    price = serializers.CharField()


class EventSerializer(serializers.Serializer):
    """Serializer for Event domain model in listings."""

    id = serializers.CharField()
    title = serializers.CharField()
    description = serializers.CharField()
    location = serializers.CharField()
    category = serializers.CharField()
    event_type = serializers.CharField()
    organizer_id = serializers.IntegerField()
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField(allow_null=True)
    image_url = serializers.CharField(allow_null=True)
    featured = serializers.BooleanField()
    tags = serializers.ListField(child=serializers.CharField())
    tickets_sold = serializers.IntegerField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class EventDetailSerializer(EventSerializer):
    """Event with ticket types and associations."""

    seating_map = serializers.JSONField()
    ticket_types = TicketTypeSerializer(many=True)
    speakers = SpeakerSerializer(many=True)
    workshops = WorkshopOutputSerializer(many=True)
    add_ons = AddOnOutputSerializer(many=True)


class EventQuerySerializer(serializers.Serializer):
    """Query string filters for GET /api/events."""

    search = serializers.CharField(required=False, allow_blank=True)
    category = serializers.ChoiceField(choices=EventModel.Category.choices, required=False)
    event_type = serializers.ChoiceField(choices=EventModel.EventType.choices, required=False)
    min_date = serializers.DateTimeField(required=False)
    max_date = serializers.DateTimeField(required=False)
    min_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    max_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0, required=False)
    price_filter = serializers.ChoiceField(choices=["all", *PRICE_FILTERS], required=False)
    featured = serializers.BooleanField(required=False)
    organizer = serializers.IntegerField(required=False, source="organizer_id")
    sort = serializers.ChoiceField(choices=list(ORDERINGS), default="date-asc")
    include_past = serializers.BooleanField(default=False)

    def to_query(self) -> EventQuery:
        data = dict(self.validated_data)
        if data.get("price_filter") == "all":
            data.pop("price_filter")
        if not data.get("search"):
            data.pop("search", None)
        return EventQuery(**data)


class TicketTypeInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    description = serializers.CharField(allow_blank=True, default="")
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    quantity = serializers.IntegerField(min_value=1)
    features = serializers.JSONField(required=False, allow_null=True, default=None)


class EventCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=255)
    description = serializers.CharField()
    location = serializers.CharField(max_length=255)
    category = serializers.ChoiceField(choices=EventModel.Category.choices)
    event_type = serializers.ChoiceField(choices=EventModel.EventType.choices, default="general")
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField(required=False, allow_null=True, default=None)
    image_url = serializers.URLField(max_length=500, required=False, allow_null=True, default=None)
    featured = serializers.BooleanField(default=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), default=list)
    seating_map = serializers.JSONField(required=False, allow_null=True, default=None)
    ticket_types = TicketTypeInputSerializer(many=True, allow_empty=False)
    speakers = SpeakerSerializer(many=True, default=list)
    workshops = WorkshopSerializer(many=True, default=list)
    add_ons = AddOnSerializer(many=True, default=list)

    def to_command(self) -> NewEvent:
        data = dict(self.validated_data)
        return NewEvent(
            title=data["title"],
            description=data["description"],
            location=data["location"],
            category=data["category"],
            event_type=data["event_type"],
            start_date=data["start_date"],
            end_date=data["end_date"],
            image_url=data["image_url"],
            featured=data["featured"],
            tags=tuple(data["tags"]),
            seating_map=data["seating_map"],
            ticket_types=tuple(
                NewTicketType(
                    name=tt["name"],
                    description=tt["description"],
                    price=Money(tt["price"]),
                    quantity=Capacity(tt["quantity"]),
                    features=tt["features"],
                )
                for tt in data["ticket_types"]
            ),
            speakers=tuple(Speaker(**s) for s in data["speakers"]),
            workshops=tuple(
                Workshop(
                    title=w["title"],
                    description=w["description"],
                    start_time=w["start_time"],
                    end_time=w["end_time"],
                    capacity=Capacity(w["capacity"]),
                    presenter=w["presenter"],
                )
                for w in data["workshops"]
            ),
            add_ons=tuple(
                AddOn(
                    name=a["name"],
                    description=a["description"],
                    price=Money(a["price"]),
                    is_required=a["is_required"],
                    maximum_quantity=a["maximum_quantity"],
                )
                for a in data["add_ons"]
            ),
        )


class EventUpdateSerializer(serializers.Serializer):
    """PATCH body; only supplied fields are changed."""

    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False)
    location = serializers.CharField(max_length=255, required=False)
    category = serializers.ChoiceField(choices=EventModel.Category.choices, required=False)
    event_type = serializers.ChoiceField(choices=EventModel.EventType.choices, required=False)
    start_date = serializers.DateTimeField(required=False)
    end_date = serializers.DateTimeField(required=False, allow_null=True)
    image_url = serializers.URLField(max_length=500, required=False, allow_null=True)
    featured = serializers.BooleanField(required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)
    seating_map = serializers.JSONField(required=False, allow_null=True)

    def validate(self, attrs):
        unknown = set(self.initial_data) - set(self.fields)
        if unknown:
            raise serializers.ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")
        return attrs


class AttendeeSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    email = serializers.EmailField()
    phone = serializers.CharField(max_length=50, allow_blank=True, default="")


class PurchaseLineSerializer(serializers.Serializer):
    ticket_type_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    attendee_details = AttendeeSerializer(many=True, default=list)
    seat_assignment = serializers.JSONField(required=False, allow_null=True, default=None)


class CustomerDetailsSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    email = serializers.EmailField(required=False)
    phone = serializers.CharField(max_length=50, allow_blank=True, default="")


class PurchaseSerializer(serializers.Serializer):
    """Body of POST /api/tickets/purchase."""

    event_id = serializers.CharField()
    tickets = PurchaseLineSerializer(many=True, allow_empty=False)
    customer_details = CustomerDetailsSerializer(required=False)
    payment_session_id = serializers.CharField(max_length=255, required=False, allow_blank=True)

    def to_lines(self) -> list[PurchaseLine]:
        return [
            PurchaseLine(
                ticket_type_id=TicketTypeId(line["ticket_type_id"]),
                quantity=line["quantity"],
                attendees=tuple(Attendee(**a) for a in line["attendee_details"]),
                seat_assignment=line["seat_assignment"],
            )
            for line in self.validated_data["tickets"]
        ]


class TicketSerializer(serializers.Serializer):
    """Serializer for Ticket domain model."""

    id = serializers.CharField()
    event_id = serializers.CharField()
    ticket_type_id = serializers.CharField()
    user_id = serializers.IntegerField()
    order_id = serializers.CharField()
    quantity = serializers.IntegerField()
    total_price = serializers.CharField()
    qr_code = serializers.CharField()
    attendee_details = serializers.SerializerMethodField()
    seat_assignment = serializers.JSONField()
    is_used = serializers.BooleanField()
    checked_in_at = serializers.DateTimeField(allow_null=True)
    email_sent = serializers.BooleanField()
    payment_session_id = serializers.CharField(allow_null=True)
    purchase_date = serializers.DateTimeField()

    def get_attendee_details(self, ticket) -> list[dict]:
        return [attendee.as_dict() for attendee in ticket.attendees]


class IssuedTicketSerializer(TicketSerializer):
    """Ticket with its QR code rendered as a PNG data URI."""

    qr_code_image = serializers.SerializerMethodField()

    def get_qr_code_image(self, ticket) -> str:
        return qr_data_uri(ticket.qr_code)


class CheckInSerializer(serializers.Serializer):
    qr_code = serializers.CharField(required=False)


class WalletPassSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=["apple", "google"], default="apple")


class TicketTypeSalesSerializer(serializers.Serializer):
    ticket_type_id = serializers.CharField(source="ticket_type.id")
    name = serializers.CharField(source="ticket_type.name")
    price = serializers.CharField(source="ticket_type.price")
    quantity = serializers.IntegerField(source="ticket_type.quantity.value")
    available_quantity = serializers.IntegerField(source="ticket_type.available_quantity.value")
    sold = serializers.IntegerField()
    revenue = serializers.CharField()


class EventSalesSerializer(serializers.Serializer):
    event_id = serializers.CharField(source="event.id")
    title = serializers.CharField(source="event.title")
    total_sold = serializers.IntegerField()
    total_capacity = serializers.IntegerField()
    total_revenue = serializers.CharField()
    ticket_types = TicketTypeSalesSerializer(source="lines", many=True)


class WalletPassQuerySerializer(serializers.Serializer):
    """Query string of a signed wallet pass link."""

    ticketId = serializers.CharField()
    eventId = serializers.CharField()
    ticketTypeId = serializers.CharField()
    timestamp = serializers.CharField()
    signature = serializers.CharField()


class WalletPassDetailSerializer(serializers.Serializer):
    type = serializers.CharField(source="kind")
    ticket_id = serializers.CharField(source="ticket.id")
    order_id = serializers.CharField(source="ticket.order_id")
    quantity = serializers.IntegerField(source="ticket.quantity")
    is_used = serializers.BooleanField(source="ticket.is_used")
    event_title = serializers.CharField(source="event.title")
    event_date = serializers.DateTimeField(source="event.start_date")
    location = serializers.CharField(source="event.location")
    ticket_type_name = serializers.CharField(source="ticket_type.name")
    attendee_name = serializers.SerializerMethodField()
    qr_code_image = serializers.SerializerMethodField()

    def get_attendee_name(self, wallet_pass) -> str:
        attendees = wallet_pass.ticket.attendees
        return attendees[0].name if attendees else ""

    def get_qr_code_image(self, wallet_pass) -> str:
        return qr_data_uri(wallet_pass.ticket.qr_code)
