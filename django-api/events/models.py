"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Event(models.Model):
    """Persistence model for events."""

    class Category(models.TextChoices):
        MUSIC = "Music"
        SPORTS = "Sports"
        ARTS = "Arts"
        BUSINESS = "Business"
        FOOD = "Food"
        WELLNESS = "Wellness"
        TECH = "Tech"
        COMEDY = "Comedy"

    class EventType(models.TextChoices):
        GENERAL = "general", "General"
        CONFERENCE = "conference", "Conference"
        SEATED = "seated", "Seated"
        PRIVATE = "private", "Private"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField()
    location = models.CharField(max_length=255)
    category = models.CharField(max_length=20, choices=Category.choices)
    event_type = models.CharField(max_length=20, choices=EventType.choices, default=EventType.GENERAL)
    organizer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="organized_events")
    start_date = models.DateTimeField()
    end_date = models.DateTimeField(blank=True, null=True)
    image_url = models.URLField(max_length=500, blank=True, null=True)
    featured = models.BooleanField(default=False)
    seating_map = models.JSONField(blank=True, null=True)
    tags = models.JSONField(default=list, blank=True)
    tickets_sold = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date"]
        indexes = [
            models.Index(fields=["start_date"], name="event_start_date_idx"),
            models.Index(fields=["category"], name="event_category_idx"),
            models.Index(fields=["organizer"], name="event_organizer_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class TicketType(models.Model):
    """Persistence model for ticket types."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="ticket_types")
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField()
    available_quantity = models.PositiveIntegerField()
    features = models.JSONField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["price", "created_at"]
        indexes = [
            models.Index(fields=["event"], name="ticket_type_event_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(available_quantity__lte=F("quantity")),
                name="ticket_type_available_lte_quantity",
            ),
            models.CheckConstraint(condition=Q(price__gte=0), name="ticket_type_price_non_negative"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class Ticket(models.Model):
    """Persistence model for issued tickets. Rows are never updated except check-in and email state."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    ticket_type = models.ForeignKey(TicketType, on_delete=models.PROTECT, related_name="tickets")
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name="tickets")
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="tickets")
    order_id = models.CharField(max_length=32, db_index=True)
    quantity = models.PositiveIntegerField()
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    qr_code = models.TextField()
    seat_assignment = models.JSONField(blank=True, null=True)
    attendee_details = models.JSONField(default=list, blank=True)
    is_used = models.BooleanField(default=False)
    checked_in_at = models.DateTimeField(blank=True, null=True)
    email_sent = models.BooleanField(default=False)
    payment_session_id = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    purchase_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-purchase_date"]
        indexes = [
            models.Index(fields=["user", "-purchase_date"], name="ticket_user_purchase_idx"),
        ]
        constraints = [
            models.CheckConstraint(condition=Q(quantity__gte=1), name="ticket_quantity_positive"),
        ]

    def __str__(self) -> str:
        return f"{self.order_id} - {self.ticket_type_id}"


class Speaker(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="speakers")
    name = models.CharField(max_length=255)
    bio = models.TextField(blank=True, default="")
    profile_image = models.URLField(max_length=500, blank=True, null=True)

    def __str__(self) -> str:
        return self.name


class Workshop(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="workshops")
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    capacity = models.PositiveIntegerField()
    presenter = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["start_time"]

    def __str__(self) -> str:
        return self.title


class EventAddOn(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="add_ons")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(max_digits=10, decimal_places=2)
    is_required = models.BooleanField(default=False)
    maximum_quantity = models.PositiveIntegerField(default=1)

    def __str__(self) -> str:
        return self.name
