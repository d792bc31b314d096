"""Django ORM models for venues, rentals and cashier sub-accounts."""

import uuid

from django.conf import settings
from django.db import models
from django.db.models import F, Q


class Venue(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="venues")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255)
    capacity = models.PositiveIntegerField(blank=True, null=True)
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2)
    daily_rate = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    facilities = models.JSONField(default=list, blank=True)
    availability_hours = models.JSONField(blank=True, null=True)
    images = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["owner"], name="venue_owner_idx")]

    def __str__(self) -> str:
        return self.name


class Rental(models.Model):
    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        CONFIRMED = "confirmed", "Confirmed"
        CANCELED = "canceled", "Canceled"
        COMPLETED = "completed", "Completed"

    class PaymentStatus(models.TextChoices):
        UNPAID = "unpaid", "Unpaid"
        PAID = "paid", "Paid"
        REFUNDED = "refunded", "Refunded"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    venue = models.ForeignKey(Venue, on_delete=models.PROTECT, related_name="rentals")
    customer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name="rentals")
    customer_name = models.CharField(max_length=255)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    total_price = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(max_length=10, choices=PaymentStatus.choices, default=PaymentStatus.UNPAID)
    notes = models.TextField(blank=True, default="")
    payment_session_id = models.CharField(max_length=255, blank=True, null=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_time"]
        indexes = [models.Index(fields=["venue", "start_time"], name="rental_venue_start_idx")]
        constraints = [
            models.CheckConstraint(condition=Q(end_time__gt=F("start_time")), name="rental_end_after_start"),
        ]

    def __str__(self) -> str:
        return f"{self.venue_id} {self.start_time:%Y-%m-%d %H:%M} ({self.status})"


class Cashier(models.Model):
    """A user acting as cashier for a center, with delegated permissions."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cashier_roles")
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="cashiers")
    permissions = models.JSONField(default=dict)
    venues = models.ManyToManyField(Venue, through="CashierVenue", related_name="cashiers", blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.UniqueConstraint(fields=["user", "owner"], name="cashier_unique_user_owner"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id} for {self.owner_id}"


class CashierVenue(models.Model):
    cashier = models.ForeignKey(Cashier, on_delete=models.CASCADE, related_name="venue_links")
    venue = models.ForeignKey(Venue, on_delete=models.CASCADE, related_name="cashier_links")

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["cashier", "venue"], name="cashier_venue_unique"),
        ]
