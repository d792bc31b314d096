"""Django ORM models for subscription plans and user subscriptions."""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models


class SubscriptionPlan(models.Model):
    class PlanType(models.TextChoices):
        EVENT_MANAGER = "eventManager", "Event manager"
        CENTER = "center", "Center"

    class BillingPeriod(models.TextChoices):
        MONTHLY = "monthly", "Monthly"
        YEARLY = "yearly", "Yearly"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, default="")
    type = models.CharField(max_length=20, choices=PlanType.choices)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    billing_period = models.CharField(max_length=10, choices=BillingPeriod.choices, default=BillingPeriod.MONTHLY)
    max_events_allowed = models.PositiveIntegerField(default=0, help_text="0 means unlimited")
    service_fee_percentage = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal("0"))
    features = models.JSONField(default=list, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["type", "price"]

    def __str__(self) -> str:
        return f"{self.name} ({self.type}, {self.billing_period})"


class Subscription(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        PENDING = "pending", "Pending"
        CANCELLED = "cancelled", "Cancelled"
        EXPIRED = "expired", "Expired"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="subscriptions")
    plan = models.ForeignKey(SubscriptionPlan, on_delete=models.PROTECT, related_name="subscriptions")
    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    start_date = models.DateTimeField()
    end_date = models.DateTimeField()
    events_created = models.PositiveIntegerField(default=0)
    tickets_sold = models.PositiveIntegerField(default=0)
    fees_collected = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0"))
    payment_session_id = models.CharField(max_length=255, blank=True, null=True, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-start_date"]
        indexes = [models.Index(fields=["user", "status"], name="subscription_user_status_idx")]

    def __str__(self) -> str:
        return f"{self.user_id} - {self.plan_id} ({self.status})"
