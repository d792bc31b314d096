"""Serializers for venue, rental, cashier and report payloads."""

from rest_framework import serializers

from venues.models import Rental as RentalModel


class VenueSerializer(serializers.Serializer):
    id = serializers.CharField()
    owner_id = serializers.IntegerField()
    name = serializers.CharField()
    description = serializers.CharField()
    location = serializers.CharField()
    capacity = serializers.IntegerField(allow_null=True)
    hourly_rate = serializers.DecimalField(max_digits=10, decimal_places=2)
    daily_rate = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    facilities = serializers.ListField(child=serializers.CharField())
    availability_hours = serializers.JSONField()
    images = serializers.ListField(child=serializers.CharField())
    is_active = serializers.BooleanField()
    created_at = serializers.DateTimeField()
    updated_at = serializers.DateTimeField()


class VenueInputSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(allow_blank=True, default="")
    location = serializers.CharField(max_length=255)
    capacity = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    hourly_rate = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    daily_rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, required=False, allow_null=True, default=None
    )
    facilities = serializers.ListField(child=serializers.CharField(max_length=100), default=list)
    availability_hours = serializers.JSONField(required=False, allow_null=True, default=None)
    images = serializers.ListField(child=serializers.URLField(max_length=500), default=list)
    is_active = serializers.BooleanField(default=True)


class VenueUpdateSerializer(VenueInputSerializer):
    """PATCH body; used with ``partial=True`` so defaults are not applied."""


class RentalSerializer(serializers.Serializer):
    id = serializers.CharField()
    venue_id = serializers.CharField()
    venue_name = serializers.CharField()
    customer_id = serializers.IntegerField()
    customer_name = serializers.CharField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    total_price = serializers.DecimalField(max_digits=10, decimal_places=2)
    status = serializers.CharField()
    payment_status = serializers.CharField()
    notes = serializers.CharField()
    payment_session_id = serializers.CharField(allow_null=True)
    created_at = serializers.DateTimeField()


class RentalInputSerializer(serializers.Serializer):
    venue_id = serializers.CharField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    customer_name = serializers.CharField(max_length=255, required=False)
    notes = serializers.CharField(allow_blank=True, default="")


class RentalStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=RentalModel.Status.choices)


class RentalPaymentStatusSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=RentalModel.PaymentStatus.choices)


class CashierSerializer(serializers.Serializer):
    id = serializers.CharField()
    user_id = serializers.IntegerField()
    owner_id = serializers.IntegerField()
    email = serializers.EmailField()
    name = serializers.CharField()
    permissions = serializers.SerializerMethodField()
    venue_ids = serializers.ListField(child=serializers.CharField())
    created_at = serializers.DateTimeField()

    def get_permissions(self, cashier) -> dict[str, bool]:
        return cashier.permissions.to_storage()


class PermissionsField(serializers.DictField):
    """A map of permission names to booleans; unknown names are rejected by the service."""

    child = serializers.JSONField()


class CashierCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    name = serializers.CharField(max_length=255, allow_blank=True, default="")
    permissions = PermissionsField(required=False, allow_null=True, default=None)
    venue_ids = serializers.ListField(child=serializers.CharField(), default=list)


class CashierVenuesSerializer(serializers.Serializer):
    venue_ids = serializers.ListField(child=serializers.CharField())


class SalesReportQuerySerializer(serializers.Serializer):
    venue_id = serializers.CharField(required=False, allow_blank=True)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)


class VenueBreakdownSerializer(serializers.Serializer):
    venue_id = serializers.CharField()
    venue_name = serializers.CharField()
    bookings = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)


class PeriodBreakdownSerializer(serializers.Serializer):
    period = serializers.CharField()
    bookings = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=12, decimal_places=2)


class SalesReportSerializer(serializers.Serializer):
    total_revenue = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_bookings = serializers.IntegerField()
    completed_bookings = serializers.IntegerField()
    canceled_bookings = serializers.IntegerField()
    pending_payments = serializers.IntegerField()
    paid_bookings = serializers.IntegerField()
    refunded_bookings = serializers.IntegerField()
    average_booking_value = serializers.DecimalField(max_digits=12, decimal_places=2)
    venue_breakdown = VenueBreakdownSerializer(many=True)
    time_breakdown = PeriodBreakdownSerializer(many=True)
    message = serializers.CharField()

