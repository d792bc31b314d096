from rest_framework import serializers

from subscriptions.models import SubscriptionPlan


class PlanSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    description = serializers.CharField()
    type = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    billing_period = serializers.CharField()
    max_events_allowed = serializers.IntegerField()
    unlimited_events = serializers.BooleanField()
    service_fee_percentage = serializers.DecimalField(max_digits=5, decimal_places=2)
    features = serializers.ListField(child=serializers.CharField())


class SubscriptionSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    plan = PlanSerializer()
    status = serializers.CharField()
    start_date = serializers.DateTimeField()
    end_date = serializers.DateTimeField()
    events_created = serializers.IntegerField()
    events_remaining = serializers.IntegerField(allow_null=True)
    tickets_sold = serializers.IntegerField()
    fees_collected = serializers.DecimalField(max_digits=12, decimal_places=2)


class PlanQuerySerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=SubscriptionPlan.PlanType.choices, required=False)


class SubscribeSerializer(serializers.Serializer):
    plan_id = serializers.CharField()
    payment_session_id = serializers.CharField(max_length=255)
