from rest_framework import serializers

from payments.services.payment_service import TicketSelection


class TicketSelectionSerializer(serializers.Serializer):
    ticket_type_id = serializers.CharField()
    quantity = serializers.IntegerField(min_value=1)


class TicketCheckoutSerializer(serializers.Serializer):
    event_id = serializers.CharField()
    items = TicketSelectionSerializer(many=True, allow_empty=False)

    def to_selections(self) -> list[TicketSelection]:
        return [TicketSelection(**item) for item in self.validated_data["items"]]


class RentalCheckoutSerializer(serializers.Serializer):
    rental_id = serializers.CharField()


class CheckoutSessionSerializer(serializers.Serializer):
    session_id = serializers.CharField()
    checkout_url = serializers.URLField()


class WebhookDataSerializer(serializers.Serializer):
    session_id = serializers.CharField(required=False, allow_blank=True)


class WebhookSerializer(serializers.Serializer):
    event = serializers.CharField(required=False, allow_blank=True)
    data = WebhookDataSerializer(required=False)
