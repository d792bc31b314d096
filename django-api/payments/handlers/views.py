"""HTTP handlers for checkout sessions and the payment provider webhook."""

from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.actors import Actor
from common.permissions import ADMIN, CUSTOMER, roles
from common.responses import success_response
from payments.dependencies import get_payment_service
from payments.handlers.serializers import (
    CheckoutSessionSerializer,
    RentalCheckoutSerializer,
    TicketCheckoutSerializer,
    WebhookSerializer,
)

CanPay = roles(CUSTOMER, ADMIN)


class TicketCheckoutView(APIView):
    """Handler for POST /api/payments/tickets"""

    permission_classes = [IsAuthenticated, CanPay]

    def post(self, request: Request) -> Response:
        serializer = TicketCheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = get_payment_service().ticket_checkout(
            Actor.from_user(request.user),
            serializer.validated_data["event_id"],
            serializer.to_selections(),
        )
        return success_response(CheckoutSessionSerializer(session).data, description="Payment session created")


class RentalCheckoutView(APIView):
    """Handler for POST /api/payments/rentals"""

    permission_classes = [IsAuthenticated, CanPay]

    def post(self, request: Request) -> Response:
        serializer = RentalCheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        session = get_payment_service().rental_checkout(
            Actor.from_user(request.user), serializer.validated_data["rental_id"]
        )
        return success_response(
            CheckoutSessionSerializer(session).data, description="Rental payment session created"
        )


class PaymentStatusView(APIView):
    """Handler for GET /api/payments/status/{session_id}"""

    permission_classes = [AllowAny]

    def get(self, request: Request, session_id: str) -> Response:
        payment_status = get_payment_service().status(session_id)
        return success_response(
            {"session_id": session_id, "payment_status": payment_status},
            description="Payment status retrieved",
        )


class PaymentWebhookView(APIView):
    """Handler for POST /api/payments/webhook

    The provider is not authenticated; only the session id is taken from the
    body and everything else is read back from the gateway.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def post(self, request: Request) -> Response:
        serializer = WebhookSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data.get("data") or {}
        outcome = get_payment_service().handle_webhook(
            serializer.validated_data.get("event"), data.get("session_id")
        )
        return success_response(
            {"action": outcome.action, "session_id": outcome.session_id}, description=outcome.message
        )
