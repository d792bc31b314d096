"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Let domain errors propagate to the envelope exception handler
- Never contain business logic
"""

from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.actors import Actor
from common.cache import TTL, get_or_fetch, namespaced_key
from common.permissions import ADMIN, CUSTOMER, EVENT_MANAGER, roles
from common.responses import success_response
from events.cache import EVENT_LIST_NAMESPACE, event_detail_key
from events.dependencies import get_event_service, get_purchase_service
from events.domain import Purchaser
from events.handlers.serializers import (
    CheckInSerializer,
    EventCreateSerializer,
    EventDetailSerializer,
    EventQuerySerializer,
    EventSalesSerializer,
    EventSerializer,
    EventUpdateSerializer,
    IssuedTicketSerializer,
    PurchaseSerializer,
    TicketSerializer,
    WalletPassDetailSerializer,
    WalletPassQuerySerializer,
    WalletPassSerializer,
)
from events.services.event_service import parse_event_id

CanManageEvents = roles(EVENT_MANAGER, ADMIN)
CanBuyTickets = roles(CUSTOMER, ADMIN)


class EventListView(APIView):
    """Handler for GET and POST /api/events"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), CanManageEvents()]
        return [AllowAny()]

    def get(self, request: Request) -> Response:
        query = EventQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        key = namespaced_key(EVENT_LIST_NAMESPACE, query.validated_data)
        data = get_or_fetch(
            key,
            lambda: EventSerializer(get_event_service().list_events(query.to_query()), many=True).data,
            TTL.MEDIUM,
        )
        return success_response(data, description="Events retrieved successfully")

    def post(self, request: Request) -> Response:
        serializer = EventCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().create_event(Actor.from_user(request.user), serializer.to_command())
        return success_response(
            EventDetailSerializer(event).data,
            code=status.HTTP_201_CREATED,
            description="Event created successfully",
        )


class EventDetailView(APIView):
    """Handler for GET and PATCH /api/events/{event_id}"""

    def get_permissions(self):
        if self.request.method == "PATCH":
            return [IsAuthenticated(), CanManageEvents()]
        return [AllowAny()]

    def get(self, request: Request, event_id: str) -> Response:
        data = get_or_fetch(
            event_detail_key(parse_event_id(event_id)),
            lambda: EventDetailSerializer(get_event_service().get_event(event_id)).data,
            TTL.MEDIUM,
        )
        return success_response(data, description="Event retrieved successfully")

    def patch(self, request: Request, event_id: str) -> Response:
        serializer = EventUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        event = get_event_service().update_event(
            Actor.from_user(request.user), event_id, dict(serializer.validated_data)
        )
        return success_response(EventDetailSerializer(event).data, description="Event updated successfully")


class EventSalesView(APIView):
    """Handler for GET /api/events/{event_id}/sales"""

    permission_classes = [IsAuthenticated, CanManageEvents]

    def get(self, request: Request, event_id: str) -> Response:
        sales = get_event_service().get_sales(Actor.from_user(request.user), event_id)
        return success_response(EventSalesSerializer(sales).data, description="Sales retrieved successfully")


class TicketPurchaseView(APIView):
    """Handler for POST /api/tickets/purchase"""

    permission_classes = [IsAuthenticated, CanBuyTickets]

    def post(self, request: Request) -> Response:
        serializer = PurchaseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        customer = serializer.validated_data.get("customer_details", {})
        purchaser = Purchaser(
            user_id=request.user.pk,
            name=customer.get("name") or request.user.display_name,
            email=customer.get("email") or request.user.email,
            phone=customer.get("phone", ""),
        )
        tickets = get_purchase_service().purchase(
            purchaser,
            serializer.validated_data["event_id"],
            serializer.to_lines(),
            payment_session_id=serializer.validated_data.get("payment_session_id") or None,
        )
        return success_response(
            {
                "order_id": tickets[0].order_id,
                "email_sent": all(ticket.email_sent for ticket in tickets),
                "tickets": IssuedTicketSerializer(tickets, many=True).data,
            },
            code=status.HTTP_201_CREATED,
            description="Tickets purchased successfully",
        )


class UserTicketsView(APIView):
    """Handler for GET /api/tickets/user"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request) -> Response:
        tickets = get_purchase_service().list_user_tickets(request.user.pk)
        return success_response(TicketSerializer(tickets, many=True).data, description="Tickets retrieved successfully")


class PaymentSessionTicketsView(APIView):
    """Handler for GET /api/tickets/payment/{session_id}"""

    permission_classes = [IsAuthenticated, CanBuyTickets]

    def get(self, request: Request, session_id: str) -> Response:
        tickets = get_purchase_service().tickets_for_payment_session(Actor.from_user(request.user), session_id)
        return success_response(
            IssuedTicketSerializer(tickets, many=True).data,
            description="Tickets retrieved successfully",
        )


class TicketCheckInView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/check-in"""

    permission_classes = [IsAuthenticated, CanManageEvents]

    def post(self, request: Request, ticket_id: str) -> Response:
        serializer = CheckInSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        ticket = get_purchase_service().check_in(
            Actor.from_user(request.user), ticket_id, serializer.validated_data.get("qr_code")
        )
        return success_response(TicketSerializer(ticket).data, description="Ticket checked in")


class TicketResendConfirmationView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/resend-confirmation"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, ticket_id: str) -> Response:
        ticket = get_purchase_service().resend_confirmation(Actor.from_user(request.user), ticket_id)
        description = "Confirmation email sent" if ticket.email_sent else "Confirmation email could not be sent"
        return success_response(TicketSerializer(ticket).data, description=description)


class TicketWalletPassView(APIView):
    """Handler for POST /api/tickets/{ticket_id}/wallet-pass"""

    permission_classes = [IsAuthenticated]

    def post(self, request: Request, ticket_id: str) -> Response:
        serializer = WalletPassSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        kind = serializer.validated_data["type"]
        url = get_purchase_service().wallet_pass(Actor.from_user(request.user), ticket_id, kind)
        return success_response({"type": kind, "url": url}, description="Wallet pass generated")


class WalletPassView(APIView):
    """Handler for GET /api/wallet/pass (Apple) and GET /api/wallet/gpay (Google).

    Public: the link signature grants access.
    """

    permission_classes = [AllowAny]
    kind = "apple"

    def get(self, request: Request) -> Response:
        query = WalletPassQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        params = query.validated_data
        wallet_pass = get_purchase_service().open_wallet_pass(
            self.kind,
            params["ticketId"],
            params["eventId"],
            params["ticketTypeId"],
            params["timestamp"],
            params["signature"],
        )
        return success_response(
            WalletPassDetailSerializer(wallet_pass).data, description="Wallet pass retrieved successfully"
        )
