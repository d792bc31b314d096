"""HTTP handlers for venues, rentals, cashiers and sales reports."""

from rest_framework import serializers, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from common.actors import Actor
from common.permissions import ADMIN, CENTER, CUSTOMER, roles
from common.responses import success_response
from venues.dependencies import (
    get_cashier_service,
    get_rental_service,
    get_sales_report_service,
    get_venue_service,
)
from venues.handlers.serializers import (
    CashierCreateSerializer,
    CashierSerializer,
    CashierVenuesSerializer,
    PermissionsField,
    RentalInputSerializer,
    RentalPaymentStatusSerializer,
    RentalSerializer,
    RentalStatusSerializer,
    SalesReportQuerySerializer,
    SalesReportSerializer,
    VenueInputSerializer,
    VenueSerializer,
    VenueUpdateSerializer,
)

IsCenter = roles(CENTER, ADMIN)
CanViewVenue = roles(CENTER, CUSTOMER, ADMIN)
CanBookVenue = roles(CUSTOMER, ADMIN)


class VenueListView(APIView):
    """Handler for GET and POST /api/venues"""

    permission_classes = [IsAuthenticated, IsCenter]

    def get(self, request: Request) -> Response:
        venues = get_venue_service().list_venues(Actor.from_user(request.user))
        return success_response(VenueSerializer(venues, many=True).data, description="Venues retrieved successfully")

    def post(self, request: Request) -> Response:
        serializer = VenueInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        venue = get_venue_service().create_venue(Actor.from_user(request.user), serializer.validated_data)
        return success_response(
            VenueSerializer(venue).data,
            code=status.HTTP_201_CREATED,
            description="Venue created successfully",
        )


class VenueDetailView(APIView):
    """Handler for GET, PATCH and DELETE /api/venues/{venue_id}"""

    def get_permissions(self):
        if self.request.method == "GET":
            return [IsAuthenticated(), CanViewVenue()]
        return [IsAuthenticated(), IsCenter()]

    def get(self, request: Request, venue_id: str) -> Response:
        venue = get_venue_service().get_venue(Actor.from_user(request.user), venue_id)
        return success_response(VenueSerializer(venue).data, description="Venue retrieved successfully")

    def patch(self, request: Request, venue_id: str) -> Response:
        serializer = VenueUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        venue = get_venue_service().update_venue(
            Actor.from_user(request.user), venue_id, dict(serializer.validated_data)
        )
        return success_response(VenueSerializer(venue).data, description="Venue updated successfully")

    def delete(self, request: Request, venue_id: str) -> Response:
        get_venue_service().delete_venue(Actor.from_user(request.user), venue_id)
        return success_response(description="Venue deleted successfully")


class SalesReportView(APIView):
    """Handler for GET /api/venues/sales-report

    Always answers 200; failures come back as a zero report with a message.
    """

    permission_classes = [IsAuthenticated, IsCenter]

    def get(self, request: Request) -> Response:
        query = SalesReportQuerySerializer(data=request.query_params.dict())
        query.is_valid(raise_exception=True)
        report = get_sales_report_service().report(
            Actor.from_user(request.user),
            venue_id=query.validated_data.get("venue_id") or None,
            start_date=query.validated_data.get("start_date"),
            end_date=query.validated_data.get("end_date"),
        )
        return success_response(SalesReportSerializer(report).data, description=report.message)


class RentalListView(APIView):
    """Handler for GET and POST /api/rentals"""

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), CanBookVenue()]
        return [IsAuthenticated()]

    def get(self, request: Request) -> Response:
        rentals = get_rental_service().list_rentals(Actor.from_user(request.user))
        return success_response(
            RentalSerializer(rentals, many=True).data, description="Rentals retrieved successfully"
        )

    def post(self, request: Request) -> Response:
        serializer = RentalInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        rental = get_rental_service().create_rental(
            Actor.from_user(request.user),
            data["venue_id"],
            data["start_time"],
            data["end_time"],
            customer_name=data.get("customer_name") or request.user.display_name,
            notes=data["notes"],
        )
        return success_response(
            RentalSerializer(rental).data,
            code=status.HTTP_201_CREATED,
            description="Rental created successfully",
        )


class RentalDetailView(APIView):
    """Handler for GET /api/rentals/{rental_id}"""

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, rental_id: str) -> Response:
        rental = get_rental_service().get_rental(Actor.from_user(request.user), rental_id)
        return success_response(RentalSerializer(rental).data, description="Rental retrieved successfully")


class RentalStatusView(APIView):
    """Handler for PATCH /api/rentals/{rental_id}/status"""

    permission_classes = [IsAuthenticated]

    def patch(self, request: Request, rental_id: str) -> Response:
        serializer = RentalStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rental = get_rental_service().update_status(
            Actor.from_user(request.user), rental_id, serializer.validated_data["status"]
        )
        return success_response(RentalSerializer(rental).data, description="Rental status updated")


class RentalPaymentStatusView(APIView):
    """Handler for PATCH /api/rentals/{rental_id}/payment-status"""

    permission_classes = [IsAuthenticated, IsCenter]

    def patch(self, request: Request, rental_id: str) -> Response:
        serializer = RentalPaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        rental = get_rental_service().update_payment_status(
            Actor.from_user(request.user), rental_id, serializer.validated_data["payment_status"]
        )
        return success_response(RentalSerializer(rental).data, description="Rental payment status updated")


class CashierListView(APIView):
    """Handler for GET and POST /api/cashiers"""

    permission_classes = [IsAuthenticated, IsCenter]

    def get(self, request: Request) -> Response:
        cashiers = get_cashier_service().list_cashiers(Actor.from_user(request.user))
        return success_response(
            CashierSerializer(cashiers, many=True).data, description="Cashiers retrieved successfully"
        )

    def post(self, request: Request) -> Response:
        serializer = CashierCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        cashier = get_cashier_service().create_cashier(
            Actor.from_user(request.user),
            email=data["email"],
            name=data["name"],
            permissions=data["permissions"],
            venue_ids=data["venue_ids"],
        )
        return success_response(
            CashierSerializer(cashier).data,
            code=status.HTTP_201_CREATED,
            description="Cashier created successfully",
        )


class CashierDetailView(APIView):
    """Handler for GET and DELETE /api/cashiers/{cashier_id}"""

    permission_classes = [IsAuthenticated, IsCenter]

    def get(self, request: Request, cashier_id: str) -> Response:
        cashier = get_cashier_service().get_cashier(Actor.from_user(request.user), cashier_id)
        return success_response(CashierSerializer(cashier).data, description="Cashier retrieved successfully")

    def delete(self, request: Request, cashier_id: str) -> Response:
        get_cashier_service().delete_cashier(Actor.from_user(request.user), cashier_id)
        return success_response(description="Cashier deleted successfully")


class CashierPermissionsView(APIView):
    """Handler for PATCH /api/cashiers/{cashier_id}/permissions

    Accepts the permission map itself or ``{"permissions": {...}}``.
    """

    permission_classes = [IsAuthenticated, IsCenter]

    def patch(self, request: Request, cashier_id: str) -> Response:
        payload = request.data
        if isinstance(payload, dict) and isinstance(payload.get("permissions"), dict):
            payload = payload["permissions"]
        permissions = PermissionsField().run_validation(payload)
        cashier = get_cashier_service().update_permissions(Actor.from_user(request.user), cashier_id, permissions)
        return success_response(CashierSerializer(cashier).data, description="Cashier permissions updated successfully")


class CashierVenuesView(APIView):
    """Handler for PATCH /api/cashiers/{cashier_id}/venues

    Accepts a bare list of venue ids or ``{"venue_ids": [...]}``.
    """

    permission_classes = [IsAuthenticated, IsCenter]

    def patch(self, request: Request, cashier_id: str) -> Response:
        payload = {"venue_ids": request.data} if isinstance(request.data, list) else request.data
        serializer = CashierVenuesSerializer(data=payload)
        serializer.is_valid(raise_exception=True)
        cashier = get_cashier_service().update_venues(
            Actor.from_user(request.user), cashier_id, serializer.validated_data["venue_ids"]
        )
        return success_response(CashierSerializer(cashier).data, description="Cashier venue access updated successfully")
