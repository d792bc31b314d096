from django.urls import path

from venues.handlers import (
    CashierDetailView,
    CashierListView,
    CashierPermissionsView,
    CashierVenuesView,
    RentalDetailView,
    RentalListView,
    RentalPaymentStatusView,
    RentalStatusView,
    SalesReportView,
    VenueDetailView,
    VenueListView,
)

urlpatterns = [
    path("venues", VenueListView.as_view(), name="venue-list"),
    path("venues/sales-report", SalesReportView.as_view(), name="venue-sales-report"),
    path("venues/<str:venue_id>", VenueDetailView.as_view(), name="venue-detail"),
    path("rentals", RentalListView.as_view(), name="rental-list"),
    path("rentals/<str:rental_id>", RentalDetailView.as_view(), name="rental-detail"),
    path("rentals/<str:rental_id>/status", RentalStatusView.as_view(), name="rental-status"),
    path(
        "rentals/<str:rental_id>/payment-status",
        RentalPaymentStatusView.as_view(),
        name="rental-payment-status",
    ),
    path("cashiers", CashierListView.as_view(), name="cashier-list"),
    path("cashiers/<str:cashier_id>", CashierDetailView.as_view(), name="cashier-detail"),
    path(
        "cashiers/<str:cashier_id>/permissions",
        CashierPermissionsView.as_view(),
        name="cashier-permissions",
    ),
    path("cashiers/<str:cashier_id>/venues", CashierVenuesView.as_view(), name="cashier-venues"),
]
