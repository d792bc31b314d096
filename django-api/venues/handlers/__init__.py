from venues.handlers.views import (
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

__all__ = [
    "CashierDetailView",
    "CashierListView",
    "CashierPermissionsView",
    "CashierVenuesView",
    "RentalDetailView",
    "RentalListView",
    "RentalPaymentStatusView",
    "RentalStatusView",
    "SalesReportView",
    "VenueDetailView",
    "VenueListView",
]
