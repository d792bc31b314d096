from events.handlers.views import (
    EventDetailView,
    EventListView,
    EventSalesView,
    PaymentSessionTicketsView,
    TicketCheckInView,
    TicketPurchaseView,
    TicketResendConfirmationView,
    TicketWalletPassView,
    UserTicketsView,
    WalletPassView,
)

__all__ = [
    "EventDetailView",
    "EventListView",
    "EventSalesView",
    "PaymentSessionTicketsView",
    "TicketCheckInView",
    "TicketPurchaseView",
    "TicketResendConfirmationView",
    "TicketWalletPassView",
    "UserTicketsView",
    "WalletPassView",
]
