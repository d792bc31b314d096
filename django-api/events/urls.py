from django.urls import path

from events.handlers import (
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

urlpatterns = [
    path("events", EventListView.as_view(), name="event-list"),
    path("events/<str:event_id>", EventDetailView.as_view(), name="event-detail"),
    path("events/<str:event_id>/sales", EventSalesView.as_view(), name="event-sales"),
    path("tickets/purchase", TicketPurchaseView.as_view(), name="ticket-purchase"),
    path("tickets/user", UserTicketsView.as_view(), name="ticket-user-list"),
    path(
        "tickets/payment/<str:session_id>",
        PaymentSessionTicketsView.as_view(),
        name="ticket-payment-session",
    ),
    path("tickets/<str:ticket_id>/check-in", TicketCheckInView.as_view(), name="ticket-check-in"),
    path(
        "tickets/<str:ticket_id>/resend-confirmation",
        TicketResendConfirmationView.as_view(),
        name="ticket-resend-confirmation",
    ),
    path("tickets/<str:ticket_id>/wallet-pass", TicketWalletPassView.as_view(), name="ticket-wallet-pass"),
    path("wallet/pass", WalletPassView.as_view(kind="apple"), name="wallet-pass-apple"),
    path("wallet/gpay", WalletPassView.as_view(kind="google"), name="wallet-pass-google"),
]
