from django.urls import path

from payments.handlers import (
    PaymentStatusView,
    PaymentWebhookView,
    RentalCheckoutView,
    TicketCheckoutView,
)

urlpatterns = [
    path("payments/tickets", TicketCheckoutView.as_view(), name="payment-tickets"),
    path("payments/rentals", RentalCheckoutView.as_view(), name="payment-rentals"),
    path("payments/status/<str:session_id>", PaymentStatusView.as_view(), name="payment-status"),
    path("payments/webhook", PaymentWebhookView.as_view(), name="payment-webhook"),
]
