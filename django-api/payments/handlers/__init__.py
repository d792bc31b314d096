from payments.handlers.views import (
    PaymentStatusView,
    PaymentWebhookView,
    RentalCheckoutView,
    TicketCheckoutView,
)

__all__ = [
    "PaymentStatusView",
    "PaymentWebhookView",
    "RentalCheckoutView",
    "TicketCheckoutView",
]
