"""Process-wide notifier providers."""

from functools import cache

from notifications.mailers import (
    CashierNotifier,
    EmailCashierNotifier,
    EmailTicketNotifier,
    TicketNotifier,
)


@cache
def get_ticket_notifier() -> TicketNotifier:
    return EmailTicketNotifier()


@cache
def get_cashier_notifier() -> CashierNotifier:
    return EmailCashierNotifier()
