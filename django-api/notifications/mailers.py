"""Transactional email.

Mailers raise on delivery failure; callers decide whether a failure matters.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from email.mime.image import MIMEImage

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, send_mail
from django.template.loader import render_to_string

from notifications.qr import qr_png
from notifications.wallet import WalletPassData, wallet_links

logger = logging.getLogger(__name__)

QR_CONTENT_ID = "ticket-qr"


@dataclass(frozen=True)
class TicketEmail:
    """One confirmation message, addressed to a single attendee."""

    recipient: str
    attendee_name: str
    ticket_id: str
    event_id: str
    ticket_type_id: str
    event_title: str
    event_date: datetime
    location: str
    ticket_type_name: str
    order_id: str
    qr_payload: str


@dataclass(frozen=True)
class CashierInvitation:
    recipient: str
    name: str
    username: str
    owner_name: str
    temporary_password: str | None = None


class TicketNotifier(ABC):
    @abstractmethod
    def send_ticket_confirmation(self, message: TicketEmail) -> None:
        ...


class CashierNotifier(ABC):
    @abstractmethod
    def send_cashier_invitation(self, invitation: CashierInvitation) -> None:
        ...


class EmailTicketNotifier(TicketNotifier):
    """Sends ticket confirmations with an inline QR code and wallet links."""

    def send_ticket_confirmation(self, message: TicketEmail) -> None:
        links = wallet_links(
            WalletPassData(
                ticket_id=message.ticket_id,
                event_id=message.event_id,
                ticket_type_id=message.ticket_type_id,
                attendee_name=message.attendee_name,
                event_name=message.event_title,
                event_date=message.event_date,
            )
        )
        context = {
            "attendee_name": message.attendee_name,
            "event_title": message.event_title,
            "event_date": message.event_date,
            "location": message.location,
            "ticket_type_name": message.ticket_type_name,
            "order_id": message.order_id,
            "wallet_links": links,
            "qr_cid": QR_CONTENT_ID,
            "support_email": settings.SUPPORT_EMAIL,
        }
        email = EmailMultiAlternatives(
            subject=f"Your Ticket for {message.event_title}",
            body=render_to_string("notifications/ticket_confirmation.txt", context),
            from_email=settings.DEFAULT_FROM_EMAIL,
            to=[message.recipient],
        )
        email.attach_alternative(render_to_string("notifications/ticket_confirmation.html", context), "text/html")
        email.mixed_subtype = "related"
        image = MIMEImage(qr_png(message.qr_payload), _subtype="png")
        image.add_header("Content-ID", f"<{QR_CONTENT_ID}>")
        image.add_header("Content-Disposition", "inline", filename="ticket-qr.png")
        email.attach(image)
        email.send(fail_silently=False)
        logger.info("Ticket confirmation for %s sent to %s", message.ticket_id, message.recipient)


class EmailCashierNotifier(CashierNotifier):
    def send_cashier_invitation(self, invitation: CashierInvitation) -> None:
        body = render_to_string(
            "notifications/cashier_invitation.txt",
            {
                "name": invitation.name,
                "username": invitation.username,
                "owner_name": invitation.owner_name,
                "temporary_password": invitation.temporary_password,
                "support_email": settings.SUPPORT_EMAIL,
            },
        )
        send_mail(
            "You have been added as a cashier",
            body,
            settings.DEFAULT_FROM_EMAIL,
            [invitation.recipient],
            fail_silently=False,
        )
        logger.info("Cashier invitation sent to %s", invitation.recipient)
