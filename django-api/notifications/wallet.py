"""Apple Wallet and Google Pay pass links for tickets.

Links point at this API's wallet endpoints and carry a signature so the pass
parameters cannot be edited by the holder.
"""

from dataclasses import dataclass
from datetime import datetime
from urllib.parse import urlencode

from django.conf import settings
from django.core import signing
from django.utils import timezone
from django.utils.crypto import constant_time_compare

WALLET_SALT = "notifications.wallet-pass"

PASS_PATHS = {
    "apple": "/api/wallet/pass",
    "google": "/api/wallet/gpay",
}


@dataclass(frozen=True)
class WalletPassData:
    ticket_id: str
    event_id: str
    ticket_type_id: str
    attendee_name: str
    event_name: str
    event_date: datetime


def _signer(kind: str) -> signing.Signer:
    return signing.Signer(salt=f"{WALLET_SALT}.{kind}")


def wallet_pass_url(kind: str, data: WalletPassData, base_url: str | None = None) -> str:
    """Build a signed pass URL. ``kind`` is ``apple`` or ``google``."""
    if kind not in PASS_PATHS:
        raise ValueError(f"Unknown wallet pass type: {kind}")
    timestamp = int(timezone.now().timestamp() * 1000)
    signature = _signer(kind).signature(f"{data.ticket_id}-{timestamp}")
    query = urlencode(
        {
            "ticketId": data.ticket_id,
            "eventId": data.event_id,
            "ticketTypeId": data.ticket_type_id,
            "attendee": data.attendee_name,
            "eventName": data.event_name,
            "eventDate": data.event_date.strftime("%Y-%m-%d"),
            "timestamp": timestamp,
            "signature": signature,
        }
    )
    base = (base_url or settings.PUBLIC_URL).rstrip("/")
    return f"{base}{PASS_PATHS[kind]}?{query}"


def wallet_links(data: WalletPassData) -> dict[str, str]:
    return {kind: wallet_pass_url(kind, data) for kind in PASS_PATHS}


def verify_wallet_signature(kind: str, ticket_id: str, timestamp: str, signature: str) -> bool:
    if kind not in PASS_PATHS:
        return False
    return constant_time_compare(_signer(kind).signature(f"{ticket_id}-{timestamp}"), signature)
