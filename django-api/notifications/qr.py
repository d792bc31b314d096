"""QR payloads and images for tickets."""

import base64
import io

import qrcode
from django.core import signing

QR_SALT = "notifications.ticket-qr"


def ticket_qr_payload(ticket_id, event_id, order_id: str) -> str:
    """Signed opaque token bound to one ticket; verified at check-in."""
    return signing.dumps({"t": str(ticket_id), "e": str(event_id), "o": order_id}, salt=QR_SALT, compress=True)


def read_ticket_qr_payload(payload: str) -> dict:
    """Return the ticket claims of a payload. Raises ``signing.BadSignature`` when tampered."""
    data = signing.loads(payload, salt=QR_SALT)
    return {"ticket_id": data["t"], "event_id": data["e"], "order_id": data["o"]}


def qr_png(data: str, box_size: int = 6, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def qr_data_uri(data: str, box_size: int = 6, border: int = 2) -> str:
    """PNG data URI with the QR code of ``data``."""
    if not data:
        return ""
    encoded = base64.b64encode(qr_png(data, box_size, border)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
