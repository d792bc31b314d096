"""Tests for QR payloads, wallet links and ticket emails."""

from datetime import datetime
from datetime import timezone as dt_timezone
from urllib.parse import parse_qs, urlparse

import pytest
from django.core import signing

from notifications.mailers import EmailTicketNotifier, TicketEmail
from notifications.qr import qr_data_uri, read_ticket_qr_payload, ticket_qr_payload
from notifications.wallet import WalletPassData, verify_wallet_signature, wallet_links, wallet_pass_url

EVENT_DATE = datetime(2026, 12, 5, 19, 30, tzinfo=dt_timezone.utc)


@pytest.fixture
def pass_data():
    return WalletPassData(
        ticket_id="t-1",
        event_id="e-1",
        ticket_type_id="tt-1",
        attendee_name="Alice Buyer",
        event_name="Jazz Night",
        event_date=EVENT_DATE,
    )


class TestQr:
    def test_payload_round_trip(self):
        payload = ticket_qr_payload("t-1", "e-1", "ORD-1")
        assert read_ticket_qr_payload(payload) == {"ticket_id": "t-1", "event_id": "e-1", "order_id": "ORD-1"}

    def test_tampered_payload_rejected(self):
        payload = ticket_qr_payload("t-1", "e-1", "ORD-1")
        with pytest.raises(signing.BadSignature):
            read_ticket_qr_payload(payload[:-2] + "xx")

    def test_data_uri(self):
        assert qr_data_uri("hello").startswith("data:image/png;base64,")
        assert qr_data_uri("") == ""


class TestWalletLinks:
    def test_apple_and_google_paths(self, pass_data, settings):
        settings.PUBLIC_URL = "https://tickets.test/"
        links = wallet_links(pass_data)
        assert urlparse(links["apple"]).path == "/api/wallet/pass"
        assert urlparse(links["google"]).path == "/api/wallet/gpay"
        assert links["apple"].startswith("https://tickets.test/api/")

    def test_query_carries_pass_fields(self, pass_data):
        query = parse_qs(urlparse(wallet_pass_url("apple", pass_data, base_url="https://x.test")).query)
        assert query["ticketId"] == ["t-1"]
        assert query["attendee"] == ["Alice Buyer"]
        assert query["eventDate"] == ["2026-12-05"]
        assert query["signature"][0]

    def test_signature_round_trip(self, pass_data):
        query = parse_qs(urlparse(wallet_pass_url("google", pass_data)).query)
        timestamp, signature = query["timestamp"][0], query["signature"][0]
        assert verify_wallet_signature("google", "t-1", timestamp, signature)
        assert not verify_wallet_signature("apple", "t-1", timestamp, signature)
        assert not verify_wallet_signature("google", "t-2", timestamp, signature)
        assert not verify_wallet_signature("samsung", "t-1", timestamp, signature)

    def test_unknown_kind(self, pass_data):
        with pytest.raises(ValueError):
            wallet_pass_url("samsung", pass_data)


class TestTicketEmail:
    def test_confirmation_has_inline_qr(self, mailoutbox):
        EmailTicketNotifier().send_ticket_confirmation(
            TicketEmail(
                recipient="alice@example.com",
                attendee_name="Alice Buyer",
                ticket_id="t-1",
                event_id="e-1",
                ticket_type_id="tt-1",
                event_title="Jazz Night",
                event_date=EVENT_DATE,
                location="Muscat",
                ticket_type_name="VIP",
                order_id="ORD-1",
                qr_payload=ticket_qr_payload("t-1", "e-1", "ORD-1"),
            )
        )

        [message] = mailoutbox
        assert message.subject == "Your Ticket for Jazz Night"
        assert message.to == ["alice@example.com"]
        assert "ORD-1" in message.body
        html, mimetype = message.alternatives[0]
        assert mimetype == "text/html"
        assert "cid:ticket-qr" in html
        [image] = message.attachments
        assert image["Content-ID"] == "<ticket-qr>"
