"""Client for the hosted checkout payment gateway.

Amounts are expressed in baisa (1/1000 of the currency unit). The gateway is
never trusted for anything but session status: callers re-fetch sessions
instead of relying on webhook payloads.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import requests
from django.conf import settings

from common.errors import UpstreamFailureError

logger = logging.getLogger(__name__)

PAID = "paid"
UNPAID = "unpaid"


@dataclass(frozen=True)
class CheckoutItem:
    name: str
    quantity: int
    unit_amount: int


@dataclass(frozen=True)
class CheckoutSession:
    """A created session and the URL the customer is redirected to."""

    session_id: str
    checkout_url: str


@dataclass(frozen=True)
class PaymentSession:
    """Gateway view of a checkout session."""

    session_id: str
    payment_status: str
    total_amount: int | None = None
    client_reference_id: str | None = None
    metadata: dict = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAID


class PaymentGateway(ABC):
    """Interface for checkout session creation and status lookups."""

    @abstractmethod
    def create_session(
        self,
        client_reference_id: str,
        items: list[CheckoutItem],
        metadata: dict,
        customer_id: str | None = None,
    ) -> CheckoutSession:
        ...

    @abstractmethod
    def get_session(self, session_id: str) -> PaymentSession:
        ...

    def check_payment_status(self, session_id: str) -> str:
        """Return ``paid`` or ``unpaid``."""
        return PAID if self.get_session(session_id).is_paid else UNPAID


class ThawaniGateway(PaymentGateway):
    """Thawani checkout API over a shared ``requests.Session``."""

    def __init__(
        self,
        api_key: str,
        public_key: str,
        base_url: str,
        checkout_url: str,
        success_url: str,
        cancel_url: str,
        timeout: int = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.public_key = public_key
        self.base_url = base_url.rstrip("/") + "/"
        self.checkout_url = checkout_url.rstrip("/")
        self.success_url = success_url
        self.cancel_url = cancel_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json", "thawani-api-key": api_key})

    @classmethod
    def from_settings(cls) -> "ThawaniGateway":
        config = settings.PAYMENT_GATEWAY
        if not config["API_KEY"]:
            logger.warning("Payment gateway API key is not configured")
        return cls(
            api_key=config["API_KEY"],
            public_key=config["PUBLIC_KEY"],
            base_url=config["BASE_URL"],
            checkout_url=config["CHECKOUT_URL"],
            success_url=config["SUCCESS_URL"],
            cancel_url=config["CANCEL_URL"],
            timeout=config["TIMEOUT"],
        )

    def create_session(
        self,
        client_reference_id: str,
        items: list[CheckoutItem],
        metadata: dict,
        customer_id: str | None = None,
    ) -> CheckoutSession:
        payload = {
            "client_reference_id": client_reference_id,
            "products": [
                {"name": item.name[:40], "quantity": item.quantity, "unit_amount": item.unit_amount}
                for item in items
            ],
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "metadata": metadata,
        }
        if customer_id:
            payload["customer_id"] = customer_id
        data = self._request("POST", "checkout/session", json=payload)
        session_id = data.get("session_id")
        if not session_id:
            logger.error("Payment gateway response for %s has no session id", client_reference_id)
            raise UpstreamFailureError("Payment provider returned an invalid response")
        logger.info("Created payment session %s for %s", session_id, client_reference_id)
        return CheckoutSession(
            session_id=session_id,
            checkout_url=f"{self.checkout_url}/pay/{session_id}?key={self.public_key}",
        )

    def get_session(self, session_id: str) -> PaymentSession:
        data = self._request("GET", f"checkout/session/{session_id}")
        return PaymentSession(
            session_id=data.get("session_id", session_id),
            payment_status=data.get("payment_status", UNPAID),
            total_amount=data.get("total_amount"),
            client_reference_id=data.get("client_reference_id"),
            metadata=data.get("metadata") or {},
        )

    def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            response = self.session.request(method, self.base_url + path, timeout=self.timeout, **kwargs)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as exc:
            logger.error("Payment gateway %s %s failed: %s", method, path, exc)
            raise UpstreamFailureError("Payment provider request failed") from exc
        except ValueError as exc:
            logger.error("Payment gateway %s %s returned invalid JSON", method, path)
            raise UpstreamFailureError("Payment provider returned an invalid response") from exc
        return body.get("data") or {}
