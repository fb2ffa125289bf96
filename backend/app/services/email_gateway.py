"""
Outbound email gateway.

The request handler only sees the narrow EmailGateway interface:

  send(message) -> DeliveryResult      accepted by the provider (2xx)
                 raises GatewayError   provider answered with a non-2xx status
                 raises TransportError provider could not be reached

ResendGateway implements it against the Resend REST API with httpx. A 2xx
from Resend means the message was accepted for delivery, not delivered.
"""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from app.config import ContactSettings
from app.models.contact import OutboundMessage

logger = logging.getLogger(__name__)


class DeliveryResult:
    """A message accepted by the provider."""

    def __init__(self, status_code: int, payload: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.payload = payload or {}

    @property
    def id(self) -> Optional[str]:
        return self.payload.get("id")


class GatewayError(Exception):
    """The provider rejected the message with a non-2xx status."""

    def __init__(self, status_code: int, message: Optional[str], details: Any = None):
        self.status_code = status_code
        self.message = message
        self.details = details
        super().__init__(f"Email gateway returned {status_code}: {message or 'no message'}")


class TransportError(Exception):
    """The provider could not be reached (connection refused, timeout, ...)."""


class EmailGateway(Protocol):
    async def send(self, message: OutboundMessage) -> DeliveryResult:
        ...


def _parse_json(response: httpx.Response) -> Dict[str, Any]:
    """Return the response JSON object, or {} when the body is not one."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


class ResendGateway:
    """
    Send email through the Resend API.

    Args:
        api_key: Resend API key, sent as ``Authorization: Bearer <key>``.
        api_url: Send-email endpoint.
        timeout: Seconds before giving up; None disables the client timeout so
            the hosting platform's request timeout governs a hung provider.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        api_key: str,
        api_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: ContactSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "ResendGateway":
        return cls(
            api_key=settings.api_key,
            api_url=settings.api_url,
            timeout=settings.timeout,
            transport=transport,
        )

    async def send(self, message: OutboundMessage) -> DeliveryResult:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    headers={
                        "Content-Type": "application/json",
                        "Authorization": f"Bearer {self.api_key}",
                    },
                    json=message.to_payload(),
                )
        except httpx.HTTPError as exc:
            raise TransportError(f"Could not reach email gateway: {exc}") from exc

        data = _parse_json(response)

        if not response.is_success:
            raise GatewayError(response.status_code, data.get("message"), data)

        logger.info("Email gateway accepted message %s", data.get("id"))
        return DeliveryResult(response.status_code, data)
