"""
Resend gateway tests.

Uses httpx.MockTransport in place of the network, so every request the
gateway makes is inspected and answered locally.
"""

import json

import httpx
import pytest

from app.config import ContactSettings
from app.models.contact import OutboundMessage
from app.services.contact_handler import handle_contact_request
from app.services.email_gateway import (
    DeliveryResult,
    GatewayError,
    ResendGateway,
    TransportError,
)


def _message() -> OutboundMessage:
    return OutboundMessage(
        from_="onboarding@resend.dev",
        to="owner@example.com",
        reply_to="a@b.com",
        subject="[Portfolio] Hi",
        html="<p>Hi</p>",
    )


def _gateway(handler) -> ResendGateway:
    return ResendGateway(
        api_key="re_test_key",
        api_url="https://api.resend.test/emails",
        transport=httpx.MockTransport(handler),
    )


class TestResendGateway:

    @pytest.mark.asyncio
    async def test_posts_json_with_bearer_token(self):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["method"] = request.method
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["content_type"] = request.headers["Content-Type"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"id": "msg-123"})

        result = await _gateway(handler).send(_message())

        assert captured["method"] == "POST"
        assert captured["url"] == "https://api.resend.test/emails"
        assert captured["auth"] == "Bearer re_test_key"
        assert captured["content_type"] == "application/json"
        assert captured["body"] == {
            "from": "onboarding@resend.dev",
            "to": "owner@example.com",
            "reply_to": "a@b.com",
            "subject": "[Portfolio] Hi",
            "html": "<p>Hi</p>",
        }
        assert isinstance(result, DeliveryResult)
        assert result.status_code == 200
        assert result.id == "msg-123"

    @pytest.mark.asyncio
    async def test_non_2xx_raises_gateway_error_with_message(self):
        def handler(request):
            return httpx.Response(
                422,
                json={"statusCode": 422, "name": "validation_error", "message": "Invalid `to` field"},
            )

        with pytest.raises(GatewayError) as exc_info:
            await _gateway(handler).send(_message())

        assert exc_info.value.status_code == 422
        assert exc_info.value.message == "Invalid `to` field"
        assert exc_info.value.details["name"] == "validation_error"

    @pytest.mark.asyncio
    async def test_non_json_error_body_has_no_message(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        with pytest.raises(GatewayError) as exc_info:
            await _gateway(handler).send(_message())

        assert exc_info.value.status_code == 502
        assert exc_info.value.message is None
        assert exc_info.value.details == {}

    @pytest.mark.asyncio
    async def test_success_with_empty_body(self):
        def handler(request):
            return httpx.Response(200)

        result = await _gateway(handler).send(_message())

        assert result.payload == {}
        assert result.id is None

    @pytest.mark.asyncio
    async def test_connection_error_raises_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError):
            await _gateway(handler).send(_message())

    @pytest.mark.asyncio
    async def test_timeout_raises_transport_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TransportError):
            await _gateway(handler).send(_message())

    def test_from_settings(self):
        settings = ContactSettings(
            recipient_email="owner@example.com",
            api_key="re_abc",
            api_url="https://api.resend.test/emails",
            timeout=5.0,
        )

        gateway = ResendGateway.from_settings(settings)

        assert gateway.api_key == "re_abc"
        assert gateway.api_url == "https://api.resend.test/emails"
        assert gateway.timeout == 5.0


class TestHandlerWithResendGateway:
    """Full request path through the real gateway over a mock transport."""

    @pytest.mark.asyncio
    async def test_unencodable_field_never_reaches_transport(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"id": "msg"})

        settings = ContactSettings(recipient_email="owner@example.com", api_key="re_test")
        body = (
            '{"name": "A\\ud800", "email": "a@b.com", '
            '"subject": "Hi", "message": "hello"}'
        )

        response = await handle_contact_request(
            "POST",
            body,
            settings_loader=lambda: settings,
            gateway_factory=lambda s: ResendGateway.from_settings(
                s, transport=httpx.MockTransport(handler)
            ),
        )

        assert response.status_code == 400
        assert response.body == {"error": "Invalid JSON body"}
        assert requests == []

    @pytest.mark.asyncio
    async def test_valid_submission_sends_both_messages(self):
        requests = []

        def handler(request):
            requests.append(json.loads(request.content))
            return httpx.Response(200, json={"id": f"msg-{len(requests)}"})

        settings = ContactSettings(recipient_email="owner@example.com", api_key="re_test")

        response = await handle_contact_request(
            "POST",
            json.dumps({"name": "Zoë", "email": "z@b.com", "subject": "Hi", "message": "héllo"}),
            settings_loader=lambda: settings,
            gateway_factory=lambda s: ResendGateway.from_settings(
                s, transport=httpx.MockTransport(handler)
            ),
        )

        assert response.status_code == 200
        assert [r["to"] for r in requests] == ["owner@example.com", ["z@b.com"]]
        assert "héllo" in requests[0]["html"]
