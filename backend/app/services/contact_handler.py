"""
Contact form request handler.

Turns one HTTP request (method + body) into a ContactResponse:

  OPTIONS            → 200, empty body (CORS preflight)
  anything but POST  → 405
  missing config     → 500 (checked before the body is parsed)
  bad JSON           → 400
  missing fields     → 400
  notification fails → gateway status mirrored, or 500 on transport failure
  auto-reply fails   → depends on ContactSettings.auto_reply_policy
  otherwise          → 200 {"success": true}

The handler is framework-neutral; app/routers/contact.py binds it to FastAPI.
Settings and the gateway are injected so the branching can be tested against a
fake gateway without network access or environment changes.

Every call sends real email. There is no deduplication, so a client retrying a
failed request may produce duplicate notifications.
"""

import json
import logging
from typing import Any, Callable, Dict, Optional, Union

from pydantic import ValidationError

from app.config import ConfigurationError, ContactSettings, load_settings
from app.models.contact import ContactResponse, ContactSubmission
from app.services.email_gateway import (
    EmailGateway,
    GatewayError,
    ResendGateway,
    TransportError,
)
from app.services.email_templates import build_auto_reply, build_notification

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

REQUIRED_FIELDS = ("name", "email", "subject", "message")

INVALID_JSON_ERROR = "Invalid JSON body"
MISSING_FIELDS_ERROR = f"Missing required fields: {', '.join(REQUIRED_FIELDS)}"
METHOD_NOT_ALLOWED_ERROR = "Method not allowed"
SEND_FAILED_ERROR = "Failed to send email"
AUTO_REPLY_FAILED_ERROR = "Failed to send auto-reply"

SettingsLoader = Callable[[], ContactSettings]
GatewayFactory = Callable[[ContactSettings], EmailGateway]


class SubmissionError(Exception):
    """The request body is not a valid contact submission (→ 400)."""


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------

def parse_body(body: Union[str, bytes, Dict[str, Any], None]) -> Dict[str, Any]:
    """
    Return the request body as a dict.

    Hosts differ in whether they hand over a parsed object or the raw text, so
    both are accepted. An empty body is treated as ``{}``.

    Raises:
        SubmissionError: the body is not JSON, or not a JSON object.
    """
    if isinstance(body, dict):
        return body
    if body is None:
        return {}
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            raise SubmissionError(INVALID_JSON_ERROR)
    if not body.strip():
        return {}
    try:
        data = json.loads(body)
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        raise SubmissionError(INVALID_JSON_ERROR)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SubmissionError(INVALID_JSON_ERROR)
    return data


def validate_submission(data: Dict[str, Any]) -> ContactSubmission:
    """
    Build a ContactSubmission from parsed JSON.

    Missing, null, empty and non-string values are all rejected the same
    way. A string that decodes to invalid Unicode (a lone surrogate escape)
    is reported as an invalid body.

    Raises:
        SubmissionError: with the list of required field names, or the
            invalid-body message.
    """
    try:
        return ContactSubmission.model_validate(data)
    except ValidationError as exc:
        if all(err["type"] == "value_error" for err in exc.errors()):
            raise SubmissionError(INVALID_JSON_ERROR)
        raise SubmissionError(MISSING_FIELDS_ERROR)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

def _respond(status_code: int, body: Optional[Dict[str, Any]] = None) -> ContactResponse:
    return ContactResponse(status_code=status_code, body=body, headers=dict(CORS_HEADERS))


def _error(status_code: int, message: str, **extra: Any) -> ContactResponse:
    return _respond(status_code, {"error": message, **extra})


# ---------------------------------------------------------------------------
# Handler
# ---------------------------------------------------------------------------

async def _send_auto_reply(
    gateway: EmailGateway,
    submission: ContactSubmission,
    settings: ContactSettings,
) -> Optional[ContactResponse]:
    """
    Send the visitor acknowledgement.

    Returns None when the request should still succeed, or the error response
    when the "fatal" policy turns an auto-reply failure into a failed request.
    """
    message = build_auto_reply(submission, settings)
    try:
        await gateway.send(message)
        return None
    except GatewayError as exc:
        details: Any = exc.details
        logger.warning(
            "Auto-reply failed (visitors may not receive it until RESEND_FROM_EMAIL "
            "is a verified-domain sender): %s %s",
            exc.status_code,
            exc.details,
        )
    except TransportError as exc:
        details = str(exc)
        logger.warning("Auto-reply failed: %s", exc)

    if settings.auto_reply_policy != "fatal":
        return None

    # The owner notification already went out; tell the caller so.
    return _error(
        500,
        AUTO_REPLY_FAILED_ERROR,
        details=details,
        notification_sent=True,
    )


async def handle_contact_request(
    method: str,
    body: Union[str, bytes, Dict[str, Any], None],
    settings_loader: SettingsLoader = load_settings,
    gateway_factory: GatewayFactory = ResendGateway.from_settings,
) -> ContactResponse:
    """
    Handle one contact-form request.

    Args:
        method: HTTP method.
        body: Raw request body, or an already parsed dict.
        settings_loader: Returns the settings for this request; raises
            ConfigurationError when they are incomplete.
        gateway_factory: Builds the email gateway for the resolved settings.

    Returns:
        ContactResponse. Errors are mapped to responses, never raised.
    """
    method = (method or "").upper()

    if method == "OPTIONS":
        return _respond(200)

    if method != "POST":
        return _error(405, METHOD_NOT_ALLOWED_ERROR)

    try:
        settings = settings_loader()
    except ConfigurationError as exc:
        logger.error("Contact endpoint misconfigured: %s", exc)
        return _error(500, str(exc))

    try:
        submission = validate_submission(parse_body(body))
    except SubmissionError as exc:
        return _error(400, str(exc))

    gateway = gateway_factory(settings)

    try:
        await gateway.send(build_notification(submission, settings))
    except GatewayError as exc:
        logger.error("Notification rejected by email gateway: %s", exc)
        return _error(exc.status_code, exc.message or SEND_FAILED_ERROR)
    except TransportError as exc:
        logger.error("Notification not sent: %s", exc)
        return _error(500, SEND_FAILED_ERROR)

    if settings.auto_reply_policy != "off":
        failure = await _send_auto_reply(gateway, submission, settings)
        if failure is not None:
            return failure

    return _respond(200, {"success": True})
