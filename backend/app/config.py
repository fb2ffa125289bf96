"""
Contact endpoint configuration.

Settings are read from the process environment (populated from a local .env
file by python-dotenv in development) into an immutable ContactSettings
object. The request handler receives a loader rather than reading os.environ
itself, so tests can inject settings without touching the environment.

Environment variables
---------------------
RECIPIENT_EMAIL            Inbox that receives contact submissions (required).
RESEND_API_KEY             Resend API key, sent as a bearer token (required).
RESEND_FROM_EMAIL          Sender address, optionally "Name <addr@domain>".
                           Defaults to Resend's shared sandbox sender, which
                           Resend only delivers to a limited set of recipients,
                           so auto-replies need a verified-domain sender.
CONTACT_AUTO_REPLY_POLICY  "best-effort" (default), "fatal" or "off".
CONTACT_SENDER_NAME        Display name used to format the auto-reply sender.
CONTACT_SUBJECT_PREFIX     Prefix for the owner notification subject.
RESEND_API_URL             Resend send-email endpoint.
CONTACT_GATEWAY_TIMEOUT    Outbound timeout in seconds (unset: no timeout).
"""

import os
from typing import Literal, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

DEFAULT_FROM_ADDRESS = "onboarding@resend.dev"
DEFAULT_API_URL = "https://api.resend.com/emails"
DEFAULT_SENDER_NAME = "Portfolio"
DEFAULT_SUBJECT_PREFIX = "[Portfolio]"

AUTO_REPLY_POLICIES = ("best-effort", "fatal", "off")

AutoReplyPolicy = Literal["best-effort", "fatal", "off"]


class ConfigurationError(Exception):
    """Raised when required server configuration is missing or invalid."""


class ContactSettings(BaseModel):
    """Resolved configuration for one contact request."""

    model_config = {"frozen": True}

    recipient_email: str
    api_key: str
    from_address: str = DEFAULT_FROM_ADDRESS
    auto_reply_policy: AutoReplyPolicy = "best-effort"
    sender_name: str = DEFAULT_SENDER_NAME
    subject_prefix: str = DEFAULT_SUBJECT_PREFIX
    api_url: str = DEFAULT_API_URL
    timeout: Optional[float] = None


def _get(environ: Mapping[str, str], key: str) -> str:
    """Return a stripped environment value, treating unset and blank alike."""
    return (environ.get(key) or "").strip()


def load_settings(environ: Optional[Mapping[str, str]] = None) -> ContactSettings:
    """
    Build ContactSettings from an environment mapping.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        ContactSettings with optional values defaulted.

    Raises:
        ConfigurationError: RECIPIENT_EMAIL or RESEND_API_KEY is missing, or an
            optional value cannot be parsed.
    """
    if environ is None:
        environ = os.environ

    recipient = _get(environ, "RECIPIENT_EMAIL")
    api_key = _get(environ, "RESEND_API_KEY")
    if not recipient or not api_key:
        raise ConfigurationError(
            "Server misconfiguration: set RECIPIENT_EMAIL and RESEND_API_KEY in environment."
        )

    policy = (_get(environ, "CONTACT_AUTO_REPLY_POLICY") or "best-effort").lower()
    if policy not in AUTO_REPLY_POLICIES:
        raise ConfigurationError(
            f"Server misconfiguration: CONTACT_AUTO_REPLY_POLICY must be one of "
            f"{', '.join(AUTO_REPLY_POLICIES)} (got {policy!r})."
        )

    timeout: Optional[float] = None
    raw_timeout = _get(environ, "CONTACT_GATEWAY_TIMEOUT")
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"Server misconfiguration: CONTACT_GATEWAY_TIMEOUT must be a number "
                f"of seconds (got {raw_timeout!r})."
            )
        if timeout <= 0:
            raise ConfigurationError(
                "Server misconfiguration: CONTACT_GATEWAY_TIMEOUT must be positive."
            )

    return ContactSettings(
        recipient_email=recipient,
        api_key=api_key,
        from_address=_get(environ, "RESEND_FROM_EMAIL") or DEFAULT_FROM_ADDRESS,
        auto_reply_policy=policy,
        sender_name=_get(environ, "CONTACT_SENDER_NAME") or DEFAULT_SENDER_NAME,
        subject_prefix=_get(environ, "CONTACT_SUBJECT_PREFIX") or DEFAULT_SUBJECT_PREFIX,
        api_url=_get(environ, "RESEND_API_URL") or DEFAULT_API_URL,
        timeout=timeout,
    )
