"""
Email bodies and headers for contact submissions.

Two messages are built per submission:
  - the owner notification, carrying all four submitted fields
  - the auto-reply to the visitor, a fixed acknowledgement that only
    interpolates the visitor's name

Every user-supplied value goes through escape_html before interpolation.

Public API:
  build_notification(submission, settings) -> OutboundMessage
  build_auto_reply(submission, settings) -> OutboundMessage
  format_sender(from_address, sender_name) -> str
"""

from app.config import ContactSettings
from app.models.contact import ContactSubmission, OutboundMessage
from app.services.html_escape import escape_html

AUTO_REPLY_SUBJECT_SUFFIX = " – Thanks for reaching out"


# ---------------------------------------------------------------------------
# HTML bodies
# ---------------------------------------------------------------------------

def notification_html(submission: ContactSubmission) -> str:
    """Owner notification body. Newlines in the message become <br>."""
    message = escape_html(submission.message).replace("\n", "<br>")
    return (
        f"<p><strong>Name:</strong> {escape_html(submission.name)}</p>\n"
        f"<p><strong>Email:</strong> {escape_html(submission.email)}</p>\n"
        f"<p><strong>Subject:</strong> {escape_html(submission.subject)}</p>\n"
        f"<p><strong>Message:</strong></p>\n"
        f"<p>{message}</p>\n"
    )


def auto_reply_html(name: str, sender_name: str) -> str:
    return (
        f"<p>Hi {escape_html(name)},</p>\n"
        f"<p>Thanks for getting in touch! Your message has reached "
        f"<strong>{escape_html(sender_name)}</strong>.</p>\n"
        f"<p>I'm currently busy with a lot of work and projects but will take "
        f"some time and get back to you soon. Stay tuned!</p>\n"
        f"<p>— {escape_html(sender_name)}</p>\n"
    )


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------

def format_sender(from_address: str, sender_name: str) -> str:
    """
    Return ``"Name <address>"`` for a bare address.

    Addresses that already carry a display name (contain ``<``) are
    returned unchanged.
    """
    if "<" in from_address:
        return from_address
    return f"{sender_name} <{from_address}>"


def notification_subject(subject: str, prefix: str) -> str:
    return f"{prefix} {subject}" if prefix else subject


def auto_reply_subject(subject: str) -> str:
    return f"Re: {subject}{AUTO_REPLY_SUBJECT_SUFFIX}"


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

def build_notification(
    submission: ContactSubmission, settings: ContactSettings
) -> OutboundMessage:
    """Message to the site owner; replies go straight to the visitor."""
    return OutboundMessage(
        from_=settings.from_address,
        to=settings.recipient_email,
        reply_to=submission.email,
        subject=notification_subject(submission.subject, settings.subject_prefix),
        html=notification_html(submission),
    )


def build_auto_reply(
    submission: ContactSubmission, settings: ContactSettings
) -> OutboundMessage:
    """Acknowledgement to the visitor; replies go to the site owner."""
    return OutboundMessage(
        from_=format_sender(settings.from_address, settings.sender_name),
        to=[submission.email.strip()],
        reply_to=[settings.recipient_email],
        subject=auto_reply_subject(submission.subject),
        html=auto_reply_html(submission.name, settings.sender_name),
    )
