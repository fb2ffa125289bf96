"""
Pydantic models for the contact endpoint.

Models:
  ContactSubmission  — validated form fields from the request body
  OutboundMessage    — one email as sent to the Resend API
  ContactResponse    — framework-neutral result of the request handler
"""

from typing import Any, Dict, List, Union
from pydantic import BaseModel, Field, StrictStr, field_validator


class ContactSubmission(BaseModel):
    """
    A contact-form submission. Exists only for the duration of a request.

    All four fields are required non-empty strings; null, numbers and other
    JSON types are rejected rather than coerced. Email format is not checked.
    """

    name: StrictStr = Field(min_length=1)
    email: StrictStr = Field(min_length=1)
    subject: StrictStr = Field(min_length=1)
    message: StrictStr = Field(min_length=1)

    @field_validator("name", "email", "subject", "message")
    @classmethod
    def encodable_as_utf8(cls, value: str) -> str:
        # JSON "\ud800" escapes decode to lone surrogates, which cannot be sent
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid Unicode text")
        return value


class OutboundMessage(BaseModel):
    """
    Resend send-email payload.

    ``from`` is a Python keyword, so the field is ``from_`` and serializes
    under its alias. Use ``to_payload()`` to get the JSON body.
    """

    model_config = {"populate_by_name": True}

    from_: str = Field(alias="from")
    to: Union[str, List[str]]
    reply_to: Union[str, List[str]]
    subject: str
    html: str

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class ContactResponse(BaseModel):
    """Status, JSON body and headers produced for one request."""

    status_code: int
    body: Dict[str, Any] | None = None
    headers: Dict[str, str] = {}
