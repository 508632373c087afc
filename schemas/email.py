"""
Inbound email and generated summary schemas.

The canonical wire format is the Postmark inbound webhook naming
(``MessageID``, ``Subject``, ``From``, ``To``, ``Date``, ``TextBody``,
``Attachments``). The lowercase spelling (``id``, ``subject``, ``from``,
``to``, ``date``, ``body``, ``attachments``) is accepted as an alternate
name for the same fields. Serialization always uses the canonical naming.
"""

import json

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


def _wire_field(canonical: str, alternate: str, **kwargs):
    return Field(
        validation_alias=AliasChoices(canonical, alternate),
        serialization_alias=canonical,
        **kwargs,
    )


class AttachmentDescriptor(BaseModel):
    """
    Attachment metadata as sent by the mail provider.

    Not interpreted by the pipeline; stored as an opaque JSON blob.
    """

    model_config = ConfigDict(extra="ignore", strict=True, populate_by_name=True)

    name: str | None = _wire_field("Name", "name", default=None)
    content_type: str | None = _wire_field("ContentType", "content_type", default=None)
    content_length: int | None = _wire_field("ContentLength", "content_length", default=None)
    content_id: str | None = _wire_field("ContentID", "content_id", default=None)
    content: str | None = _wire_field("Content", "content", default=None)


class InboundEmail(BaseModel):
    """
    Parsed email posted by the inbound mail provider.

    Strict mode: strings must be JSON strings and ``ContentLength`` a JSON
    integer. Unknown fields are ignored.
    """

    model_config = ConfigDict(
        extra="ignore",
        strict=True,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "MessageID": "73e6d360-66eb-11e1-8e72-a8904824019b",
                    "Subject": "Lunch on Friday?",
                    "From": "alice@example.com",
                    "To": "inbox@example.com",
                    "Date": "Fri, 1 Mar 2024 09:30:00 +0000",
                    "TextBody": "Are you free for lunch on Friday?",
                    "Attachments": [],
                }
            ]
        },
    )

    message_id: str = _wire_field("MessageID", "id", description="Provider-assigned message id")
    subject: str = _wire_field("Subject", "subject")
    sender: str = _wire_field("From", "from")
    recipient: str = _wire_field("To", "to")
    date: str = _wire_field("Date", "date", description="Provider date string, kept verbatim")
    body: str = _wire_field("TextBody", "body", description="Plain-text body")
    attachments: list[AttachmentDescriptor] = _wire_field(
        "Attachments", "attachments", default_factory=list
    )

    def to_wire(self) -> dict:
        """Serialize with the canonical provider field names."""
        return self.model_dump(by_alias=True, mode="json")

    def attachments_blob(self) -> str:
        """Attachments serialized as the opaque JSON blob that gets stored."""
        return json.dumps(self.to_wire()["Attachments"])


class EmailSummary(BaseModel):
    """Structured output requested from the language model."""

    summary: str = Field(description="One to two sentence summary of the email.")
    labels: list[str] = Field(description="One or two short topical labels for the email.")
