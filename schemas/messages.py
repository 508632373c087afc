"""
Stored message schemas.

Defines data models for:
- Messages returned by the read-side API
- Webhook success response envelope
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from schemas.common import Timestamp


class MessageOut(BaseModel):
    """
    A stored email together with its generated summary and labels.

    Built from the ``EmailMessage`` ORM row.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "id": "73e6d360-66eb-11e1-8e72-a8904824019b",
                    "subject": "Lunch on Friday?",
                    "from": "alice@example.com",
                    "to": "inbox@example.com",
                    "date": "Fri, 1 Mar 2024 09:30:00 +0000",
                    "body": "Are you free for lunch on Friday?",
                    "summary": "Alice asks whether you are free for lunch on Friday.",
                    "labels": ["scheduling"],
                    "created_at": "2024-03-01T09:30:05Z",
                    "updated_at": "2024-03-01T09:30:05Z",
                }
            ]
        },
    )

    id: str = Field(description="Provider-assigned message id")
    subject: str
    sender: str = Field(serialization_alias="from")
    recipient: str = Field(serialization_alias="to")
    date: str
    body: str
    summary: str = Field(description="Generated one to two sentence summary")
    labels: list[str] = Field(default_factory=list, description="Generated topical labels")
    created_at: Timestamp
    updated_at: Timestamp


class MessageListResponse(BaseModel):
    """All stored messages, oldest first."""

    data: list[MessageOut]


class MessageDetailResponse(BaseModel):
    """One stored message."""

    data: MessageOut


class IngestedEmail(BaseModel):
    """Payload of a successful webhook call."""

    email: dict[str, Any] = Field(
        description="The validated inbound email, in provider field naming"
    )
    summary: str
    labels: list[str]


class WebhookResponse(BaseModel):
    """Envelope returned by ``POST /api/webhooks/email`` on success."""

    data: IngestedEmail
