"""
Pydantic schemas for the Mail Digest API.

Provides data models for:
- Inbound email webhook payloads
- Structured summary output requested from the LLM
- Stored messages returned by the read side
"""

from schemas.common import ErrorResponse, Timestamp
from schemas.email import AttachmentDescriptor, EmailSummary, InboundEmail
from schemas.messages import (
    IngestedEmail,
    MessageDetailResponse,
    MessageListResponse,
    MessageOut,
    WebhookResponse,
)

__all__ = [
    # Common
    "ErrorResponse",
    "Timestamp",
    # Email
    "AttachmentDescriptor",
    "EmailSummary",
    "InboundEmail",
    # Messages
    "IngestedEmail",
    "MessageDetailResponse",
    "MessageListResponse",
    "MessageOut",
    "WebhookResponse",
]
