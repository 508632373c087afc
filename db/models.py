"""
SQLAlchemy ORM models for the Mail Digest service.

A single table holds every ingested email together with the summary and
labels generated for it.
"""

from sqlalchemy import JSON, Index, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin

# Native text[] on PostgreSQL, JSON array elsewhere (SQLite in tests)
LabelList = ARRAY(Text()).with_variant(JSON(), "sqlite")


class EmailMessage(Base, TimestampMixin):
    """
    One ingested email plus its generated summary and labels.

    Rows are written exactly once by the webhook with insert-or-ignore
    semantics keyed on the provider message id, and never updated.
    """

    __tablename__ = "messages"

    # Primary key (provider-assigned MessageID)
    id: Mapped[str] = mapped_column(
        Text,
        primary_key=True,
        doc="Provider-assigned message id",
    )

    subject: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Email subject line",
    )

    sender: Mapped[str] = mapped_column(
        "from",
        Text,
        nullable=False,
        doc="From header as sent by the provider",
    )

    recipient: Mapped[str] = mapped_column(
        "to",
        Text,
        nullable=False,
        doc="To header as sent by the provider",
    )

    date: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Provider date string, stored verbatim",
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Plain-text body",
    )

    attachments: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="Attachment descriptors as an opaque JSON string",
    )

    # Generated metadata
    summary: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        doc="Generated one to two sentence summary",
    )

    labels: Mapped[list[str]] = mapped_column(
        LabelList,
        nullable=False,
        default=list,
        doc="Generated topical labels (zero to two)",
    )

    __table_args__ = (Index("ix_messages_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<EmailMessage(id={self.id}, subject={self.subject!r}, labels={self.labels})>"
