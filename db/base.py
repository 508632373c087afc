"""
SQLAlchemy declarative base and common mixins.

Provides base class and reusable mixins for database models.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Provides common configuration for all models in the application.
    """

    # Type annotation map for SQLAlchemy 2.0
    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """
    Mixin to add created_at and updated_at timestamps to models.

    Values are assigned on insert, client-side with microsecond precision
    and server-side as a fallback for rows written outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        doc="Timestamp when the record was created",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        doc="Timestamp when the record was last updated",
    )
