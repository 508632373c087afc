"""
Common types shared across schema modules.
"""

from datetime import UTC, datetime
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field


def _assume_utc(v: datetime) -> datetime:
    """Attach UTC to naive timestamps (SQLite drops tzinfo on read)."""
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v


# UTC timestamp
Timestamp = Annotated[datetime, AfterValidator(_assume_utc)]


class ErrorResponse(BaseModel):
    """Error body returned by the webhook endpoint."""

    error: str = Field(examples=["Unauthorized", "Invalid payload", "Internal server error"])
    fields: list[str] | None = Field(
        default=None, description="Offending payload fields (validation errors only)"
    )
