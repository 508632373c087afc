"""
Exception hierarchy for the ingestion pipeline.

Each error knows the HTTP status it maps to and the public message that is
safe to return to the caller. The underlying cause is chained via
``raise ... from exc`` and only ever logged.
"""


class IngestionError(Exception):
    """Base class for every failure inside the ingestion pipeline."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def to_body(self) -> dict:
        """JSON body returned to the webhook caller."""
        return {"error": self.public_message}


class AuthError(IngestionError):
    """Missing or invalid webhook credentials."""

    status_code = 401

    MISSING_HEADER = "missing header"
    BAD_CREDENTIALS = "bad credentials"

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason

    @property
    def public_message(self) -> str:  # type: ignore[override]
        if self.reason == self.MISSING_HEADER:
            return "Missing signature header"
        return "Unauthorized"


class PayloadValidationError(IngestionError):
    """The inbound body is not a structurally valid email payload."""

    status_code = 400
    public_message = "Invalid payload"

    def __init__(self, fields: list[str]):
        super().__init__(f"invalid fields: {', '.join(fields)}")
        self.fields = fields

    def to_body(self) -> dict:
        return {"error": self.public_message, "fields": self.fields}


class GenerationError(IngestionError):
    """The summary/label generation call failed or returned unusable output."""


class StoreError(IngestionError):
    """Persisting the message failed."""
