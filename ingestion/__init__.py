"""
Email ingestion: error taxonomy and payload validation.

The request pipeline itself lives in ``ingestion.pipeline``; it is not
re-exported here because it depends on the agents and security packages,
which in turn import ``ingestion.errors``.
"""

from ingestion.errors import (
    AuthError,
    GenerationError,
    IngestionError,
    PayloadValidationError,
    StoreError,
)
from ingestion.validation import parse_inbound_email

__all__ = [
    "AuthError",
    "GenerationError",
    "IngestionError",
    "PayloadValidationError",
    "StoreError",
    "parse_inbound_email",
]
