"""
Inbound payload validation.

Turns a raw request body into an ``InboundEmail`` or fails closed with a
``PayloadValidationError`` naming every offending field.
"""

from pydantic import ValidationError

from ingestion.errors import PayloadValidationError
from schemas.email import InboundEmail


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def parse_inbound_email(raw_body: bytes | str) -> InboundEmail:
    """
    Parse and validate a webhook body.

    Args:
        raw_body: JSON document as received

    Returns:
        InboundEmail: Validated email record

    Raises:
        PayloadValidationError: Invalid JSON, non-object body, missing
            required fields or wrong primitive types
    """
    try:
        return InboundEmail.model_validate_json(raw_body)
    except ValidationError as exc:
        fields: list[str] = []
        for error in exc.errors():
            path = _field_path(error["loc"])
            if path not in fields:
                fields.append(path)
        raise PayloadValidationError(fields) from exc
