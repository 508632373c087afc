"""
Shared handling of LangChain ``with_structured_output(include_raw=True)`` results.
"""

from typing import Any

from models.base import SchemaT


class StructuredOutputError(ValueError):
    """The model answered but the answer does not match the requested schema."""


def unpack_structured_result(
    result: dict[str, Any], schema: type[SchemaT]
) -> tuple[SchemaT, dict[str, Any]]:
    """
    Extract the parsed object and token usage from an ``include_raw`` result.

    Args:
        result: Dict with ``raw``, ``parsed`` and ``parsing_error`` keys
        schema: Expected output type

    Returns:
        tuple: (parsed object, usage metadata dict)

    Raises:
        StructuredOutputError: If parsing failed or the output is missing
    """
    raw = result.get("raw")
    usage = dict(getattr(raw, "usage_metadata", None) or {})

    parsing_error = result.get("parsing_error")
    if parsing_error is not None:
        raise StructuredOutputError(
            f"Model output did not match {schema.__name__}: {parsing_error}"
        ) from parsing_error

    parsed = result.get("parsed")
    if parsed is None:
        raise StructuredOutputError(f"Model returned no {schema.__name__} object")

    if not isinstance(parsed, schema):
        parsed = schema.model_validate(parsed)

    return parsed, usage
