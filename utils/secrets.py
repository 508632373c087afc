"""
Utilities for handling secret values.

Provides helpers to unwrap Pydantic SecretStr values and to compare
caller-supplied credentials against configured ones.
"""

import hmac

from pydantic import SecretStr


def secret_to_str(secret: SecretStr | None) -> str | None:
    """
    Convert Pydantic SecretStr to plain string.

    Args:
        secret: SecretStr instance or None

    Returns:
        str | None: Plain string value or None if input is None (or empty)

    Example:
        >>> secret_to_str(SecretStr("sk-1234567890"))
        'sk-1234567890'
        >>> secret_to_str(None) is None
        True
    """
    if secret is None:
        return None

    return secret.get_secret_value() or None


def secrets_match(supplied: str, expected: str) -> bool:
    """
    Exact string equality that does not leak timing information.

    Args:
        supplied: Value taken from the request
        expected: Configured value

    Returns:
        bool: True only if both strings are identical
    """
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))
