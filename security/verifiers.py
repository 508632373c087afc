"""
Credential verification for inbound webhook calls.

Two deployment variants are supported behind one interface:
- HTTP Basic auth (``Authorization: Basic base64(user:pass)``), which is what
  Postmark sends when the webhook URL embeds credentials
- A shared secret token carried in a dedicated header

Verification is pure and runs before the request body is read.
"""

import base64
import binascii
from abc import ABC, abstractmethod
from collections.abc import Mapping

from config import Settings
from ingestion.errors import AuthError
from utils.secrets import secret_to_str, secrets_match


def _lower_keys(headers: Mapping[str, str]) -> dict[str, str]:
    return {key.lower(): value for key, value in headers.items()}


class CredentialVerifier(ABC):
    """Checks caller-supplied credentials on a webhook request."""

    @property
    @abstractmethod
    def scheme(self) -> str:
        """Short name of the scheme (e.g. 'basic', 'secret')."""
        pass

    @abstractmethod
    def verify(self, headers: Mapping[str, str]) -> None:
        """
        Verify request credentials.

        Args:
            headers: Request headers (any case)

        Raises:
            AuthError: "missing header" or "bad credentials"
        """
        pass


class BasicAuthVerifier(CredentialVerifier):
    """HTTP Basic auth against one configured username/password pair."""

    def __init__(self, username: str, password: str):
        self._username = username
        self._password = password

    @property
    def scheme(self) -> str:
        return "basic"

    def verify(self, headers: Mapping[str, str]) -> None:
        auth_header = _lower_keys(headers).get("authorization")
        if not auth_header or not auth_header.startswith("Basic "):
            raise AuthError(AuthError.MISSING_HEADER)

        encoded = auth_header[len("Basic "):].strip()
        try:
            decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError):
            raise AuthError(AuthError.BAD_CREDENTIALS)

        username, sep, password = decoded.partition(":")
        if not sep:
            raise AuthError(AuthError.BAD_CREDENTIALS)

        # Evaluate both comparisons so timing does not reveal which one failed
        user_ok = secrets_match(username, self._username)
        password_ok = secrets_match(password, self._password)
        if not (user_ok and password_ok):
            raise AuthError(AuthError.BAD_CREDENTIALS)


class SharedSecretVerifier(CredentialVerifier):
    """Shared secret token carried in a dedicated header."""

    def __init__(self, secret: str, header_name: str = "X-Webhook-Secret"):
        self._secret = secret
        self.header_name = header_name

    @property
    def scheme(self) -> str:
        return "secret"

    def verify(self, headers: Mapping[str, str]) -> None:
        supplied = _lower_keys(headers).get(self.header_name.lower())
        if not supplied:
            raise AuthError(AuthError.MISSING_HEADER)

        if not secrets_match(supplied, self._secret):
            raise AuthError(AuthError.BAD_CREDENTIALS)


def build_verifier(settings: Settings) -> CredentialVerifier:
    """
    Create the verifier selected by ``settings.webhook_auth_mode``.

    Args:
        settings: Application settings

    Returns:
        CredentialVerifier: Configured verifier

    Raises:
        ValueError: If the selected mode has no credentials configured
    """
    if settings.webhook_auth_mode == "basic":
        password = secret_to_str(settings.webhook_password)
        if not settings.webhook_username or not password:
            raise ValueError(
                "WEBHOOK_USERNAME and WEBHOOK_PASSWORD must be set when WEBHOOK_AUTH_MODE=basic."
            )
        return BasicAuthVerifier(settings.webhook_username, password)

    if settings.webhook_auth_mode == "secret":
        secret = secret_to_str(settings.webhook_secret)
        if not secret:
            raise ValueError("WEBHOOK_SECRET must be set when WEBHOOK_AUTH_MODE=secret.")
        return SharedSecretVerifier(secret, settings.webhook_secret_header)

    raise ValueError(
        f"Unknown webhook auth mode: {settings.webhook_auth_mode}. Must be one of: basic, secret"
    )
