"""
Webhook request authentication.
"""

from security.verifiers import (
    BasicAuthVerifier,
    CredentialVerifier,
    SharedSecretVerifier,
    build_verifier,
)

__all__ = [
    "BasicAuthVerifier",
    "CredentialVerifier",
    "SharedSecretVerifier",
    "build_verifier",
]
