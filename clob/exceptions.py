"""
Error types raised by the CLOB client.

HTTP and transport failures are not wrapped: they surface as the
``requests`` exceptions raised by ``response.raise_for_status()``.
"""


class ClobError(Exception):
    """Base class for client errors."""


class AuthLevelError(ClobError):
    """Raised when an operation needs a signer, chain id or credentials that are not configured."""


class CredentialError(ClobError, ValueError):
    """Raised when API credential material is malformed."""


class SignerError(ClobError):
    """Raised when a key is invalid or a message cannot be signed."""
