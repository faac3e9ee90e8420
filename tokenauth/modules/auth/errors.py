"""Authentication error taxonomy.

Every error is terminal for the request that raised it. The HTTP layer maps
them to bare status codes; messages are for logs only.
"""

from typing import Optional


class AuthError(Exception):
    """Base class for all authentication failures."""


class MalformedRequestError(AuthError):
    """Credential submission failed input validation."""


class InvalidCredentialsError(AuthError):
    """
    Unknown username or wrong password.

    Both cases share this class so callers cannot tell them apart.
    ``reason`` is kept for server-side logging only.
    """

    UNKNOWN_IDENTITY = "unknown_identity"
    BAD_PASSWORD = "bad_password"

    def __init__(self, reason: Optional[str] = None):
        super().__init__("Invalid credentials")
        self.reason = reason


class TokenError(AuthError):
    """Base class for bearer token rejections."""


class MalformedTokenError(TokenError):
    """Token cannot be parsed into the expected structure."""


class BadSignatureError(TokenError):
    """Token signature does not verify with the shared secret."""


class TokenExpiredError(TokenError):
    """Token expiry is not in the future."""


class WrongIssuerError(TokenError):
    """Token issuer does not match the configured issuer."""


class WrongAudienceError(TokenError):
    """Token audience does not match the configured audience."""
