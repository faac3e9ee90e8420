"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- A clean interface for authentication that hides implementation details
- Standardized authentication results
- Protocol definitions for swappable implementations
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Protocol

from .credentials import CredentialVerifier
from .errors import TokenError
from .interfaces import TokenValidator
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass
class AuthResult:
    """Standardized authentication result."""
    ok: bool
    identity: Optional[str]
    method: Optional[Literal["jwt"]]
    error: Optional[str] = None


class AuthenticationService(Protocol):
    """Protocol for authentication services."""

    async def login(self, username: str, password: str) -> str:
        """
        Exchange credentials for a bearer token.

        Raises:
            MalformedRequestError: If a field is empty
            InvalidCredentialsError: If the credentials do not match
        """
        ...

    async def authenticate(self, authorization: Optional[str]) -> AuthResult:
        """
        Authenticate a request.

        Args:
            authorization: Authorization header value

        Returns:
            AuthResult with authentication status and details
        """
        ...


class DefaultAuthenticationService:
    """
    Default implementation of AuthenticationService.

    This facade hides the verifier, issuer and validator behind a small,
    stable interface for the API layer.
    """

    def __init__(
        self,
        verifier: CredentialVerifier,
        issuer: TokenIssuer,
        validator: TokenValidator
    ):
        self._verifier = verifier
        self._issuer = issuer
        self._validator = validator

    async def login(self, username: str, password: str) -> str:
        identity = await self._verifier.verify(username, password)
        return self._issuer.issue(identity)

    async def authenticate(self, authorization: Optional[str]) -> AuthResult:
        """
        Authenticate a request from its Authorization header.

        Args:
            authorization: Authorization header value

        Returns:
            AuthResult; ``error`` carries the rejection class name for logging
        """
        if not authorization:
            return AuthResult(ok=False, identity=None, method=None, error="missing_bearer_token")

        # Scheme names are case-insensitive (RFC 7235)
        scheme, _, token = authorization.strip().partition(" ")
        token = token.strip()
        if scheme.lower() != BEARER_SCHEME or not token:
            return AuthResult(ok=False, identity=None, method=None, error="missing_bearer_token")

        try:
            subject = self._validator.validate(token)
        except TokenError as e:
            logger.info(f"Bearer token rejected: {type(e).__name__}")
            return AuthResult(ok=False, identity=None, method=None, error=type(e).__name__)

        return AuthResult(ok=True, identity=subject, method="jwt")
