"""
Authentication Module - Black Box Interface

Purpose: Verify credentials, issue and validate bearer tokens
Interface: AuthFactory.build(), AuthenticationService.login()/authenticate()
Hidden: Token format, signing algorithm, identity lookup

This module can be replaced with any other token scheme without affecting
the API layer.
"""

from .errors import (
    AuthError,
    BadSignatureError,
    InvalidCredentialsError,
    MalformedRequestError,
    MalformedTokenError,
    TokenError,
    TokenExpiredError,
    WrongAudienceError,
    WrongIssuerError,
)
from .factory import AuthFactory
from .interfaces import Identity, IdentityStore
from .service import AuthenticationService, AuthResult

__all__ = [
    "AuthError",
    "AuthFactory",
    "AuthResult",
    "AuthenticationService",
    "BadSignatureError",
    "Identity",
    "IdentityStore",
    "InvalidCredentialsError",
    "MalformedRequestError",
    "MalformedTokenError",
    "TokenError",
    "TokenExpiredError",
    "WrongAudienceError",
    "WrongIssuerError",
]
