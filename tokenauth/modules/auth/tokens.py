"""
Bearer token issuance and validation.

Tokens are compact JWTs signed with HMAC-SHA256 over a single shared secret.
Nothing is stored server side: the signature and the expiry embedded in the
token are the only record of its validity.
"""

import logging
import uuid
from datetime import UTC, datetime, timedelta
from typing import Callable

import jwt

from ...config.provider import TokenConfig
from .errors import (
    BadSignatureError,
    MalformedTokenError,
    TokenExpiredError,
    WrongAudienceError,
    WrongIssuerError,
)
from .interfaces import Identity, TokenValidator

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_LIFETIME = timedelta(minutes=30)
REQUIRED_CLAIMS = ["sub", "jti", "iss", "aud", "exp"]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class TokenIssuer:
    """Mints signed, time-bounded bearer tokens for verified identities."""

    def __init__(self, config: TokenConfig, clock: Callable[[], datetime] = utc_now):
        """
        Initialize token issuer with injected config.

        Args:
            config: Token signing configuration
            clock: Returns the current UTC time
        """
        self.config = config
        self.clock = clock

    def issue(self, identity: Identity) -> str:
        """
        Issue a token for an identity.

        Args:
            identity: Verified identity

        Returns:
            Compact JWT string
        """
        claims = {
            "sub": identity.email,
            # Informational only, never checked for reuse
            "jti": str(uuid.uuid4()),
            "iss": self.config.issuer,
            "aud": self.config.audience,
            "exp": self.clock() + TOKEN_LIFETIME,
        }

        token = jwt.encode(claims, self.config.secret_key, algorithm=ALGORITHM)
        logger.debug(f"Issued token {claims['jti']} for {identity.username}")
        return token


class JWTValidator(TokenValidator):
    """
    Validates bearer tokens minted by TokenIssuer.

    Checks signature (constant-time), expiry, issuer and audience on every
    call. Results are not cached.
    """

    def __init__(self, config: TokenConfig):
        """
        Initialize token validator with injected config.

        Args:
            config: Token signing configuration
        """
        self.config = config

    def validate(self, token: str) -> str:
        """
        Validate a token and return its subject.

        Args:
            token: Compact JWT string

        Returns:
            Subject claim (identity email)

        Raises:
            MalformedTokenError: Token cannot be parsed or lacks required claims
            BadSignatureError: Signature or algorithm does not match
            TokenExpiredError: Token expiry has passed
            WrongIssuerError: Issuer label mismatch
            WrongAudienceError: Audience label mismatch
        """
        try:
            claims = jwt.decode(
                token,
                self.config.secret_key,
                algorithms=[ALGORITHM],
                audience=self.config.audience,
                issuer=self.config.issuer,
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "verify_iss": True,
                    "verify_aud": True,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidSignatureError as e:
            raise BadSignatureError(str(e)) from e
        except jwt.InvalidAlgorithmError as e:
            raise BadSignatureError(str(e)) from e
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError(str(e)) from e
        except jwt.InvalidIssuerError as e:
            raise WrongIssuerError(str(e)) from e
        except jwt.InvalidAudienceError as e:
            raise WrongAudienceError(str(e)) from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(str(e)) from e

        return claims["sub"]
