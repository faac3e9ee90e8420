"""
Unit tests for the authentication service facade and factory.
"""

from datetime import timedelta

import pytest

from tokenauth.modules.auth import AuthFactory, InvalidCredentialsError
from tokenauth.modules.auth.credentials import CredentialVerifier
from tokenauth.modules.auth.service import DefaultAuthenticationService
from tokenauth.modules.auth.tokens import JWTValidator, TokenIssuer, utc_now


@pytest.fixture
def auth_service(config_provider, identity_store):
    """Service built through the factory."""
    return AuthFactory.build(config_provider, identity_store)


@pytest.mark.asyncio
async def test_login_then_authenticate(auth_service):
    """Issued tokens authenticate as the identity's email."""
    token = await auth_service.login("alice", "correct")

    result = await auth_service.authenticate(f"Bearer {token}")

    assert result.ok is True
    assert result.identity == "alice@example.com"
    assert result.method == "jwt"
    assert result.error is None


@pytest.mark.asyncio
async def test_login_bad_password(auth_service):
    """Wrong password propagates the collapsed credential error."""
    with pytest.raises(InvalidCredentialsError):
        await auth_service.login("alice", "nope")


@pytest.mark.asyncio
@pytest.mark.parametrize("scheme", ["bearer", "BEARER"])
async def test_authenticate_accepts_any_scheme_casing(auth_service, scheme):
    """Authorization scheme names are case-insensitive."""
    token = await auth_service.login("alice", "correct")

    result = await auth_service.authenticate(f"{scheme} {token}")

    assert result.ok is True
    assert result.identity == "alice@example.com"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "authorization",
    [None, "", "Bearer ", "bearer", "Basic YWxpY2U6Y29ycmVjdA==", "BearerToken abc"],
)
async def test_authenticate_without_bearer_token(auth_service, authorization):
    """Missing or non-bearer Authorization headers fail."""
    result = await auth_service.authenticate(authorization)

    assert result.ok is False
    assert result.identity is None
    assert result.error == "missing_bearer_token"


@pytest.mark.asyncio
async def test_authenticate_reports_rejection_class(token_config, identity_store):
    """The failure reason is reported for logging."""
    stale_issuer = TokenIssuer(token_config, clock=lambda: utc_now() - timedelta(hours=1))
    service = DefaultAuthenticationService(
        CredentialVerifier(identity_store), stale_issuer, JWTValidator(token_config)
    )
    token = await service.login("alice", "correct")

    result = await service.authenticate(f"Bearer {token}")

    assert result.ok is False
    assert result.error == "TokenExpiredError"


@pytest.mark.asyncio
async def test_authenticate_garbage_token(auth_service):
    """Unparseable tokens fail as malformed."""
    result = await auth_service.authenticate("Bearer not.a.jwt")

    assert result.ok is False
    assert result.error == "MalformedTokenError"


def test_factory_requires_secret(identity_store):
    """Factory surfaces configuration errors."""

    class MissingSecretProvider:
        def get_token_config(self):
            raise ValueError("TOKEN_SECRET_KEY environment variable is required.")

    with pytest.raises(ValueError):
        AuthFactory.build(MissingSecretProvider(), identity_store)
