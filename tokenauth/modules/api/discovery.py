"""
Token Discovery Endpoint for tokenauth

This module provides an endpoint that clients can use to discover how
tokens are issued. The shared secret is never exposed.
"""

from fastapi import APIRouter

from ...config.provider import ConfigProvider
from ..auth.tokens import ALGORITHM, TOKEN_LIFETIME
from .models import TokenMetadata

TOKEN_ENDPOINT = "/api/account/token"


def create_discovery_router(config_provider: ConfigProvider) -> APIRouter:
    """
    Create token discovery router with injected config provider.

    Args:
        config_provider: Configuration provider instance

    Returns:
        FastAPI router with discovery endpoints
    """
    router = APIRouter(tags=["discovery"])

    @router.get("/.well-known/tokenauth", response_model=TokenMetadata)
    async def get_token_metadata() -> TokenMetadata:
        """Get public token parameters."""
        token_config = config_provider.get_token_config()

        return TokenMetadata(
            token_endpoint=TOKEN_ENDPOINT,
            algorithm=ALGORITHM,
            issuer=token_config.issuer,
            audience=token_config.audience,
            expires_in=int(TOKEN_LIFETIME.total_seconds()),
        )

    return router
