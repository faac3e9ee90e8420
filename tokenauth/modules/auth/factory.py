"""
Authentication Factory following Black Box Design principles.

This factory:
- Constructs the authentication stack based on configuration
- Wires dependencies together
- Returns only the service facade (hiding implementation)
"""

import logging

from ...config.provider import ConfigProvider
from .credentials import CredentialVerifier
from .interfaces import IdentityStore
from .passwords import DEFAULT_ROUNDS
from .service import AuthenticationService, DefaultAuthenticationService
from .tokens import JWTValidator, TokenIssuer

logger = logging.getLogger(__name__)


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Returns only the public interface
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        identity_store: IdentityStore
    ) -> AuthenticationService:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            identity_store: Identity store used for credential checks

        Returns:
            AuthenticationService facade (hides all implementation details)

        Raises:
            ValueError: If the token secret is not configured
        """
        token_config = config_provider.get_token_config()

        # Issuer and validator share one config so the secret cannot diverge
        issuer = TokenIssuer(token_config)
        validator = JWTValidator(token_config)
        # Unknown-user checks use the same bcrypt cost as the store's own hashes
        rounds = getattr(identity_store, "rounds", None)
        if not isinstance(rounds, int):
            rounds = DEFAULT_ROUNDS
        verifier = CredentialVerifier(identity_store, rounds=rounds)

        logger.info(
            f"Building authentication stack (issuer={token_config.issuer!r}, "
            f"audience={token_config.audience!r})"
        )
        return DefaultAuthenticationService(verifier, issuer, validator)
