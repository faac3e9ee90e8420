"""
Credential verification against an identity store.
"""

import asyncio
import logging

from .errors import InvalidCredentialsError, MalformedRequestError
from .interfaces import Identity, IdentityStore
from .passwords import DEFAULT_ROUNDS, dummy_hash, verify_password

logger = logging.getLogger(__name__)


class CredentialVerifier:
    """
    Confirms a username/password pair belongs to a known identity.

    Lookup and password comparison are delegated to the injected store.
    Unknown users and wrong passwords raise the same error and both pay for
    one bcrypt comparison.
    """

    def __init__(self, identity_store: IdentityStore, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize with an identity store.

        Args:
            identity_store: Any IdentityStore implementation
            rounds: bcrypt cost factor of the placeholder hash checked for unknown users
        """
        self.identity_store = identity_store
        self.rounds = rounds

    async def verify(self, username: str, password: str) -> Identity:
        """
        Verify credentials.

        Args:
            username: Submitted username
            password: Submitted password

        Returns:
            The matching Identity

        Raises:
            MalformedRequestError: If either field is empty
            InvalidCredentialsError: If the username is unknown or the password is wrong
        """
        if not username or not password:
            raise MalformedRequestError("username and password are required")

        identity = await self.identity_store.find_by_username(username)
        if identity is None:
            # Same bcrypt cost as a real comparison so timing does not reveal the username
            await asyncio.to_thread(verify_password, password, dummy_hash(self.rounds))
            logger.info("Credential check failed: unknown identity")
            raise InvalidCredentialsError(InvalidCredentialsError.UNKNOWN_IDENTITY)

        if not await self.identity_store.check_password(identity, password):
            logger.info(f"Credential check failed for {identity.username}: bad password")
            raise InvalidCredentialsError(InvalidCredentialsError.BAD_PASSWORD)

        logger.debug(f"Credentials verified for {identity.username}")
        return identity
