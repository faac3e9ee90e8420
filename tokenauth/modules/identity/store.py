"""
Identity store backends.

Both stores own the bcrypt password hashes; callers only ever see Identity
objects and a pass/fail password check.
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

from ..auth.interfaces import Identity
from ..auth.passwords import DEFAULT_ROUNDS, hash_password, verify_password

logger = logging.getLogger(__name__)


class InMemoryIdentityStore:
    """Dict-backed identity store, seeded at startup."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._users: Dict[str, Tuple[Identity, str]] = {}

    def add(self, username: str, email: str, password: str) -> Identity:
        """
        Add or replace an identity.

        Args:
            username: Unique username
            email: Email used as the token subject
            password: Plain password, hashed before storage

        Returns:
            The stored Identity
        """
        identity = Identity(username=username, email=email)
        self._users[username] = (identity, hash_password(password, self.rounds))
        return identity

    async def find_by_username(self, username: str) -> Optional[Identity]:
        entry = self._users.get(username)
        return entry[0] if entry else None

    async def check_password(self, identity: Identity, password: str) -> bool:
        entry = self._users.get(identity.username)
        if entry is None:
            return False
        # bcrypt is CPU bound; keep it off the event loop
        return await asyncio.to_thread(verify_password, password, entry[1])


class RedisIdentityStore:
    """
    Redis-backed identity store.

    Each user is a hash at ``identity:user:<username>`` with the fields
    ``email`` and ``password_hash``.
    """

    KEY_PREFIX = "identity:user:"

    def __init__(self, redis_client, rounds: int = DEFAULT_ROUNDS):
        """
        Initialize identity store.

        Args:
            redis_client: Async Redis client
            rounds: bcrypt cost factor for new hashes
        """
        self.redis = redis_client
        self.rounds = rounds

    def _key(self, username: str) -> str:
        return f"{self.KEY_PREFIX}{username}"

    @staticmethod
    def _decode(value) -> Optional[str]:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def add(self, username: str, email: str, password: str) -> Identity:
        """Add or replace an identity."""
        password_hash = await asyncio.to_thread(hash_password, password, self.rounds)
        await self.redis.hset(
            self._key(username),
            mapping={"email": email, "password_hash": password_hash},
        )
        logger.info(f"Stored identity {username}")
        return Identity(username=username, email=email)

    async def find_by_username(self, username: str) -> Optional[Identity]:
        email = self._decode(await self.redis.hget(self._key(username), "email"))
        if not email:
            return None
        return Identity(username=username, email=email)

    async def check_password(self, identity: Identity, password: str) -> bool:
        password_hash = self._decode(
            await self.redis.hget(self._key(identity.username), "password_hash")
        )
        if not password_hash:
            return False
        return await asyncio.to_thread(verify_password, password, password_hash)
