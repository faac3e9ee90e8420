"""Identity store factory - selects a backend from configuration."""

import logging
from typing import Any, Optional

from ...config.provider import IdentityStoreConfig
from ..auth.interfaces import IdentityStore
from .store import DEFAULT_ROUNDS, InMemoryIdentityStore, RedisIdentityStore

logger = logging.getLogger(__name__)

BACKENDS = ("memory", "redis")


class IdentityStoreFactory:
    """Builds and seeds the configured identity store."""

    @staticmethod
    async def build(
        config: IdentityStoreConfig,
        redis_client: Optional[Any] = None,
        rounds: int = DEFAULT_ROUNDS
    ) -> IdentityStore:
        """
        Build the identity store and load seed users into it.

        Args:
            config: Identity store configuration
            redis_client: Async Redis client, required for the redis backend
            rounds: bcrypt cost factor for seeded hashes

        Returns:
            IdentityStore implementation

        Raises:
            ValueError: On an unknown backend or a missing Redis client
        """
        if config.backend == "memory":
            store = InMemoryIdentityStore(rounds=rounds)
            for username, email, password in config.seed_users:
                store.add(username, email, password)
        elif config.backend == "redis":
            if redis_client is None:
                raise ValueError("Redis identity store requires a Redis client")
            store = RedisIdentityStore(redis_client, rounds=rounds)
            for username, email, password in config.seed_users:
                await store.add(username, email, password)
        else:
            raise ValueError(
                f"Unknown identity store backend {config.backend!r}. "
                f"Available: {', '.join(BACKENDS)}"
            )

        logger.info(
            f"Identity store ready (backend={config.backend}, seeded={len(config.seed_users)})"
        )
        return store
