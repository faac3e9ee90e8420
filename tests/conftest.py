"""
Shared pytest fixtures for tokenauth tests.

This module provides common fixtures including:
- Token configuration and a static config provider
- A seeded in-memory identity store
- Redis mocks for the Redis identity store
- FastAPI test client utilities
"""

import os
import sys
from typing import Optional
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tokenauth.config.provider import APIConfig, IdentityStoreConfig, TokenConfig
from tokenauth.main import create_app
from tokenauth.modules.identity import InMemoryIdentityStore

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_ISSUER = "TokenApiAuthenticationGuide"
TEST_AUDIENCE = "Client consuming the API"

# Lowest bcrypt cost keeps the suite fast
TEST_ROUNDS = 4


class StaticConfigProvider:
    """Config provider returning fixed values, for tests."""

    def __init__(
        self,
        token_config: TokenConfig,
        store_config: Optional[IdentityStoreConfig] = None,
        api_config: Optional[APIConfig] = None,
    ):
        self.token_config = token_config
        self.store_config = store_config or IdentityStoreConfig(
            backend="memory",
            seed_users=[],
            redis_host="localhost",
            redis_port=6379,
            redis_db=0,
        )
        self.api_config = api_config or APIConfig(
            port=8080, host="127.0.0.1", debug=False, log_level="INFO"
        )

    def get_token_config(self) -> TokenConfig:
        return self.token_config

    def get_identity_store_config(self) -> IdentityStoreConfig:
        return self.store_config

    def get_api_config(self) -> APIConfig:
        return self.api_config


@pytest.fixture
def token_config():
    """Token configuration used across tests."""
    return TokenConfig(secret_key=TEST_SECRET, issuer=TEST_ISSUER, audience=TEST_AUDIENCE)


@pytest.fixture
def config_provider(token_config):
    """Static configuration provider."""
    return StaticConfigProvider(token_config)


@pytest.fixture
def identity_store():
    """In-memory identity store seeded with alice."""
    store = InMemoryIdentityStore(rounds=TEST_ROUNDS)
    store.add("alice", "alice@example.com", "correct")
    return store


@pytest.fixture
def client(config_provider, identity_store):
    """Test client with the lifespan running."""
    app = create_app(config_provider, identity_store)
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis_with_data():
    """
    Redis mock with in-memory hash storage for more realistic tests.

    This allows testing code that reads back what it writes.
    """
    storage = {}

    redis = AsyncMock()

    async def mock_hset(key, field=None, value=None, mapping=None):
        entry = storage.setdefault(key, {})
        if field is not None:
            entry[field] = value
        if mapping:
            entry.update(mapping)
        return len(mapping or {}) + (1 if field is not None else 0)

    async def mock_hget(key, field):
        return storage.get(key, {}).get(field)

    async def mock_hgetall(key):
        return dict(storage.get(key, {}))

    redis.hset = mock_hset
    redis.hget = mock_hget
    redis.hgetall = mock_hgetall
    redis.ping = AsyncMock(return_value=True)
    redis._storage = storage  # Expose for test assertions

    return redis
