"""Configuration providers for tokenauth."""

from .provider import (
    APIConfig,
    ConfigProvider,
    EnvConfigProvider,
    IdentityStoreConfig,
    TokenConfig,
)

__all__ = [
    "APIConfig",
    "ConfigProvider",
    "EnvConfigProvider",
    "IdentityStoreConfig",
    "TokenConfig",
]
