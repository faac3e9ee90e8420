"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple


DEFAULT_ISSUER = "TokenApiAuthenticationGuide"
DEFAULT_AUDIENCE = "Client consuming the API"


@dataclass(frozen=True)
class TokenConfig:
    """Token signing configuration shared by issuer and validator."""
    secret_key: str = field(repr=False)
    issuer: str = DEFAULT_ISSUER
    audience: str = DEFAULT_AUDIENCE


@dataclass
class IdentityStoreConfig:
    """Identity store configuration."""
    backend: str
    seed_users: List[Tuple[str, str, str]]
    redis_host: str
    redis_port: int
    redis_db: int
    redis_password: Optional[str] = field(default=None, repr=False)

    @property
    def redis_url(self) -> str:
        """Redis URL without credentials (password is passed separately)."""
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_token_config(self) -> TokenConfig:
        """Get token signing configuration."""
        ...

    def get_identity_store_config(self) -> IdentityStoreConfig:
        """Get identity store configuration."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...


def parse_seed_users(value: str) -> List[Tuple[str, str, str]]:
    """
    Parse seed users from the ``username:email:password`` comma list format.

    Example:
        >>> parse_seed_users("alice:alice@example.com:correct")
        [('alice', 'alice@example.com', 'correct')]

    Raises:
        ValueError: If an entry does not have three non-empty parts
    """
    users = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue

        # Password is last so it may itself contain colons
        parts = entry.split(":", 2)
        if len(parts) != 3 or not all(part.strip() for part in parts):
            raise ValueError(
                "SEED_USERS entries must use the format username:email:password"
            )
        username, email, password = parts
        users.append((username.strip(), email.strip(), password))

    return users


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_token_config(self) -> TokenConfig:
        """Get token configuration from environment variables."""
        # No default secret for security
        secret_key = os.getenv("TOKEN_SECRET_KEY")
        if not secret_key:
            raise ValueError(
                "TOKEN_SECRET_KEY environment variable is required. "
                "Use a random value of at least 32 bytes."
            )

        return TokenConfig(
            secret_key=secret_key,
            issuer=os.getenv("TOKEN_ISSUER", DEFAULT_ISSUER),
            audience=os.getenv("TOKEN_AUDIENCE", DEFAULT_AUDIENCE),
        )

    def get_identity_store_config(self) -> IdentityStoreConfig:
        """Get identity store configuration from environment variables."""
        # Redis port might be in tcp://host:port format from K8s
        redis_port_env = os.getenv("REDIS_PORT", "6379")
        if redis_port_env.startswith("tcp://"):
            redis_port = int(redis_port_env.split(":")[-1])
        else:
            redis_port = int(redis_port_env)

        return IdentityStoreConfig(
            backend=os.getenv("IDENTITY_STORE", "memory").lower(),
            seed_users=parse_seed_users(os.getenv("SEED_USERS", "")),
            redis_host=os.getenv("REDIS_HOST", "localhost"),
            redis_port=redis_port,
            redis_db=int(os.getenv("REDIS_DB", "0")),
            redis_password=os.getenv("REDIS_PASSWORD"),
        )

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
