"""Authentication interfaces following Black Box Design principles."""
from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True)
class Identity:
    """A known user. Password hashes stay inside the identity store."""
    username: str
    email: str


class IdentityStore(Protocol):
    """Protocol for identity stores - allows swappable backends."""

    async def find_by_username(self, username: str) -> Optional[Identity]:
        """
        Look up an identity.

        Args:
            username: Unique username

        Returns:
            Identity or None when the username is unknown
        """
        ...

    async def check_password(self, identity: Identity, password: str) -> bool:
        """
        Compare a password against the stored hash.

        Args:
            identity: Identity previously returned by find_by_username
            password: Plain password from the credential submission

        Returns:
            True if the password matches
        """
        ...


class TokenValidator(Protocol):
    """Protocol for token validation."""

    def validate(self, token: str) -> str:
        """
        Validate a bearer token.

        Args:
            token: Compact token string (without Bearer prefix)

        Returns:
            Subject claim of the token

        Raises:
            TokenError: If the token is rejected
        """
        ...
