"""
Identity Module - Black Box Interface

Purpose: System of record for usernames, emails and password hashes
Interface: find_by_username(), check_password(), add()
Hidden: Storage backend, hashing algorithm

Backends can be swapped (memory, Redis, external auth service) without the
auth module noticing.
"""

from ..auth.passwords import hash_password, verify_password
from .factory import IdentityStoreFactory
from .store import InMemoryIdentityStore, RedisIdentityStore

__all__ = [
    "IdentityStoreFactory",
    "InMemoryIdentityStore",
    "RedisIdentityStore",
    "hash_password",
    "verify_password",
]
