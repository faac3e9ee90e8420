"""
API Module - Black Box Interface

Purpose: HTTP request/response models and public metadata routes
Interface: REST API models, discovery router
Hidden: Validation rules

The API module only orchestrates - it contains no business logic.
"""

from .discovery import TOKEN_ENDPOINT, create_discovery_router
from .models import AUTHORIZED_MESSAGE, TokenMetadata, TokenRequest, TokenResponse

__all__ = [
    "AUTHORIZED_MESSAGE",
    "TOKEN_ENDPOINT",
    "TokenMetadata",
    "TokenRequest",
    "TokenResponse",
    "create_discovery_router",
]
