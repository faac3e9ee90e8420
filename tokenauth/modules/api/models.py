"""
tokenauth API models.

These models define the request and response bodies of the public API.
"""

from pydantic import BaseModel, Field

AUTHORIZED_MESSAGE = "You have been successfully authorized via a bearer token!"


class TokenRequest(BaseModel):
    """Credential submission for the token endpoint."""

    username: str = Field(..., description="Account username", min_length=1)
    password: str = Field(..., description="Account password", min_length=1)


class TokenResponse(BaseModel):
    """Issued bearer token."""

    result: str = Field(..., description="Signed bearer token")


class TokenMetadata(BaseModel):
    """Public token parameters clients may use to validate responses."""

    token_endpoint: str
    algorithm: str
    issuer: str
    audience: str
    expires_in: int = Field(..., description="Token lifetime in seconds")
