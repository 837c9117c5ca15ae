"""
Domain models for OAuth token persistence.
"""

from typing import Optional

from pydantic import BaseModel, Field


class TokenGrant(BaseModel):
    """Tokens returned by the Google token endpoint."""

    access_token: str
    refresh_token: Optional[str] = Field(
        None,
        description="Absent when a refresh response does not reissue the refresh token.",
    )
    expires_in: int = Field(..., description="Access token lifetime in seconds.")


class TokenRecord(BaseModel):
    """The persisted credential triple for the connected YouTube account."""

    access_token: str
    refresh_token: str
    expiry_ms: int = Field(..., description="Epoch milliseconds after which the access token is stale.")


__all__ = ["TokenGrant", "TokenRecord"]
