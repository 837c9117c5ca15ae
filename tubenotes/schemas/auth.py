"""Schemas related to OAuth flows."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class OAuthCallbackPayload(BaseModel):
    """Query parameters Google sends back to the callback route."""

    code: Optional[str] = Field(None, description="Authorization code returned by Google OAuth.")
    state: Optional[str] = Field(None, description="Opaque state token issued when starting OAuth.")
    error: Optional[str] = Field(None, description="Error code when the user denied consent.")


class AuthorizationUrlResponse(BaseModel):
    authorization_url: str


class AuthStatusResponse(BaseModel):
    authenticated: bool


__all__ = ["AuthStatusResponse", "AuthorizationUrlResponse", "OAuthCallbackPayload"]
