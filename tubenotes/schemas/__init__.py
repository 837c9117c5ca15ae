"""Public schema exports."""

from .auth import AuthorizationUrlResponse, AuthStatusResponse, OAuthCallbackPayload

__all__ = [
    "AuthStatusResponse",
    "AuthorizationUrlResponse",
    "OAuthCallbackPayload",
]
