"""
Google OAuth utilities.

These helpers manage the YouTube account authorization flow and the token
refresh lifecycle against Google's token endpoint.
"""

from __future__ import annotations

import base64
import binascii
import hmac
import json
import secrets
from hashlib import sha256
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from tubenotes.core.config import GoogleSettings, OAuthSettings
from tubenotes.models.oauth import TokenGrant

_BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class OAuthCallbackError(Exception):
    """Raised when the authorization callback cannot be completed."""


class AuthenticationRequiredError(Exception):
    """Raised when a user-scoped call is attempted without a usable credential."""


class TokenEndpointError(Exception):
    """Base error for failed calls against Google's OAuth endpoints.

    ``transient`` is set for timeouts and transport failures, as opposed to an
    explicit rejection by the issuer (which carries ``status_code``).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.transient = transient


class ExchangeFailedError(TokenEndpointError):
    """Raised when an authorization code cannot be exchanged for tokens."""


class RefreshFailedError(TokenEndpointError):
    """Raised when the refresh token grant fails."""


class TokenRevocationError(TokenEndpointError):
    """Raised when Google does not confirm a token revocation."""


class OAuthStateEncoder:
    """Encode and decode OAuth state values to guard against tampering."""

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key.encode("utf-8")

    def encode(self, payload: Dict[str, Any]) -> str:
        serialized = json.dumps(payload, separators=(",", ":"), sort_keys=True)
        signature = hmac.new(self._secret_key, serialized.encode("utf-8"), sha256).digest()
        return base64.urlsafe_b64encode(signature + serialized.encode("utf-8")).decode("utf-8")

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            decoded = base64.urlsafe_b64decode(token.encode("utf-8"))
        except (binascii.Error, ValueError) as exc:
            raise OAuthCallbackError("Malformed OAuth state.") from exc
        signature, serialized = decoded[:32], decoded[32:]
        expected_signature = hmac.new(self._secret_key, serialized, sha256).digest()
        if not hmac.compare_digest(signature, expected_signature):
            raise OAuthCallbackError("Invalid OAuth state signature.")
        return json.loads(serialized)


def generate_nonce() -> str:
    """Return 26 random base-36 characters (two 13-character halves)."""
    return "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(26))


class GoogleOAuthClient:
    """Build Google authorization URLs and talk to the token endpoint."""

    AUTH_BASE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    REVOKE_URL = "https://oauth2.googleapis.com/revoke"

    def __init__(
        self,
        google_settings: GoogleSettings,
        oauth_settings: OAuthSettings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._google = google_settings
        self._oauth = oauth_settings
        self._transport = transport

    @property
    def redirect_uri(self) -> str:
        return str(self._google.app_origin).rstrip("/") + self._oauth.callback_path

    def build_authorization_url(self, state: str) -> str:
        """Construct the Google OAuth consent URL."""
        params = {
            "client_id": self._google.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(self._oauth.scopes),
            "access_type": "offline",
            "prompt": "consent",
            "state": state,
        }
        query = urlencode(params)
        return f"{self.AUTH_BASE_URL}?{query}"

    async def exchange_authorization_code(self, code: str) -> TokenGrant:
        """Exchange an authorization code for an access/refresh token pair."""
        payload = {
            "code": code,
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        response = await self._post(self.TOKEN_URL, payload, ExchangeFailedError)
        if not response.is_success:
            raise ExchangeFailedError(
                "Authorization code exchange was rejected.",
                status_code=response.status_code,
            )

        token_payload = _token_payload(response, ExchangeFailedError)
        access_token = token_payload.get("access_token")
        refresh_token = token_payload.get("refresh_token")
        expires_in = token_payload.get("expires_in")

        if not access_token or not refresh_token or not expires_in:
            raise ExchangeFailedError("Incomplete token payload returned from Google.")

        try:
            return TokenGrant(
                access_token=access_token,
                refresh_token=refresh_token,
                expires_in=int(expires_in),
            )
        except (TypeError, ValueError) as exc:
            raise ExchangeFailedError("Malformed token payload returned from Google.") from exc

    async def refresh_token(self, refresh_token: str) -> TokenGrant:
        """Mint a new access token from a stored refresh token."""
        payload = {
            "client_id": self._google.client_id,
            "client_secret": self._google.client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }
        response = await self._post(self.TOKEN_URL, payload, RefreshFailedError)
        if not response.is_success:
            raise RefreshFailedError(
                "Refresh token grant was rejected.",
                status_code=response.status_code,
            )

        token_payload = _token_payload(response, RefreshFailedError)
        access_token = token_payload.get("access_token")
        expires_in = token_payload.get("expires_in")

        if not access_token or not expires_in:
            raise RefreshFailedError("Incomplete refresh payload returned from Google.")

        try:
            return TokenGrant(
                access_token=access_token,
                refresh_token=token_payload.get("refresh_token") or None,
                expires_in=int(expires_in),
            )
        except (TypeError, ValueError) as exc:
            raise RefreshFailedError("Malformed refresh payload returned from Google.") from exc

    async def revoke_token(self, token: str) -> None:
        """Ask Google to invalidate ``token``."""
        response = await self._post(self.REVOKE_URL, {"token": token}, TokenRevocationError)
        if not response.is_success:
            raise TokenRevocationError(
                "Token revocation was rejected.",
                status_code=response.status_code,
            )

    async def _post(
        self,
        url: str,
        data: Dict[str, str],
        error_cls: type[TokenEndpointError],
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                timeout=self._oauth.http_timeout_seconds, transport=self._transport
            ) as client:
                return await client.post(url, data=data)
        except httpx.TimeoutException as exc:
            raise error_cls("Timed out waiting for Google.", transient=True) from exc
        except httpx.TransportError as exc:
            raise error_cls("Could not reach Google.", transient=True) from exc


def _token_payload(
    response: httpx.Response, error_cls: type[TokenEndpointError]
) -> Dict[str, Any]:
    """Decode a successful token-endpoint body, which must be a JSON object."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise error_cls(
            "Google returned a non-JSON token response.",
            status_code=response.status_code,
        ) from exc
    if not isinstance(payload, dict):
        raise error_cls(
            "Google returned an unexpected token response.",
            status_code=response.status_code,
        )
    return payload


__all__ = [
    "AuthenticationRequiredError",
    "ExchangeFailedError",
    "GoogleOAuthClient",
    "OAuthCallbackError",
    "OAuthStateEncoder",
    "RefreshFailedError",
    "TokenEndpointError",
    "TokenRevocationError",
    "generate_nonce",
]
