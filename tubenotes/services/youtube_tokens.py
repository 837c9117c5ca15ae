"""
Connection lifecycle for the user's YouTube account.

This is the only surface the rest of the application uses for OAuth: start
the consent flow, finish it from the callback, hand out a usable access token
and log out. Refresh decisions stay in here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from tubenotes.clients.google_auth import (
    GoogleOAuthClient,
    OAuthCallbackError,
    OAuthStateEncoder,
    RefreshFailedError,
    TokenRevocationError,
    generate_nonce,
)
from tubenotes.core.config import OAuthSettings
from tubenotes.models.oauth import TokenRecord
from tubenotes.services.token_store import TokenStore, now_ms

logger = logging.getLogger(__name__)


class YouTubeTokenService:
    """Manages the stored OAuth tokens of the connected YouTube account."""

    def __init__(
        self,
        store: TokenStore,
        oauth_client: GoogleOAuthClient,
        state_encoder: OAuthStateEncoder,
        oauth_settings: OAuthSettings,
        *,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._store = store
        self._oauth = oauth_client
        self._state_encoder = state_encoder
        self._oauth_settings = oauth_settings
        self._clock = clock
        self._inflight_refresh: Optional[asyncio.Task[Optional[str]]] = None

    def get_authorization_url(self, redirect_to: Optional[str] = None) -> str:
        """Build the Google consent URL with a freshly signed state."""
        state = self._state_encoder.encode(
            {
                "nonce": generate_nonce(),
                "issued_at_ms": self._clock(),
                "redirect_to": redirect_to,
            }
        )
        return self._oauth.build_authorization_url(state=state)

    async def complete_authorization(
        self,
        *,
        code: Optional[str],
        state: Optional[str],
        error: Optional[str] = None,
    ) -> Optional[str]:
        """
        Finish the consent flow from the callback query parameters.

        Stores the granted tokens and returns the ``redirect_to`` value carried
        in the state. Raises ``OAuthCallbackError`` before any network call when
        Google reported an error, no code was sent or the state does not verify.
        ``ExchangeFailedError`` from the token endpoint propagates unchanged.
        """
        if error:
            logger.warning("OAuth callback returned error: %s", error)
            raise OAuthCallbackError(f"OAuth error: {error}")
        if not code:
            logger.warning("OAuth callback arrived without an authorization code.")
            raise OAuthCallbackError("No authorization code received.")

        state_data = self._verify_state(state)

        grant = await self._oauth.exchange_authorization_code(code)
        self._store.write(grant, issued_at_ms=self._clock())
        logger.info("YouTube account connected; access token valid for %ss.", grant.expires_in)
        return state_data.get("redirect_to")

    async def get_valid_access_token(self) -> Optional[str]:
        """
        Return a non-expired access token, refreshing it once if needed.

        ``None`` means the account is not connected (or the refresh failed and
        the stored tokens were discarded). Concurrent callers that find the
        token expired share a single refresh.
        """
        record = self._store.read()
        if record is None:
            return None
        if not self._store.is_expired(self._clock()):
            return record.access_token

        task = self._inflight_refresh
        if task is None:
            task = asyncio.ensure_future(self._refresh(record))
            task.add_done_callback(self._forget_refresh)
            self._inflight_refresh = task
        return await asyncio.shield(task)

    def is_authenticated(self) -> bool:
        return self._store.has_tokens()

    async def logout(self) -> None:
        """Revoke the access token at Google if possible, then forget it locally."""
        token = self._store.stored_access_token()
        try:
            if token:
                await self._oauth.revoke_token(token)
        except TokenRevocationError as exc:
            logger.warning(
                "Failed to revoke YouTube token (status=%s, transient=%s): %s",
                exc.status_code,
                exc.transient,
                exc,
            )
        finally:
            self._store.clear()

    async def _refresh(self, record: TokenRecord) -> Optional[str]:
        try:
            grant = await self._oauth.refresh_token(record.refresh_token)
        except RefreshFailedError as exc:
            logger.warning(
                "Failed to refresh YouTube access token (status=%s, transient=%s); "
                "clearing stored tokens.",
                exc.status_code,
                exc.transient,
            )
            self._store.clear()
            return None

        if not grant.refresh_token:
            grant = grant.model_copy(update={"refresh_token": record.refresh_token})
        self._store.write(grant, issued_at_ms=self._clock())
        logger.info("Refreshed YouTube access token; valid for %ss.", grant.expires_in)
        return grant.access_token

    def _forget_refresh(self, task: "asyncio.Task[Optional[str]]") -> None:
        if self._inflight_refresh is task:
            self._inflight_refresh = None

    def _verify_state(self, state: Optional[str]) -> dict:
        if not state:
            raise OAuthCallbackError("Missing OAuth state.")

        state_data = self._state_encoder.decode(state)
        issued_at_ms = state_data.get("issued_at_ms")
        if not isinstance(issued_at_ms, int):
            raise OAuthCallbackError("Missing issued_at_ms in OAuth state.")

        age_ms = self._clock() - issued_at_ms
        if age_ms > self._oauth_settings.state_ttl_seconds * 1000:
            raise OAuthCallbackError("OAuth state has expired.")
        return state_data


__all__ = ["YouTubeTokenService"]
