"""Bearer-authenticated requests against user-scoped YouTube endpoints."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

import httpx

from tubenotes.clients.google_auth import AuthenticationRequiredError
from tubenotes.clients.youtube import YouTubeAPIError, read_json_object

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from tubenotes.services.youtube_tokens import YouTubeTokenService

logger = logging.getLogger(__name__)


class AuthenticatedYouTubeGateway:
    """Attach the connected account's access token to one outgoing request.

    The gateway asks the token service for a credential on every call and
    never looks at, or refreshes, the stored tokens itself.
    """

    def __init__(
        self,
        token_service: "YouTubeTokenService",
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token_service = token_service
        self._timeout = timeout
        self._transport = transport

    async def get(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        access_token = await self._token_service.get_valid_access_token()
        if not access_token:
            raise AuthenticationRequiredError(
                "No valid access token available. Please authenticate with Google."
            )

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers=headers)
        except httpx.TransportError as exc:
            raise YouTubeAPIError("YouTube API unreachable.") from exc

        if not response.is_success:
            logger.warning("User-scoped YouTube call failed with status %s", response.status_code)
            raise YouTubeAPIError(
                f"YouTube API error: {response.status_code}",
                status_code=response.status_code,
            )
        return read_json_object(response, "YouTube API")


__all__ = ["AuthenticatedYouTubeGateway"]
