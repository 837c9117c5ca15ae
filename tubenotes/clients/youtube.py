"""YouTube Data API v3 client for channel, playlist, locale and account data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import httpx

from tubenotes.utils.http import RetryConfig, request_with_retry

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from tubenotes.services.youtube_gateway import AuthenticatedYouTubeGateway

API_BASE_URL = "https://www.googleapis.com/youtube/v3"


class YouTubeAPIError(Exception):
    """Raised when the YouTube Data API answers with an error status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class YouTubeAPIKeyMissingError(Exception):
    """Raised when a public lookup is attempted without ``YOUTUBE_API_KEY``."""


class YouTubeDataClient:
    """Read-only access to YouTube metadata.

    Public resources are fetched with the project API key. Account resources
    (home activity feed, subscriptions) go through the authenticated gateway.
    """

    def __init__(
        self,
        *,
        gateway: "AuthenticatedYouTubeGateway",
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._gateway = gateway
        self._api_key = api_key
        self._timeout = timeout
        self._retry_config = retry_config or RetryConfig()
        self._transport = transport

    async def get_user_activities(self, max_results: int = 20) -> List[Dict[str, Any]]:
        payload = await self._gateway.get(
            f"{API_BASE_URL}/activities",
            params={
                "part": "snippet,contentDetails",
                "home": "true",
                "maxResults": max_results,
            },
        )
        return payload.get("items", [])

    async def get_user_subscriptions(self, max_results: int = 20) -> List[Dict[str, Any]]:
        payload = await self._gateway.get(
            f"{API_BASE_URL}/subscriptions",
            params={
                "part": "snippet,contentDetails",
                "mySubscriptions": "true",
                "maxResults": max_results,
            },
        )
        return payload.get("items", [])

    async def get_channel_info(self, channel_id: str) -> Optional[Dict[str, Any]]:
        payload = await self._get_public(
            "channels",
            {"part": "snippet,statistics,brandingSettings", "id": channel_id},
        )
        items = payload.get("items") or []
        return items[0] if items else None

    async def get_playlists(self, channel_id: str, max_results: int = 20) -> List[Dict[str, Any]]:
        payload = await self._get_public(
            "playlists",
            {
                "part": "snippet,contentDetails,status",
                "channelId": channel_id,
                "maxResults": max_results,
            },
        )
        return payload.get("items", [])

    async def get_playlist_items(
        self, playlist_id: str, max_results: int = 20
    ) -> List[Dict[str, Any]]:
        payload = await self._get_public(
            "playlistItems",
            {
                "part": "snippet,contentDetails",
                "playlistId": playlist_id,
                "maxResults": max_results,
            },
        )
        return payload.get("items", [])

    async def get_languages(self) -> List[Dict[str, Any]]:
        payload = await self._get_public("i18nLanguages", {"part": "snippet"})
        return payload.get("items", [])

    async def get_regions(self) -> List[Dict[str, Any]]:
        payload = await self._get_public("i18nRegions", {"part": "snippet"})
        return payload.get("items", [])

    async def _get_public(self, resource: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self._api_key:
            raise YouTubeAPIKeyMissingError("YouTube API key not configured.")

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await request_with_retry(
                    client.get,
                    f"{API_BASE_URL}/{resource}",
                    params={**params, "key": self._api_key},
                    retry_config=self._retry_config,
                )
            except httpx.HTTPStatusError as exc:
                raise YouTubeAPIError(
                    f"{resource} API error: {exc.response.status_code}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.TransportError as exc:
                raise YouTubeAPIError(f"{resource} API unreachable.") from exc
        return read_json_object(response, f"{resource} API")


def read_json_object(response: httpx.Response, source: str) -> Dict[str, Any]:
    """Decode a successful response whose body must be a JSON object."""
    try:
        payload = response.json()
    except ValueError as exc:
        raise YouTubeAPIError(
            f"{source} returned a non-JSON body.", status_code=response.status_code
        ) from exc
    if not isinstance(payload, dict):
        raise YouTubeAPIError(
            f"{source} returned an unexpected body.", status_code=response.status_code
        )
    return payload


__all__ = [
    "API_BASE_URL",
    "YouTubeAPIError",
    "YouTubeAPIKeyMissingError",
    "YouTubeDataClient",
    "read_json_object",
]
