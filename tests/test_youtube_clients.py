from __future__ import annotations

import httpx
import pytest

from tubenotes.clients.google_auth import AuthenticationRequiredError
from tubenotes.clients.youtube import (
    API_BASE_URL,
    YouTubeAPIError,
    YouTubeAPIKeyMissingError,
    YouTubeDataClient,
)
from tubenotes.services.youtube_gateway import AuthenticatedYouTubeGateway
from tubenotes.utils.http import RetryConfig


class StubTokenService:
    def __init__(self, token: str | None) -> None:
        self.token = token
        self.calls = 0

    async def get_valid_access_token(self) -> str | None:
        self.calls += 1
        return self.token


class Recorder:
    def __init__(self, *responses: httpx.Response) -> None:
        self._responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)


def _gateway(token: str | None, recorder: Recorder) -> AuthenticatedYouTubeGateway:
    return AuthenticatedYouTubeGateway(
        StubTokenService(token), transport=httpx.MockTransport(recorder)
    )


@pytest.mark.asyncio
async def test_gateway_attaches_bearer_token_to_single_request() -> None:
    recorder = Recorder(httpx.Response(200, json={"items": [{"id": "act-1"}]}))
    gateway = _gateway("A1", recorder)

    payload = await gateway.get(f"{API_BASE_URL}/activities", params={"home": "true"})

    assert payload == {"items": [{"id": "act-1"}]}
    assert len(recorder.requests) == 1
    assert recorder.requests[0].headers["authorization"] == "Bearer A1"
    assert recorder.requests[0].headers["accept"] == "application/json"


@pytest.mark.asyncio
async def test_gateway_requires_authentication_before_any_request() -> None:
    recorder = Recorder()
    gateway = _gateway(None, recorder)

    with pytest.raises(AuthenticationRequiredError):
        await gateway.get(f"{API_BASE_URL}/activities")

    assert recorder.requests == []


@pytest.mark.asyncio
async def test_gateway_raises_api_error_on_failure_status() -> None:
    gateway = _gateway("A1", Recorder(httpx.Response(403, json={"error": {}})))

    with pytest.raises(YouTubeAPIError) as exc_info:
        await gateway.get(f"{API_BASE_URL}/subscriptions")

    assert exc_info.value.status_code == 403


@pytest.mark.asyncio
async def test_user_subscriptions_go_through_gateway() -> None:
    recorder = Recorder(httpx.Response(200, json={"items": [{"id": "sub-1"}]}))
    client = YouTubeDataClient(gateway=_gateway("A1", recorder))

    items = await client.get_user_subscriptions(max_results=5)

    assert items == [{"id": "sub-1"}]
    request = recorder.requests[0]
    assert request.url.path == "/youtube/v3/subscriptions"
    assert request.url.params["mySubscriptions"] == "true"
    assert request.url.params["maxResults"] == "5"
    assert "key" not in request.url.params


@pytest.mark.asyncio
async def test_public_lookup_uses_api_key_and_unwraps_first_item() -> None:
    recorder = Recorder(httpx.Response(200, json={"items": [{"id": "UC1"}]}))
    client = YouTubeDataClient(
        gateway=_gateway(None, Recorder()),
        api_key="yt-key",
        transport=httpx.MockTransport(recorder),
    )

    channel = await client.get_channel_info("UC1")

    assert channel == {"id": "UC1"}
    params = recorder.requests[0].url.params
    assert params["key"] == "yt-key"
    assert params["id"] == "UC1"
    assert "authorization" not in recorder.requests[0].headers


@pytest.mark.asyncio
async def test_public_lookup_returns_none_for_unknown_channel() -> None:
    client = YouTubeDataClient(
        gateway=_gateway(None, Recorder()),
        api_key="yt-key",
        transport=httpx.MockTransport(Recorder(httpx.Response(200, json={"items": []}))),
    )

    assert await client.get_channel_info("missing") is None


@pytest.mark.asyncio
async def test_public_lookup_retries_server_errors() -> None:
    recorder = Recorder(
        httpx.Response(503),
        httpx.Response(200, json={"items": [{"id": "en"}]}),
    )
    client = YouTubeDataClient(
        gateway=_gateway(None, Recorder()),
        api_key="yt-key",
        retry_config=RetryConfig(attempts=2, backoff_seconds=0),
        transport=httpx.MockTransport(recorder),
    )

    assert await client.get_languages() == [{"id": "en"}]
    assert len(recorder.requests) == 2


@pytest.mark.asyncio
async def test_public_lookup_does_not_retry_client_errors() -> None:
    recorder = Recorder(httpx.Response(400), httpx.Response(200, json={"items": []}))
    client = YouTubeDataClient(
        gateway=_gateway(None, Recorder()),
        api_key="yt-key",
        retry_config=RetryConfig(attempts=3, backoff_seconds=0),
        transport=httpx.MockTransport(recorder),
    )

    with pytest.raises(YouTubeAPIError) as exc_info:
        await client.get_regions()

    assert exc_info.value.status_code == 400
    assert len(recorder.requests) == 1


@pytest.mark.asyncio
async def test_public_lookup_requires_api_key() -> None:
    client = YouTubeDataClient(gateway=_gateway(None, Recorder()))

    with pytest.raises(YouTubeAPIKeyMissingError):
        await client.get_playlists("UC1")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [httpx.Response(200, text="<html>oops</html>"), httpx.Response(200, json=["act-1"])],
)
async def test_gateway_rejects_unreadable_success_body(response: httpx.Response) -> None:
    gateway = _gateway("A1", Recorder(response))

    with pytest.raises(YouTubeAPIError) as exc_info:
        await gateway.get(f"{API_BASE_URL}/activities")

    assert exc_info.value.status_code == 200
