"""
FastAPI routes for the YouTube account connection and metadata lookups.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Annotated, Any, Awaitable, Callable, TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse, RedirectResponse

from tubenotes.clients.google_auth import (
    AuthenticationRequiredError,
    ExchangeFailedError,
    OAuthCallbackError,
)
from tubenotes.clients.youtube import YouTubeAPIError, YouTubeAPIKeyMissingError
from tubenotes.dependencies import (
    get_app_settings,
    get_youtube_data_client,
    get_youtube_token_service,
)
from tubenotes.schemas import (
    AuthorizationUrlResponse,
    AuthStatusResponse,
    OAuthCallbackPayload,
)
from tubenotes.utils.formatting import format_count

router = APIRouter()
logger = logging.getLogger(__name__)

T = TypeVar("T")


def _wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "").lower()


@router.get("/health", status_code=HTTPStatus.OK)
async def healthcheck() -> dict:
    """Simple health endpoint for monitoring."""
    return {"status": "ok"}


@router.get("/auth/google/authorize", status_code=HTTPStatus.OK)
async def start_google_oauth_flow(
    request: Request,
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
    redirect_to: str | None = Query(
        default=None,
        description="Optional URL to redirect back to on successful authentication.",
    ),
    redirect: bool = Query(
        default=False,
        description="When true, respond with a redirect to the Google consent screen.",
    ),
) -> Any:
    """Kick off the OAuth flow by generating a signed state and consent URL."""
    authorization_url = token_service.get_authorization_url(redirect_to=redirect_to)

    if redirect or _wants_html(request):
        return RedirectResponse(url=authorization_url, status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return AuthorizationUrlResponse(authorization_url=authorization_url)


@router.get("/auth/google/callback", status_code=HTTPStatus.OK)
async def handle_google_oauth_callback(
    request: Request,
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
    settings: Annotated[Any, Depends(get_app_settings)],
    code: str | None = Query(default=None, description="Authorization code returned by Google."),
    state: str | None = Query(default=None, description="OAuth state token."),
    error: str | None = Query(default=None, description="Error reported by Google."),
    redirect: bool = Query(
        default=False,
        description="When true, redirect browser clients instead of returning JSON.",
    ),
) -> Response:
    """Complete the OAuth exchange, store tokens, and return redirect metadata."""
    payload = OAuthCallbackPayload(code=code, state=state, error=error)
    try:
        redirect_to = await token_service.complete_authorization(
            code=payload.code,
            state=payload.state,
            error=payload.error,
        )
    except OAuthCallbackError as exc:
        raise HTTPException(
            status_code=HTTPStatus.BAD_REQUEST,
            detail={
                "message": str(exc),
                "authorization_url": token_service.get_authorization_url(),
            },
        ) from exc
    except ExchangeFailedError as exc:
        logger.warning(
            "Authorization code exchange failed (status=%s, transient=%s)",
            exc.status_code,
            exc.transient,
        )
        raise HTTPException(
            status_code=HTTPStatus.BAD_GATEWAY if exc.transient else HTTPStatus.BAD_REQUEST,
            detail={
                "message": "Failed to exchange authorization code.",
                "authorization_url": token_service.get_authorization_url(),
            },
        ) from exc

    result = {"status": "connected", "redirect_to": redirect_to}
    redirect_target = redirect_to or settings.frontend_base_url
    if redirect_target and (redirect or _wants_html(request)):
        return RedirectResponse(url=str(redirect_target), status_code=HTTPStatus.TEMPORARY_REDIRECT)

    return JSONResponse(content=result)


@router.get("/auth/status", response_model=AuthStatusResponse)
async def get_auth_status(
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
) -> AuthStatusResponse:
    return AuthStatusResponse(authenticated=token_service.is_authenticated())


@router.post("/auth/logout", status_code=HTTPStatus.OK)
async def logout(
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
) -> dict:
    """Revoke and forget the connected account's tokens."""
    await token_service.logout()
    return {"status": "logged_out"}


async def _call_youtube(
    call: Callable[[], Awaitable[T]],
    token_service: Any,
) -> T:
    """Translate client errors into HTTP responses."""
    try:
        return await call()
    except AuthenticationRequiredError as exc:
        raise HTTPException(
            status_code=HTTPStatus.UNAUTHORIZED,
            detail={
                "message": "Google account not connected.",
                "authorization_url": token_service.get_authorization_url(),
            },
        ) from exc
    except YouTubeAPIKeyMissingError as exc:
        raise HTTPException(
            status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except YouTubeAPIError as exc:
        logger.warning("YouTube API call failed: %s", exc)
        raise HTTPException(status_code=HTTPStatus.BAD_GATEWAY, detail=str(exc)) from exc


@router.get("/youtube/activities", status_code=HTTPStatus.OK)
async def list_user_activities(
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
    max_results: int = Query(default=20, ge=1, le=50),
) -> dict:
    items = await _call_youtube(
        lambda: youtube.get_user_activities(max_results=max_results), token_service
    )
    return {"items": items}


@router.get("/youtube/subscriptions", status_code=HTTPStatus.OK)
async def list_user_subscriptions(
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
    max_results: int = Query(default=20, ge=1, le=50),
) -> dict:
    items = await _call_youtube(
        lambda: youtube.get_user_subscriptions(max_results=max_results), token_service
    )
    return {"items": items}


@router.get("/youtube/channels/{channel_id}", status_code=HTTPStatus.OK)
async def get_channel(
    channel_id: str,
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
) -> dict:
    """Channel snippet and statistics, with abbreviated counts for display."""
    channel = await _call_youtube(lambda: youtube.get_channel_info(channel_id), token_service)
    if channel is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Channel not found.")

    statistics = channel.get("statistics") or {}
    display = {
        field: format_count(statistics[key])
        for field, key in (
            ("subscribers", "subscriberCount"),
            ("views", "viewCount"),
            ("videos", "videoCount"),
        )
        if statistics.get(key) is not None
    }
    return {"channel": channel, "display": display}


@router.get("/youtube/channels/{channel_id}/playlists", status_code=HTTPStatus.OK)
async def list_channel_playlists(
    channel_id: str,
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
    max_results: int = Query(default=20, ge=1, le=50),
) -> dict:
    items = await _call_youtube(
        lambda: youtube.get_playlists(channel_id, max_results=max_results), token_service
    )
    return {"items": items}


@router.get("/youtube/playlists/{playlist_id}/items", status_code=HTTPStatus.OK)
async def list_playlist_items(
    playlist_id: str,
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
    max_results: int = Query(default=20, ge=1, le=50),
) -> dict:
    items = await _call_youtube(
        lambda: youtube.get_playlist_items(playlist_id, max_results=max_results),
        token_service,
    )
    return {"items": items}


@router.get("/youtube/i18n/languages", status_code=HTTPStatus.OK)
async def list_languages(
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
) -> dict:
    return {"items": await _call_youtube(youtube.get_languages, token_service)}


@router.get("/youtube/i18n/regions", status_code=HTTPStatus.OK)
async def list_regions(
    youtube: Annotated[Any, Depends(get_youtube_data_client)],
    token_service: Annotated[Any, Depends(get_youtube_token_service)],
) -> dict:
    return {"items": await _call_youtube(youtube.get_regions, token_service)}
