"""
Factory functions to provide shared clients and services as FastAPI dependencies.
"""

from functools import lru_cache

from tubenotes.clients import (
    GoogleOAuthClient,
    OAuthStateEncoder,
    SQLiteKeyValueStore,
    YouTubeDataClient,
)
from tubenotes.core.config import get_settings
from tubenotes.services import (
    AuthenticatedYouTubeGateway,
    TokenCipherService,
    TokenStore,
    YouTubeTokenService,
)


@lru_cache()
def _settings():
    """Internal helper to cache settings for client factories."""
    return get_settings()


@lru_cache()
def get_oauth_state_encoder() -> OAuthStateEncoder:
    """Provide an OAuth state encoder derived from the Google client secret."""
    settings = _settings()
    return OAuthStateEncoder(secret_key=settings.google.client_secret)


@lru_cache()
def get_google_oauth_client() -> GoogleOAuthClient:
    """Create a singleton Google OAuth client."""
    settings = _settings()
    return GoogleOAuthClient(settings.google, settings.oauth)


@lru_cache()
def get_token_cipher_service() -> TokenCipherService:
    """Provide symmetric encryption helper for token storage."""
    settings = _settings()
    secret = settings.security.token_encryption_secret or settings.google.client_secret
    return TokenCipherService(
        secret=secret,
        previous_secrets=settings.security.previous_token_encryption_secrets,
    )


@lru_cache()
def get_token_store() -> TokenStore:
    """Provide the SQLite-backed token slot."""
    settings = _settings()
    return TokenStore(
        SQLiteKeyValueStore(settings.storage.token_db_path),
        cipher=get_token_cipher_service(),
    )


@lru_cache()
def get_youtube_token_service() -> YouTubeTokenService:
    """One token service per process so concurrent refreshes are coalesced."""
    settings = _settings()
    return YouTubeTokenService(
        store=get_token_store(),
        oauth_client=get_google_oauth_client(),
        state_encoder=get_oauth_state_encoder(),
        oauth_settings=settings.oauth,
    )


@lru_cache()
def get_youtube_gateway() -> AuthenticatedYouTubeGateway:
    settings = _settings()
    return AuthenticatedYouTubeGateway(
        get_youtube_token_service(),
        timeout=settings.youtube.http_timeout_seconds,
    )


@lru_cache()
def get_youtube_data_client() -> YouTubeDataClient:
    """Provide YouTube Data API client instance."""
    settings = _settings()
    return YouTubeDataClient(
        gateway=get_youtube_gateway(),
        api_key=settings.youtube.api_key,
        timeout=settings.youtube.http_timeout_seconds,
    )


__all__ = [
    "get_google_oauth_client",
    "get_oauth_state_encoder",
    "get_token_cipher_service",
    "get_token_store",
    "get_youtube_data_client",
    "get_youtube_gateway",
    "get_youtube_token_service",
]
