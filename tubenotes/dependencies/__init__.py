"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    get_google_oauth_client,
    get_oauth_state_encoder,
    get_token_cipher_service,
    get_token_store,
    get_youtube_data_client,
    get_youtube_gateway,
    get_youtube_token_service,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "SettingsDependency",
    "get_app_settings",
    "get_google_oauth_client",
    "get_oauth_state_encoder",
    "get_token_cipher_service",
    "get_token_store",
    "get_youtube_data_client",
    "get_youtube_gateway",
    "get_youtube_token_service",
]
