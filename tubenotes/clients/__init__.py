"""Expose constructed client wrappers."""

from .google_auth import GoogleOAuthClient, OAuthStateEncoder
from .sqlite_store import InMemoryKeyValueStore, SQLiteKeyValueStore
from .youtube import YouTubeDataClient

__all__ = [
    "GoogleOAuthClient",
    "InMemoryKeyValueStore",
    "OAuthStateEncoder",
    "SQLiteKeyValueStore",
    "YouTubeDataClient",
]
