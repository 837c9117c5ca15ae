"""Service layer exports."""

from .token_cipher import TokenCipherService
from .token_store import TokenStore
from .youtube_gateway import AuthenticatedYouTubeGateway
from .youtube_tokens import YouTubeTokenService

__all__ = [
    "AuthenticatedYouTubeGateway",
    "TokenCipherService",
    "TokenStore",
    "YouTubeTokenService",
]
