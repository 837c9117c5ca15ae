"""
Persistence of the connected YouTube account's OAuth tokens.

The account occupies one global slot made of three string keys. A record is
either fully present or treated as absent; there is no partial state.
"""

from __future__ import annotations

import time
from typing import Dict, Iterable, Optional, Protocol

from tubenotes.models.oauth import TokenGrant, TokenRecord
from tubenotes.services.token_cipher import TokenCipherService

ACCESS_TOKEN_KEY = "youtube_access_token"
REFRESH_TOKEN_KEY = "youtube_refresh_token"
EXPIRY_KEY = "youtube_token_expiry"


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def replace(self, values: Dict[str, str], drop: Iterable[str] = ()) -> None: ...

    def delete(self, *keys: str) -> None: ...


class TokenStore:
    """Read and write the access token, refresh token and expiry instant."""

    def __init__(
        self,
        backend: KeyValueBackend,
        *,
        cipher: TokenCipherService | None = None,
    ) -> None:
        self._backend = backend
        self._cipher = cipher

    def write(self, grant: TokenGrant, issued_at_ms: int) -> None:
        """Persist ``grant`` with an expiry of ``issued_at_ms + expires_in``.

        The refresh token is stored exactly as given. Callers refreshing an
        existing record are responsible for carrying the old refresh token
        over when the grant does not include one.
        """
        expiry_ms = issued_at_ms + grant.expires_in * 1000
        values = {
            ACCESS_TOKEN_KEY: self._seal(grant.access_token),
            EXPIRY_KEY: str(expiry_ms),
        }
        if grant.refresh_token:
            values[REFRESH_TOKEN_KEY] = self._seal(grant.refresh_token)
            self._backend.replace(values)
        else:
            self._backend.replace(values, drop=(REFRESH_TOKEN_KEY,))

    def read(self) -> Optional[TokenRecord]:
        access_token = self._open(self._backend.get(ACCESS_TOKEN_KEY))
        refresh_token = self._open(self._backend.get(REFRESH_TOKEN_KEY))
        expiry_ms = self._expiry_ms()
        if not access_token or not refresh_token or expiry_ms is None:
            return None
        return TokenRecord(
            access_token=access_token,
            refresh_token=refresh_token,
            expiry_ms=expiry_ms,
        )

    def has_tokens(self) -> bool:
        """Both tokens are present, regardless of expiry."""
        return bool(
            self._open(self._backend.get(ACCESS_TOKEN_KEY))
            and self._open(self._backend.get(REFRESH_TOKEN_KEY))
        )

    def stored_access_token(self) -> Optional[str]:
        """The access token slot alone, even when the record is incomplete."""
        return self._open(self._backend.get(ACCESS_TOKEN_KEY)) or None

    def is_expired(self, at_ms: Optional[int] = None) -> bool:
        """True when no expiry is stored or ``at_ms`` is past it."""
        expiry_ms = self._expiry_ms()
        if expiry_ms is None:
            return True
        current = now_ms() if at_ms is None else at_ms
        return current > expiry_ms

    def clear(self) -> None:
        self._backend.delete(ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, EXPIRY_KEY)

    def _expiry_ms(self) -> Optional[int]:
        raw = self._backend.get(EXPIRY_KEY)
        if not raw:
            return None
        try:
            return int(raw)
        except ValueError:
            return None

    def _seal(self, value: str) -> str:
        if self._cipher is None:
            return value
        return self._cipher.seal(value)

    def _open(self, value: Optional[str]) -> Optional[str]:
        if not value or self._cipher is None:
            return value
        return self._cipher.unseal(value)


__all__ = [
    "ACCESS_TOKEN_KEY",
    "EXPIRY_KEY",
    "REFRESH_TOKEN_KEY",
    "KeyValueBackend",
    "TokenStore",
    "now_ms",
]
