"""Sealing of OAuth token values before they reach the key/value backend."""

from __future__ import annotations

import base64
import hashlib
import logging
from typing import Iterable, Optional

from cryptography.fernet import Fernet, InvalidToken, MultiFernet

logger = logging.getLogger(__name__)


def _fernet_for(secret: str) -> Fernet:
    return Fernet(base64.urlsafe_b64encode(hashlib.sha256(secret.encode("utf-8")).digest()))


class TokenCipherService:
    """Seal token strings under the current secret, unseal under any known one.

    ``previous_secrets`` keeps tokens written before a secret rotation
    readable. A value sealed under a secret that is no longer configured
    unseals to ``None``, which the token store reads as a missing slot.
    """

    def __init__(self, *, secret: str, previous_secrets: Iterable[str] = ()) -> None:
        if not secret:
            raise ValueError("Token encryption secret must be provided.")
        self._fernet = MultiFernet(
            [_fernet_for(secret)] + [_fernet_for(old) for old in previous_secrets if old]
        )

    def seal(self, token: str) -> str:
        return self._fernet.encrypt(token.encode("utf-8")).decode("utf-8")

    def unseal(self, sealed: str) -> Optional[str]:
        try:
            token = self._fernet.decrypt(sealed.encode("utf-8"))
        except InvalidToken:
            logger.warning("Stored token was sealed under an unknown secret; ignoring it.")
            return None
        return token.decode("utf-8")


__all__ = ["TokenCipherService"]
