import pytest

from tubenotes.core.config import SecuritySettings
from tubenotes.services.token_cipher import TokenCipherService


def test_sealed_token_is_opaque_and_unseals() -> None:
    cipher = TokenCipherService(secret="super-secret-key")

    sealed = cipher.seal("ya29.access")
    assert sealed != "ya29.access"
    assert cipher.unseal(sealed) == "ya29.access"


def test_token_sealed_under_unknown_secret_unseals_to_none() -> None:
    sealed = TokenCipherService(secret="old-secret").seal("ya29.access")

    assert TokenCipherService(secret="new-secret").unseal(sealed) is None


def test_previous_secrets_keep_old_tokens_readable() -> None:
    sealed = TokenCipherService(secret="old-secret").seal("ya29.access")
    rotated = TokenCipherService(secret="new-secret", previous_secrets=["old-secret"])

    assert rotated.unseal(sealed) == "ya29.access"
    assert TokenCipherService(secret="old-secret").unseal(rotated.seal("R1")) is None


def test_token_cipher_requires_secret() -> None:
    with pytest.raises(ValueError):
        TokenCipherService(secret="")


def test_previous_secrets_are_read_comma_separated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOKEN_ENCRYPTION_PREVIOUS_SECRETS", "first, second,")

    assert SecuritySettings().previous_token_encryption_secrets == ("first", "second")
