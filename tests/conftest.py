"""Pytest configuration shared across the suite."""

try:
    from . import _bootstrap  # noqa: F401
except ImportError:  # pragma: no cover - rootdir-style collection
    import _bootstrap  # type: ignore # noqa: F401

import pytest

from tubenotes.core.config import GoogleSettings, OAuthSettings


@pytest.fixture
def anyio_backend() -> str:
    """Force AnyIO-powered tests to run against asyncio backend only."""
    return "asyncio"


@pytest.fixture
def google_settings() -> GoogleSettings:
    return GoogleSettings(
        GOOGLE_CLIENT_ID="client",
        GOOGLE_CLIENT_SECRET="secret",
        APP_ORIGIN="https://app.example.com",
    )


@pytest.fixture
def oauth_settings() -> OAuthSettings:
    return OAuthSettings()
