"""Settings dependency for routes that need configuration values."""

from fastapi import Depends

from tubenotes.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings.

    Kept separate from ``get_settings`` so tests can override it per app.
    """
    return get_settings()


SettingsDependency = Depends(get_app_settings)

__all__ = ["SettingsDependency", "get_app_settings"]
