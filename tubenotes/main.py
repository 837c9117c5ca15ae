"""
FastAPI application entrypoint for the TubeNotes YouTube account service.
"""

from __future__ import annotations

from fastapi import FastAPI

from tubenotes.api.routes import router as api_router
from tubenotes.core.config import get_settings
from tubenotes.core.logging import configure_logging


def create_app() -> FastAPI:
    """Factory for the FastAPI application."""
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="TubeNotes",
        version="0.1.0",
        description="YouTube account connection and metadata API for the TubeNotes companion app.",
    )
    app.include_router(api_router, prefix="/api")
    return app


app = create_app()

__all__ = ["app", "create_app"]
