"""
FastAPI Application Entry Point

create_app() builds the application for a given Settings object:
- HTML pages and the JSON API routers
- Logging middleware and rate limiting
- One Database per application, opened on startup and disposed on shutdown

`app` is the default instance used by uvicorn (shortener.main:app).
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shortener import __version__
from shortener.api import endpoints, pages
from shortener.core.rate_limit import limiter
from shortener.core.setting import Settings, get_settings
from shortener.db.session import Database
from shortener.middleware.logging import add_logging_middleware

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a FastAPI application.

    Args:
        settings: Configuration to use (defaults to the environment)

    Returns:
        A configured FastAPI instance
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Link Preview Shortener",
        description="Short links that show a preview page before redirecting",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    limiter.enabled = settings.RATE_LIMIT_ENABLED
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    add_logging_middleware(app)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {"status": "healthy"}

    app.include_router(pages.router)
    app.include_router(endpoints.router, tags=["Links"])

    @app.on_event("startup")
    async def open_database():
        app.state.database = Database(settings.DATABASE_URL)
        await app.state.database.create_all()
        logger.info("Link preview shortener started (env=%s)", settings.ENV_SETTING.value)

    @app.on_event("shutdown")
    async def close_database():
        database = getattr(app.state, "database", None)
        if database is not None:
            await database.dispose()

    return app


app = create_app()
