"""
Shared FastAPI dependencies for the routers.
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shortener.core.setting import Settings
from shortener.db.session import get_session
from shortener.services.link_service import LinkService, build_short_url


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_link_service(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
) -> LinkService:
    return LinkService(
        session,
        code_length=settings.SHORT_CODE_LENGTH,
        max_attempts=settings.SHORT_CODE_MAX_ATTEMPTS,
        redirect_delay=settings.REDIRECT_DELAY_SECONDS,
    )


def short_url_for(request: Request, code: str) -> str:
    """
    Build the public short URL for a code.

    Uses BASE_URL when configured, otherwise the scheme and host the
    request came in on.
    """
    base_url = request.app.state.settings.BASE_URL or str(request.base_url)
    return build_short_url(base_url, code)
