"""
Link Shortening Service

Core business logic:
- Validating the target URL
- Generating a random code and inserting the link
- Retrying with a fresh code when the insert hits an existing one
- Resolving codes for redirects, preview pages and the JSON API

Design Decisions:
- Collisions are detected by the insert, not a pre-check, so two requests
  racing on the same code can never both win
- Retries are capped at max_attempts; hitting the cap raises ExhaustedError
  instead of looping forever on a crowded code space
- Links are write-once: there is no update or delete
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from shortener.core.exceptions import (
    CodeConflictError,
    ExhaustedError,
    NotFoundError,
    ValidationError,
)
from shortener.core.validators import is_valid_url
from shortener.db.models import DEFAULT_QUOTE, Link
from shortener.services.code_generator import (
    DEFAULT_CODE_LENGTH,
    code_space_size,
    generate_code,
)
from shortener.services.link_store import LinkStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_REDIRECT_DELAY = 3


@dataclass(frozen=True)
class LinkPreview:
    """What the preview page needs: the link and how long to wait."""
    link: Link
    redirect_delay: int


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def link_to_dict(link: Link) -> dict[str, Any]:
    """Serialize a link for JSON consumers."""
    return {
        "code": link.code,
        "url": link.url,
        "title": link.title,
        "description": link.description,
        "image": link.image,
        "quote": link.quote,
        "created_at": link.created_at.isoformat() if link.created_at else None,
    }


class LinkService:
    """
    Creates and resolves short links.

    The session (and through it the database) is passed in by the caller,
    so tests can point the service at an isolated database.
    """

    def __init__(
        self,
        session: AsyncSession,
        code_length: int = DEFAULT_CODE_LENGTH,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        redirect_delay: int = DEFAULT_REDIRECT_DELAY,
        code_generator: Callable[[int], str] = generate_code,
        store: Optional[LinkStore] = None,
    ):
        """
        Args:
            session: Database session
            code_length: Length of generated codes
            max_attempts: Candidate codes tried before ExhaustedError
            redirect_delay: Seconds the preview page waits before redirecting
            code_generator: Callable producing a code of the given length
            store: Link store (defaults to one built on session)
        """
        if max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {max_attempts}")
        self.session = session
        self.code_length = code_length
        self.max_attempts = max_attempts
        self.redirect_delay = redirect_delay
        self.code_generator = code_generator
        self.store = store or LinkStore(session)

    async def create(
        self,
        url: Optional[str],
        title: Optional[str] = None,
        description: Optional[str] = None,
        image: Optional[str] = None,
        quote: Optional[str] = None,
    ) -> Link:
        """
        Shorten a URL.

        Every call stores a new link, even for a URL that was shortened before.

        Args:
            url: Target URL (http or https, with a host)
            title, description, image: Optional preview metadata
            quote: Optional quote, DEFAULT_QUOTE when blank

        Returns:
            The stored Link

        Raises:
            ValidationError: If url is missing or malformed (nothing is stored)
            ExhaustedError: If every candidate code collided
            StorageError: If the database fails
        """
        if url is not None and not isinstance(url, str):
            raise ValidationError(str(url), reason="The URL must be text")
        url = _clean(url)
        if not url:
            raise ValidationError(url, reason="A URL is required")
        if not is_valid_url(url):
            raise ValidationError(
                url,
                reason="Invalid URL. It must start with http:// or https:// and include a host"
            )

        fields = {
            "url": url,
            "title": _clean(title),
            "description": _clean(description),
            "image": _clean(image),
            "quote": _clean(quote) or DEFAULT_QUOTE,
        }

        for attempt in range(1, self.max_attempts + 1):
            code = self.code_generator(self.code_length)
            try:
                link = await self.store.add(Link(code=code, **fields))
            except CodeConflictError:
                logger.warning(
                    "Short code collision on %r (attempt %d/%d)",
                    code, attempt, self.max_attempts
                )
                continue

            logger.info("Created short link %s -> %s", link.code, link.url)
            return link

        logger.error(
            "Gave up creating a short link after %d colliding codes (code space %d)",
            self.max_attempts, code_space_size(self.code_length)
        )
        raise ExhaustedError(self.max_attempts)

    async def resolve(self, code: str) -> Link:
        """
        Look up the link for a code.

        The code is matched exactly and is not checked against the alphabet.

        Raises:
            NotFoundError: If no link has this code
            StorageError: If the lookup fails
        """
        link = await self.store.get_by_code(code)
        if link is None:
            raise NotFoundError(code)
        return link

    async def resolve_for_display(self, code: str) -> LinkPreview:
        """Resolve a code together with what the preview page needs."""
        link = await self.resolve(code)
        return LinkPreview(link=link, redirect_delay=self.redirect_delay)

    async def get_metadata(self, code: str) -> dict[str, Any]:
        """Resolve a code into plain data for programmatic consumers."""
        return link_to_dict(await self.resolve(code))


def build_short_url(base_url: str, code: str) -> str:
    """Join a public base URL and a code into <base>/s/<code>."""
    return f"{base_url.rstrip('/')}/s/{code}"
