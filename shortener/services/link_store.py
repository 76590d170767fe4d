"""
Link Store

Persistence for Link rows. The store never checks for an existing code
before inserting; the unique index decides, and a violation on `code` is
reported as CodeConflictError so the caller can retry with another code.
"""

import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shortener.core.exceptions import CodeConflictError, StorageError
from shortener.db.interface import DatabaseAdapter
from shortener.db.models import Link
from shortener.db.sqlite_adapter import get_database_adapter

logger = logging.getLogger(__name__)


class LinkStore:
    """Write-once, read-many access to the links table."""

    def __init__(self, session: AsyncSession, adapter: Optional[DatabaseAdapter] = None):
        """
        Args:
            session: Database session, owned by the caller
            adapter: Adapter used to classify integrity errors
        """
        self.session = session
        self.adapter = adapter or get_database_adapter()

    async def add(self, link: Link) -> Link:
        """
        Insert a new link and commit it.

        Returns:
            The stored link with id and created_at populated

        Raises:
            CodeConflictError: If link.code is already taken
            StorageError: On any other database failure
        """
        try:
            self.session.add(link)
            await self.session.flush()
            await self.session.commit()
            await self.session.refresh(link)
            return link

        except IntegrityError as e:
            await self.session.rollback()
            if self.adapter.is_unique_violation(e, Link.__tablename__, "code"):
                raise CodeConflictError(link.code, original_error=e)
            logger.error("Failed to insert link: %s", e, exc_info=True)
            raise StorageError("failed to insert link: constraint violation", original_error=e)
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Failed to insert link: %s", e, exc_info=True)
            raise StorageError(f"failed to insert link: {e}", original_error=e)

    async def get_by_code(self, code: str) -> Optional[Link]:
        """
        Look up a link by exact code match.

        Returns:
            The Link, or None if no row matches

        Raises:
            StorageError: If the query fails
        """
        try:
            statement = select(Link).where(Link.code == code)
            result = await self.session.execute(statement)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Failed to look up code %r: %s", code, e, exc_info=True)
            raise StorageError(f"failed to look up link: {e}", original_error=e)

    async def count(self) -> int:
        """Total number of stored links."""
        try:
            result = await self.session.execute(select(func.count(Link.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            raise StorageError(f"failed to count links: {e}", original_error=e)
