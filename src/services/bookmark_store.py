"""Storage gateway for bookmark rows."""
import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from typing import Any, Protocol

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from models.bookmark import Bookmark
from services.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class BookmarkStore(Protocol):
    """
    CRUD-by-id surface over the bookmarks table.

    Implementations raise StoreUnavailableError for backend failures. A missing
    row is never an error: lookups return None and writes report 0 affected rows.
    """

    async def list_all(self) -> Sequence[Bookmark]:
        """Return every bookmark, in no particular order."""
        ...

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Return the bookmark with this id, or None."""
        ...

    async def insert(self, fields: dict[str, Any]) -> Bookmark:
        """Persist a new bookmark and return it with its assigned id."""
        ...

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> int:
        """Apply only the given fields. Returns the number of rows affected."""
        ...

    async def delete(self, bookmark_id: int) -> int:
        """Remove the bookmark. Returns the number of rows affected."""
        ...


class SqlBookmarkStore:
    """
    BookmarkStore backed by SQLAlchemy.

    Every call runs in its own session and commits before returning, so each
    operation is atomic for the single row it touches. Concurrency control is
    left to the database.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncGenerator[AsyncSession]:
        """Yield a session, commit on success and translate driver failures."""
        try:
            async with self._session_factory() as session:
                yield session
                await session.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Bookmark store %s failed", operation)
            raise StoreUnavailableError(operation) from e

    async def list_all(self) -> Sequence[Bookmark]:
        async with self._session("list") as session:
            result = await session.execute(select(Bookmark))
            return list(result.scalars().all())

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        async with self._session("get") as session:
            return await session.get(Bookmark, bookmark_id)

    async def insert(self, fields: dict[str, Any]) -> Bookmark:
        async with self._session("insert") as session:
            bookmark = Bookmark(**fields)
            session.add(bookmark)
            await session.flush()
            await session.refresh(bookmark)
            return bookmark

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> int:
        async with self._session("update") as session:
            result = await session.execute(
                update(Bookmark).where(Bookmark.id == bookmark_id).values(**fields),
            )
            return result.rowcount

    async def delete(self, bookmark_id: int) -> int:
        async with self._session("delete") as session:
            result = await session.execute(
                delete(Bookmark).where(Bookmark.id == bookmark_id),
            )
            return result.rowcount
