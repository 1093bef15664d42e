"""SyncJournal: per-folder record of metadata that must be refetched.

The server does not change the etags of parent directories when sharing
state changes, so a cached directory listing would hide new share flags.
Marking a path makes the next sync pass refetch it together with all of
its ancestors.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import delete
from sqlalchemy.dialects import sqlite as sqlite_dialect
from sqlmodel import select

from sharesync.models.journal import JournalAvoidRead
from sharesync.utils import parent_paths

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.ext.asyncio import AsyncSession

    from sharesync.models.journal import JournalAvoidReadBase


class SyncJournal:
    """Avoid-read marks of one sync folder.

    Receives an async session factory and commits per call, so marks
    survive a restart between the share change and the next sync.
    """

    def __init__(
        self,
        session_factory: Callable[..., AsyncSession],
        folder_id: str,
        model: type[JournalAvoidReadBase] = JournalAvoidRead,
    ) -> None:
        self._session_factory = session_factory
        self._folder_id = folder_id
        self._model = model

    @property
    def folder_id(self) -> str:
        return self._folder_id

    async def avoid_read_from_db_on_next_sync(self, path: str) -> None:
        """Mark *path* (relative to the folder root, ``""`` for the root itself)."""
        path = path.strip("/")
        model = self._model
        async with self._session_factory() as session:
            dialect_module = sqlite_dialect
            if session.get_bind().dialect.name == "postgresql":
                from sqlalchemy.dialects import postgresql as pg_dialect

                dialect_module = pg_dialect

            # Concurrent share changes may mark the same path; the first one wins.
            stmt = (
                dialect_module.insert(model)
                .values(folder_id=self._folder_id, path=path, created_at=datetime.now(UTC))
                .on_conflict_do_nothing(index_elements=["folder_id", "path"])
            )
            await session.execute(stmt)
            await session.commit()

    async def list_avoid_read(self) -> list[str]:
        """All marked paths, sorted."""
        model = self._model
        async with self._session_factory() as session:
            result = await session.execute(
                select(model.path).where(model.folder_id == self._folder_id)
            )
            return sorted(result.scalars().all())

    async def should_avoid_read(self, path: str) -> bool:
        """True if *path* is marked or is an ancestor of a marked path."""
        path = path.strip("/")
        for marked in await self.list_avoid_read():
            if marked == path or path in parent_paths(marked):
                return True
        return False

    async def clear_avoid_read(self) -> int:
        """Drop all marks after a completed sync. Returns the number removed."""
        model = self._model
        async with self._session_factory() as session:
            result = await session.execute(
                delete(model).where(model.folder_id == self._folder_id)  # type: ignore[arg-type]
            )
            await session.commit()
            return result.rowcount or 0
