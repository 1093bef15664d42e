"""JournalAvoidRead model: paths whose cached metadata must be refetched.

Provides ``JournalAvoidReadBase`` (non-table) and ``JournalAvoidRead``
(concrete table).  Subclass the base with ``table=True`` and a custom
``__tablename__`` to keep several journals in one database.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class JournalAvoidReadBase(SQLModel):
    """A relative path that the next sync must not read from the local journal."""

    folder_id: str = Field(primary_key=True)
    path: str = Field(primary_key=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        sa_type=DateTime(timezone=True),  # type: ignore[invalid-argument-type]
    )


class JournalAvoidRead(JournalAvoidReadBase, table=True):
    """Default avoid-read table: ``sharesync_journal_avoid_read``."""

    __tablename__ = "sharesync_journal_avoid_read"
