"""SyncFolder protocol: what share invalidation needs from a sync folder."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sharesync.account import Account


@runtime_checkable
class AvoidReadJournal(Protocol):
    """Local metadata cache of a folder."""

    async def avoid_read_from_db_on_next_sync(self, path: str) -> None:
        """Refetch *path* (relative to the folder root) on the next sync."""
        ...


@runtime_checkable
class SyncFolder(Protocol):
    """A locally synchronized folder of one account."""

    @property
    def account(self) -> Account: ...

    @property
    def remote_path(self) -> str:
        """Server-relative root of the folder, e.g. ``"/"`` or ``"/Documents"``."""
        ...

    @property
    def journal(self) -> AvoidReadJournal: ...

    def schedule_this_folder_soon(self) -> None:
        """Request a sync of this folder as soon as possible."""
        ...
