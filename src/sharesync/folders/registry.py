"""Folder and FolderRegistry: locally tracked sync folders."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from sharesync.account import Account

    from .journal import SyncJournal
    from .protocol import SyncFolder

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Folder:
    """A sync folder mapping a server path to local storage."""

    alias: str
    """Unique name of the folder within the registry."""

    account: Account
    """Account the folder syncs with."""

    remote_path: str
    """Server-relative root, e.g. ``"/"`` or ``"/Documents"``."""

    journal: SyncJournal
    """Local metadata journal."""

    on_schedule: Callable[[Folder], None] | None = field(default=None, repr=False)
    """Called when a sync is requested; set by ``FolderRegistry.add_folder``."""

    def schedule_this_folder_soon(self) -> None:
        if self.on_schedule is not None:
            self.on_schedule(self)


class FolderRegistry:
    """Registry of sync folders plus the queue of folders awaiting a sync.

    The queue is FIFO and never holds the same folder twice.
    """

    def __init__(self) -> None:
        self._folders: dict[str, SyncFolder] = {}
        self._queue: deque[SyncFolder] = deque()

    def add_folder(self, folder: Folder) -> None:
        """Add or replace a folder, keyed by its alias."""
        self._folders[folder.alias] = folder
        folder.on_schedule = self.schedule_folder

    def remove_folder(self, alias: str) -> None:
        folder = self._folders.pop(alias, None)
        if folder is None:
            return
        if folder in self._queue:
            self._queue.remove(folder)
        if isinstance(folder, Folder):
            folder.on_schedule = None

    def get_folder(self, alias: str) -> SyncFolder | None:
        return self._folders.get(alias)

    def list_folders(self) -> list[SyncFolder]:
        """All folders, in registration order."""
        return list(self._folders.values())

    def folders_for_account(self, account: Account) -> list[SyncFolder]:
        return [f for f in self._folders.values() if f.account == account]

    # ------------------------------------------------------------------
    # Sync queue
    # ------------------------------------------------------------------

    def schedule_folder(self, folder: SyncFolder) -> None:
        """Queue *folder* for the next sync run unless it is already queued."""
        if folder in self._queue:
            return
        logger.debug("Scheduling sync of %s", folder.remote_path)
        self._queue.append(folder)

    def scheduled_folders(self) -> list[SyncFolder]:
        return list(self._queue)

    def pop_scheduled(self) -> SyncFolder | None:
        """Take the next folder to sync, None when the queue is empty."""
        if not self._queue:
            return None
        return self._queue.popleft()
