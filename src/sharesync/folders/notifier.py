"""FolderNotifier: refresh sync folders after a share change."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sharesync.utils import relative_to_folder

if TYPE_CHECKING:
    from sharesync.account import Account

    from .protocol import SyncFolder
    from .registry import FolderRegistry

logger = logging.getLogger(__name__)


class FolderNotifier:
    """Tells the sync folders containing a path that its sharing state changed.

    The folders then refetch the path's metadata and schedule a sync, so
    shared-icon overlays and permission flags become current.
    """

    def __init__(self, registry: FolderRegistry) -> None:
        self._registry = registry

    async def update_folders(self, account: Account, path: str) -> list[SyncFolder]:
        """Invalidate *path* in every matching folder of *account*.

        Returns the folders that were touched.
        """
        touched: list[SyncFolder] = []
        for folder in self._registry.folders_for_account(account):
            relative = relative_to_folder(path, folder.remote_path)
            if relative is None:
                continue
            # The server keeps the etags of parent directories when something is shared.
            await folder.journal.avoid_read_from_db_on_next_sync(relative)
            folder.schedule_this_folder_soon()
            touched.append(folder)

        logger.debug("Share change on %s touched %d folders", path, len(touched))
        return touched
