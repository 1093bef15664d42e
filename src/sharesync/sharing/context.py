"""ShareContext: collaborators shared by a manager and the shares it produces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sharesync.config import SharingConfig
from sharesync.events import EventBus

from .jobs import ShareJob

if TYPE_CHECKING:
    from sharesync.account import Account
    from sharesync.events import ShareEvent
    from sharesync.folders.notifier import FolderNotifier

    from .protocol import ShareTransport


@dataclass
class ShareContext:
    """Everything a share needs to issue requests and publish outcomes."""

    account: Account
    transport: ShareTransport
    notifier: FolderNotifier
    event_bus: EventBus = field(default_factory=EventBus)
    config: SharingConfig = field(default_factory=SharingConfig)

    def new_job(self) -> ShareJob:
        """Create a fresh single-use job bound to this account's transport."""
        return ShareJob(self.transport, self.config)

    async def emit(self, event: ShareEvent) -> None:
        await self.event_bus.emit(event)

    async def update_folders(self, path: str) -> None:
        await self.notifier.update_folders(self.account, path)
