"""sharesync: share management for synchronized cloud folders.

Create, list, change and delete OCS link and user shares, and keep the
local sync folders of an account consistent with the server's sharing state.
"""

__version__ = "0.1.0"

from sharesync.account import Account
from sharesync.config import SharingConfig
from sharesync.events import EventBus, EventType, ShareEvent
from sharesync.exceptions import (
    JobAlreadyIssuedError,
    PasswordRequiredError,
    ServerError,
    ShareParseError,
    ShareSyncError,
    TransportError,
)
from sharesync.folders import Folder, FolderNotifier, FolderRegistry, SyncFolder, SyncJournal
from sharesync.permissions import SharePermission, ShareType
from sharesync.sharing import (
    JobFailure,
    JobKind,
    JobSuccess,
    LinkShare,
    OcsRequest,
    Share,
    Sharee,
    ShareManager,
    ShareTransport,
)

__all__ = [
    "Account",
    "EventBus",
    "EventType",
    "Folder",
    "FolderNotifier",
    "FolderRegistry",
    "JobAlreadyIssuedError",
    "JobFailure",
    "JobKind",
    "JobSuccess",
    "LinkShare",
    "OcsRequest",
    "PasswordRequiredError",
    "ServerError",
    "Share",
    "ShareEvent",
    "ShareManager",
    "ShareParseError",
    "SharePermission",
    "ShareSyncError",
    "ShareTransport",
    "ShareType",
    "Sharee",
    "SyncFolder",
    "SyncJournal",
    "TransportError",
    "__version__",
]
