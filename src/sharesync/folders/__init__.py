"""Sync folders: registry, journal, and share-change invalidation."""

from sharesync.folders.journal import SyncJournal
from sharesync.folders.notifier import FolderNotifier
from sharesync.folders.protocol import AvoidReadJournal, SyncFolder
from sharesync.folders.registry import Folder, FolderRegistry

__all__ = [
    "AvoidReadJournal",
    "Folder",
    "FolderNotifier",
    "FolderRegistry",
    "SyncFolder",
    "SyncJournal",
]
