"""SQLModel database models for sharesync."""

from sharesync.models.journal import JournalAvoidRead, JournalAvoidReadBase

__all__ = [
    "JournalAvoidRead",
    "JournalAvoidReadBase",
]
