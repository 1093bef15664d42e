"""Custom exception hierarchy for sharesync."""

from __future__ import annotations


class ShareSyncError(Exception):
    """Base exception for all sharesync errors."""


class ServerError(ShareSyncError):
    """The server answered a share request with a non-success status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        super().__init__(f"{status_code}: {message}" if message else str(status_code))
        self.status_code = status_code
        self.message = message


class PasswordRequiredError(ServerError):
    """Link creation was refused because the server enforces a password."""


class TransportError(ServerError):
    """Raised by a transport when the HTTP exchange itself failed."""


class ShareParseError(ShareSyncError):
    """Raised when a share record is missing required fields or carries invalid codes."""


class JobAlreadyIssuedError(ShareSyncError):
    """Raised when a single-use share job is run a second time."""
