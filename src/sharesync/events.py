"""EventBus and event types for share lifecycle notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from sharesync.exceptions import (
    PasswordRequiredError,
    ServerError,
    ShareParseError,
    ShareSyncError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from sharesync.sharing.shares import Share

    Listener = Callable[[ShareEvent], Awaitable[Any]]

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Terminal outcomes of share operations."""

    SHARE_CREATED = "share_created"
    SHARES_FETCHED = "shares_fetched"
    SHARE_DELETED = "share_deleted"
    PERMISSIONS_SET = "permissions_set"
    NAME_SET = "name_set"
    PASSWORD_SET = "password_set"
    PASSWORD_SET_ERROR = "password_set_error"
    EXPIRE_DATE_SET = "expire_date_set"
    LINK_SHARE_REQUIRES_PASSWORD = "link_share_requires_password"
    SERVER_ERROR = "server_error"
    SHARE_PARSE_ERROR = "share_parse_error"


@dataclass(frozen=True, slots=True)
class ShareEvent:
    """Immutable record of a share operation outcome.

    Attributes:
        event_type: The kind of outcome.
        share: The created, mutated or deleted share, when there is one.
        shares: Fetched shares in server order (``SHARES_FETCHED`` only).
        path: Server-relative path the operation targeted.
        status_code: Server status for error events, None otherwise.
        message: Server message for error events, None otherwise.
    """

    event_type: EventType
    share: Share | None = None
    shares: tuple[Share, ...] = ()
    path: str | None = None
    status_code: int | None = None
    message: str | None = None

    @property
    def is_error(self) -> bool:
        return self.event_type in _ERROR_EVENTS

    def as_exception(self) -> ShareSyncError | None:
        """The matching exception for an error event, None for other events."""
        if self.event_type is EventType.LINK_SHARE_REQUIRES_PASSWORD:
            return PasswordRequiredError(self.status_code or 0, self.message or "")
        if self.event_type is EventType.SHARE_PARSE_ERROR:
            return ShareParseError(self.message or "")
        if self.is_error:
            return ServerError(self.status_code or 0, self.message or "")
        return None


_ERROR_EVENTS = frozenset(
    {
        EventType.PASSWORD_SET_ERROR,
        EventType.LINK_SHARE_REQUIRES_PASSWORD,
        EventType.SERVER_ERROR,
        EventType.SHARE_PARSE_ERROR,
    }
)


class EventBus:
    """Publishes share outcomes to registered listeners.

    Listeners run sequentially in registration order; type-specific
    listeners come before catch-all ones.  A listener that raises is
    logged and skipped.  The operation that produced the event has
    already been confirmed by the server and must still be reported as
    done, so ``emit`` returns the failures instead of raising them.
    """

    def __init__(self) -> None:
        self._listeners: dict[EventType, list[Listener]] = {et: [] for et in EventType}
        self._catch_all: list[Listener] = []

    def register(self, event_type: EventType, listener: Listener) -> None:
        """Call *listener* for every event of *event_type*."""
        self._listeners[event_type].append(listener)

    def register_all(self, listener: Listener) -> None:
        """Call *listener* for every event, whatever its type."""
        self._catch_all.append(listener)

    def unregister(self, event_type: EventType | None, listener: Listener) -> bool:
        """Remove *listener*; ``None`` removes a catch-all listener. True if found."""
        listeners = self._catch_all if event_type is None else self._listeners[event_type]
        if listener not in listeners:
            return False
        listeners.remove(listener)
        return True

    async def emit(self, event: ShareEvent) -> list[BaseException]:
        """Deliver *event*; returns the exceptions raised by failing listeners."""
        failures: list[BaseException] = []
        for listener in [*self._listeners[event.event_type], *self._catch_all]:
            try:
                await listener(event)
            except Exception as exc:
                logger.warning(
                    "Listener %r failed for %s on %s (share %s)",
                    listener,
                    event.event_type.value,
                    event.path,
                    event.share.id if event.share is not None else "-",
                    exc_info=True,
                )
                failures.append(exc)
        return failures

    @property
    def handler_count(self) -> int:
        """Number of registered listeners, catch-all ones included."""
        return len(self._catch_all) + sum(len(ls) for ls in self._listeners.values())

    def clear(self) -> None:
        """Remove all listeners."""
        self._catch_all.clear()
        for listeners in self._listeners.values():
            listeners.clear()
