"""Shared fixtures for sharesync tests."""

from __future__ import annotations

import asyncio
from collections import deque
from typing import TYPE_CHECKING, Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from sharesync.account import Account
from sharesync.events import EventBus, EventType, ShareEvent
from sharesync.exceptions import TransportError
from sharesync.folders.journal import SyncJournal
from sharesync.folders.registry import Folder, FolderRegistry
from sharesync.sharing.manager import ShareManager

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable

    from sqlalchemy.ext.asyncio import AsyncEngine

    from sharesync.sharing.types import OcsRequest

_HANG = object()


# =========================================================================
# Fake transport
# =========================================================================


def envelope(data: Any = None, status: int = 100, message: str = "OK") -> dict[str, Any]:
    """Build an OCS reply envelope."""
    meta = {"status": "ok", "statuscode": status, "message": message}
    return {"ocs": {"meta": meta, "data": data}}


class FakeTransport:
    """Scripted transport: replies are consumed in order, requests are recorded."""

    def __init__(self) -> None:
        self.requests: list[OcsRequest] = []
        self.pending: list[asyncio.Future[Any]] = []
        self._replies: deque[Any] = deque()

    def reply(self, data: Any = None, *, status: int = 100, message: str = "OK") -> None:
        self._replies.append(envelope(data, status=status, message=message))

    def reply_raw(self, reply: Any) -> None:
        self._replies.append(reply)

    def fail(self, status_code: int, message: str = "") -> None:
        self._replies.append(TransportError(status_code, message))

    def hang(self) -> None:
        """Next request is never answered."""
        self._replies.append(_HANG)

    async def send(self, request: OcsRequest) -> dict[str, Any]:
        self.requests.append(request)
        item = self._replies.popleft()
        if item is _HANG:
            future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
            self.pending.append(future)
            return await future
        if isinstance(item, Exception):
            raise item
        return item


class EventRecorder:
    """Collects every event published on a bus."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[ShareEvent] = []
        bus.register_all(self._record)

    async def _record(self, event: ShareEvent) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[EventType]:
        return [e.event_type for e in self.events]


# =========================================================================
# Fixtures
# =========================================================================


@pytest.fixture
def account() -> Account:
    return Account(url="https://cloud.example.com/", server_version="10.0.3", user="alice")


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
async def async_engine() -> AsyncIterator[AsyncEngine]:
    """Async in-memory SQLite engine with all tables created."""
    eng = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> Callable[..., AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def make_folder(
    account: Account, session_factory: Callable[..., AsyncSession]
) -> Callable[..., Folder]:
    """Factory for folders with a real journal."""

    def _make(alias: str, remote_path: str, folder_account: Account | None = None) -> Folder:
        return Folder(
            alias=alias,
            account=folder_account or account,
            remote_path=remote_path,
            journal=SyncJournal(session_factory, alias),
        )

    return _make


@pytest.fixture
def registry() -> FolderRegistry:
    return FolderRegistry()


@pytest.fixture
def manager(account: Account, transport: FakeTransport, registry: FolderRegistry) -> ShareManager:
    return ShareManager(account, transport, registry)


@pytest.fixture
def recorder(manager: ShareManager) -> EventRecorder:
    return EventRecorder(manager.event_bus)
