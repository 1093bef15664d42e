"""ShareManager: share creation and listing for one account."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from sharesync.config import SharingConfig
from sharesync.events import EventBus, EventType, ShareEvent
from sharesync.exceptions import ShareParseError
from sharesync.folders.notifier import FolderNotifier
from sharesync.permissions import SharePermission

from .context import ShareContext
from .fields import parse_permissions
from .parser import ShareParser
from .types import JobFailure, get_json_return_code

if TYPE_CHECKING:
    from collections.abc import Callable

    from sharesync.account import Account
    from sharesync.folders.registry import FolderRegistry
    from sharesync.permissions import ShareType

    from .protocol import ShareTransport
    from .shares import LinkShare, Share

logger = logging.getLogger(__name__)

_S = TypeVar("_S", bound="Share")

# Status with which servers predating password policies refused a link share.
PASSWORD_REQUIRED_STATUS = 403


def effective_permissions(
    desired: SharePermission,
    existing: SharePermission,
) -> SharePermission:
    """Clamp *desired* to the rights the creator holds on the item.

    A share can never grant more than the creator was granted, so when
    re-sharing an item that was shared with us the requested bits are
    limited to the existing ones.  ``DEFAULT`` adopts the existing
    permissions as they are.
    """
    valid = desired
    if valid == SharePermission.DEFAULT:
        valid = existing
    if existing != SharePermission.DEFAULT:
        valid &= existing
    return valid


class ShareManager:
    """Creates and lists shares of one account.

    The manager keeps no registry of shares: every call hands back fresh
    objects which the caller may keep for as long as it likes.  Every
    operation ends in exactly one event on :attr:`event_bus`, and also
    returns its result (None on failure) for callers that simply await.

    Usage::

        manager = ShareManager(account, transport, folders)
        manager.event_bus.register(EventType.SHARE_CREATED, on_created)
        share = await manager.create_link_share("/Photos", name="holiday")
    """

    def __init__(
        self,
        account: Account,
        transport: ShareTransport,
        folders: FolderRegistry,
        *,
        event_bus: EventBus | None = None,
        config: SharingConfig | None = None,
    ) -> None:
        self._context = ShareContext(
            account=account,
            transport=transport,
            notifier=FolderNotifier(folders),
            event_bus=event_bus or EventBus(),
            config=config or SharingConfig(),
        )
        self._parser = ShareParser(self._context)

    @property
    def account(self) -> Account:
        return self._context.account

    @property
    def event_bus(self) -> EventBus:
        return self._context.event_bus

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_link_share(
        self,
        path: str,
        name: str = "",
        password: str = "",
    ) -> LinkShare | None:
        """Create a public link for *path*."""
        result = await self._context.new_job().create_link_share(path, name, password)
        if isinstance(result, JobFailure):
            if result.status_code == PASSWORD_REQUIRED_STATUS:
                await self._password_required(path, result.message)
            else:
                await self._server_error(path, result.status_code, result.message)
            return None

        code, message = get_json_return_code(result.reply)
        if code == PASSWORD_REQUIRED_STATUS:
            await self._password_required(path, message)
            return None

        share = await self._parse_created(path, result.data, self._parser.parse_link_share)
        if share is None:
            return None
        await self._created(share)
        return share

    async def create_share(
        self,
        path: str,
        share_type: ShareType,
        share_with: str,
        desired_permissions: SharePermission = SharePermission.DEFAULT,
    ) -> Share | None:
        """Share *path* with a user, group or other recipient.

        First looks up whether *path* was itself shared with us, and limits
        the requested permissions to what that share allows.  The creation
        request is only sent once that lookup succeeded.
        """
        lookup = await self._context.new_job().get_shared_with_me()
        if isinstance(lookup, JobFailure):
            await self._server_error(path, lookup.status_code, lookup.message)
            return None

        try:
            existing = self._existing_permissions(path, lookup.data)
        except ShareParseError as exc:
            await self._parse_error(path, exc)
            return None

        permissions = effective_permissions(desired_permissions, existing)
        logger.debug(
            "Creating %s share of %s for %s with permissions %d",
            share_type.name,
            path,
            share_with,
            permissions,
        )

        result = await self._context.new_job().create_share(
            path, share_type, share_with, permissions
        )
        if isinstance(result, JobFailure):
            await self._server_error(path, result.status_code, result.message)
            return None

        share = await self._parse_created(path, result.data, self._parser.parse_share)
        if share is None:
            return None
        await self._created(share)
        return share

    async def fetch_shares(self, path: str) -> list[Share] | None:
        """List the shares on *path*, in server order."""
        result = await self._context.new_job().get_shares(path)
        if isinstance(result, JobFailure):
            await self._server_error(path, result.status_code, result.message)
            return None

        try:
            records = _records(result.data)
            logger.debug("%s Fetched %d shares", self.account.server_version, len(records))
            shares = [self._parser.parse(_record(data)) for data in records]
        except ShareParseError as exc:
            await self._parse_error(path, exc)
            return None

        logger.debug("Sending %d shares", len(shares))
        await self._context.emit(
            ShareEvent(event_type=EventType.SHARES_FETCHED, shares=tuple(shares), path=path)
        )
        return shares

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def parse_link_share(self, data: dict[str, Any]) -> LinkShare:
        return self._parser.parse_link_share(data)

    def parse_share(self, data: dict[str, Any]) -> Share:
        return self._parser.parse_share(data)

    @staticmethod
    def _existing_permissions(path: str, data: Any) -> SharePermission:
        """Permissions of the share through which *path* reached us, if any."""
        existing = SharePermission.DEFAULT
        for element in _records(data):
            if _record(element).get("file_target") == path:
                existing = parse_permissions(element.get("permissions"))
        return existing

    async def _parse_created(
        self, path: str, data: Any, parse: Callable[[dict[str, Any]], _S]
    ) -> _S | None:
        try:
            return parse(_record(data))
        except ShareParseError as exc:
            await self._parse_error(path, exc)
            return None

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    async def _created(self, share: Share) -> None:
        await self._context.emit(
            ShareEvent(event_type=EventType.SHARE_CREATED, share=share, path=share.path)
        )
        await self._context.update_folders(share.path)

    async def _password_required(self, path: str, message: str) -> None:
        await self._context.emit(
            ShareEvent(
                event_type=EventType.LINK_SHARE_REQUIRES_PASSWORD,
                path=path,
                status_code=PASSWORD_REQUIRED_STATUS,
                message=message,
            )
        )

    async def _server_error(self, path: str, status_code: int, message: str) -> None:
        logger.warning("Share request on %s failed: %s %s", path, status_code, message)
        await self._context.emit(
            ShareEvent(
                event_type=EventType.SERVER_ERROR,
                path=path,
                status_code=status_code,
                message=message,
            )
        )

    async def _parse_error(self, path: str, exc: ShareParseError) -> None:
        logger.warning("Could not parse share reply for %s: %s", path, exc)
        await self._context.emit(
            ShareEvent(event_type=EventType.SHARE_PARSE_ERROR, path=path, message=str(exc))
        )


def _record(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise ShareParseError(f"Expected a share record, got {type(data).__name__}")
    return data


def _records(data: Any) -> list[Any]:
    """The records of a reply whose ``data`` is either one record or a list."""
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise ShareParseError(f"Expected share records, got {type(data).__name__}")
    return data
