"""Share, LinkShare and Sharee entities.

Mutators never change local state up front.  Each one issues a single
job and applies the result only once the server confirmed it, then
publishes the outcome on the context's event bus.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sharesync.events import EventType, ShareEvent
from sharesync.exceptions import ShareParseError
from sharesync.permissions import SharePermission, ShareType
from sharesync.utils import append_url_path, parse_share_date

from .fields import parse_permissions
from .types import JobFailure

if TYPE_CHECKING:
    from datetime import date

    from sharesync.account import Account

    from .context import ShareContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sharee:
    """Recipient of a user, group, email or federated share."""

    id: str
    display_name: str
    type: ShareType

    def format(self) -> str:
        """Human readable label, e.g. ``"Alice (alice)"``."""
        if self.display_name and self.display_name != self.id:
            return f"{self.display_name} ({self.id})"
        return self.id


class Share:
    """A server-side grant of access to a path."""

    def __init__(
        self,
        context: ShareContext,
        id: str,
        path: str,
        share_type: ShareType,
        permissions: SharePermission = SharePermission.NONE,
        share_with: Sharee | None = None,
    ) -> None:
        self._context = context
        self._id = id
        self._path = path
        self._share_type = share_type
        self._permissions = permissions
        self._share_with = share_with

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id!r}, path={self._path!r}, "
            f"type={self._share_type.name})"
        )

    @property
    def account(self) -> Account:
        return self._context.account

    @property
    def id(self) -> str:
        return self._id

    @property
    def path(self) -> str:
        return self._path

    @property
    def share_type(self) -> ShareType:
        return self._share_type

    @property
    def permissions(self) -> SharePermission:
        return self._permissions

    @property
    def share_with(self) -> Sharee | None:
        return self._share_with

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def set_permissions(self, permissions: SharePermission) -> bool:
        """Ask the server to change the permissions of this share."""
        result = await self._context.new_job().set_permissions(self._id, permissions)
        if isinstance(result, JobFailure):
            await self._server_error(result)
            return False
        # REST-style servers echo the stored value, which may be clamped.
        data = result.data
        if isinstance(data, dict) and "permissions" in data:
            try:
                self._permissions = parse_permissions(data["permissions"])
            except ShareParseError as exc:
                await self._parse_error(exc)
                return False
        else:
            self._permissions = SharePermission(result.value)
        await self._emit(EventType.PERMISSIONS_SET)
        return True

    async def delete_share(self) -> bool:
        """Delete this share on the server."""
        result = await self._context.new_job().delete_share(self._id)
        if isinstance(result, JobFailure):
            await self._server_error(result)
            return False
        await self._emit(EventType.SHARE_DELETED)
        await self._context.update_folders(self._path)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _emit(self, event_type: EventType) -> None:
        await self._context.emit(ShareEvent(event_type=event_type, share=self, path=self._path))

    async def _server_error(
        self,
        failure: JobFailure,
        event_type: EventType = EventType.SERVER_ERROR,
    ) -> None:
        logger.warning(
            "Share %s on %s failed: %s %s",
            self._id,
            self._path,
            failure.status_code,
            failure.message,
        )
        await self._context.emit(
            ShareEvent(
                event_type=event_type,
                share=self,
                path=self._path,
                status_code=failure.status_code,
                message=failure.message,
            )
        )

    async def _parse_error(self, exc: ShareParseError) -> None:
        logger.warning("Share %s on %s: unusable reply: %s", self._id, self._path, exc)
        await self._context.emit(
            ShareEvent(
                event_type=EventType.SHARE_PARSE_ERROR,
                share=self,
                path=self._path,
                message=str(exc),
            )
        )


class LinkShare(Share):
    """A public link share, optionally password protected and time limited."""

    def __init__(
        self,
        context: ShareContext,
        id: str,
        path: str,
        name: str,
        token: str,
        permissions: SharePermission,
        password_set: bool,
        url: str,
        expire_date: date | None = None,
    ) -> None:
        super().__init__(context, id, path, ShareType.LINK, permissions)
        self._name = name
        self._token = token
        self._password_set = password_set
        self._url = url
        self._expire_date = expire_date

    @property
    def name(self) -> str:
        return self._name

    @property
    def token(self) -> str:
        return self._token

    @property
    def link(self) -> str:
        return self._url

    @property
    def direct_download_link(self) -> str:
        return append_url_path(self._url, "/download")

    @property
    def password_set(self) -> bool:
        """Whether a password protects the link; the password itself is never returned."""
        return self._password_set

    @property
    def expire_date(self) -> date | None:
        return self._expire_date

    @property
    def public_upload(self) -> bool:
        return bool(self._permissions & SharePermission.CREATE)

    @property
    def show_file_listing(self) -> bool:
        return bool(self._permissions & SharePermission.READ)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def set_name(self, name: str) -> bool:
        result = await self._context.new_job().set_name(self._id, name)
        if isinstance(result, JobFailure):
            await self._server_error(result)
            return False
        data = result.data
        if isinstance(data, dict) and isinstance(data.get("name"), str):
            self._name = data["name"]
        else:
            self._name = result.value
        await self._emit(EventType.NAME_SET)
        return True

    async def set_password(self, password: str) -> bool:
        """Set or, with an empty string, remove the link password."""
        result = await self._context.new_job().set_password(self._id, password)
        if isinstance(result, JobFailure):
            await self._server_error(result, EventType.PASSWORD_SET_ERROR)
            return False
        data = result.data
        if isinstance(data, dict) and "share_with" in data:
            self._password_set = isinstance(data["share_with"], str)
        else:
            self._password_set = bool(result.value)
        await self._emit(EventType.PASSWORD_SET)
        return True

    async def set_expire_date(self, expire_date: date | None) -> bool:
        """Set or, with None, remove the expiration date."""
        result = await self._context.new_job().set_expire_date(self._id, expire_date)
        if isinstance(result, JobFailure):
            await self._server_error(result)
            return False

        # REST-style servers echo the stored value; prefer it over the requested one.
        data = result.data
        if isinstance(data, dict) and isinstance(data.get("expiration"), str):
            self._expire_date = parse_share_date(data["expiration"])
        else:
            self._expire_date = result.value
        await self._emit(EventType.EXPIRE_DATE_SET)
        return True
