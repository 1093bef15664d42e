"""ShareParser: typed shares from loosely-typed OCS share records."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sharesync.permissions import ShareType
from sharesync.utils import concat_url_path, parse_share_date

from .fields import parse_permissions, parse_share_id, parse_share_type, str_field
from .shares import LinkShare, Share, Sharee

if TYPE_CHECKING:
    from .context import ShareContext

logger = logging.getLogger(__name__)

__all__ = ["ShareParser", "parse_permissions", "parse_share_id", "parse_share_type"]


class ShareParser:
    """Converts share records into ``Share`` / ``LinkShare`` objects.

    Parsed shares are bound to *context*, so their mutators issue requests
    through the same transport and publish on the same event bus.
    """

    def __init__(self, context: ShareContext) -> None:
        self._context = context

    def parse(self, data: dict[str, Any]) -> Share:
        """Dispatch on ``share_type``."""
        if parse_share_type(data.get("share_type")) == ShareType.LINK:
            return self.parse_link_share(data)
        return self.parse_share(data)

    def parse_link_share(self, data: dict[str, Any]) -> LinkShare:
        token = str_field(data, "token")
        expiration = data.get("expiration")
        expire_date = parse_share_date(expiration)
        if expire_date is None and expiration is not None:
            logger.debug("Ignoring unparseable expiration %r", expiration)

        return LinkShare(
            self._context,
            id=parse_share_id(data.get("id")),
            path=str_field(data, "path"),
            name=str_field(data, "name"),
            token=token,
            permissions=parse_permissions(data.get("permissions")),
            # The API reuses share_with to signal a password on link shares.
            password_set=isinstance(data.get("share_with"), str),
            url=self.link_url(data, token),
            expire_date=expire_date,
        )

    def parse_share(self, data: dict[str, Any]) -> Share:
        share_type = parse_share_type(data.get("share_type"))
        sharee = Sharee(
            id=str_field(data, "share_with"),
            display_name=str_field(data, "share_with_displayname"),
            type=share_type,
        )
        return Share(
            self._context,
            id=parse_share_id(data.get("id")),
            path=str_field(data, "path"),
            share_type=share_type,
            permissions=parse_permissions(data.get("permissions")),
            share_with=sharee,
        )

    def link_url(self, data: dict[str, Any], token: str) -> str:
        """Public URL of a link share.

        Servers from 8.2 on always send ``url``.  Before that, 8.0 and
        8.1 use ``index.php/s/<token>`` and older servers the
        ``public.php`` query form.
        """
        account = self._context.account
        if "url" in data:
            return str_field(data, "url")
        if account.server_version_at_least(8, 0, 0):
            return concat_url_path(account.url, "index.php/s/" + token)
        return concat_url_path(account.url, "public.php", [("service", "files"), ("t", token)])
