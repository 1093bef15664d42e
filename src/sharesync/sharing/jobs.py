"""ShareJob: one outstanding OCS request with exactly one outcome."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sharesync.config import SharingConfig
from sharesync.exceptions import JobAlreadyIssuedError, TransportError
from sharesync.permissions import SharePermission, ShareType
from sharesync.utils import format_share_date

from .types import JobFailure, JobKind, JobSuccess, OcsRequest, get_json_return_code

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import date

    from .protocol import ShareTransport
    from .types import JobResult

logger = logging.getLogger(__name__)


class ShareJob:
    """Builds and sends a single share request.

    A job is single-use: the first call to one of the request methods
    issues the request, any later call raises ``JobAlreadyIssuedError``.
    The returned result is either a ``JobSuccess`` or a ``JobFailure``,
    never both and never neither.  If the transport never answers, the
    awaiting coroutine stays pending; timeouts belong to the transport.
    """

    def __init__(
        self,
        transport: ShareTransport,
        config: SharingConfig | None = None,
    ) -> None:
        self._transport = transport
        self._config = config or SharingConfig()
        self._pass_status_codes: set[int] = set()
        self._request: OcsRequest | None = None
        self._result: JobResult | None = None

    @property
    def request(self) -> OcsRequest | None:
        """The issued request, None before issuance."""
        return self._request

    @property
    def result(self) -> JobResult | None:
        """The outcome, None while the request is in flight."""
        return self._result

    def pass_status_codes(self, codes: Iterable[int]) -> None:
        """Treat these envelope status codes as success, leaving them to the caller."""
        self._pass_status_codes.update(codes)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def get_shares(self, path: str = "") -> JobResult:
        params: dict[str, str] = {}
        if path:
            params["path"] = path
        if self._config.fetch_reshares:
            params["reshares"] = "true"
        return await self._run(JobKind.GET_SHARES, "GET", self._config.share_path(), params)

    async def get_shared_with_me(self) -> JobResult:
        return await self._run(
            JobKind.GET_SHARED_WITH_ME,
            "GET",
            self._config.share_path(),
            {"shared_with_me": "true"},
        )

    async def create_link_share(self, path: str, name: str = "", password: str = "") -> JobResult:
        params = {"path": path, "shareType": str(int(ShareType.LINK))}
        if name:
            params["name"] = name
        if password:
            params["password"] = password
        # Old servers signal an enforced password with 403 inside a 200 reply.
        self.pass_status_codes({403})
        return await self._run(JobKind.CREATE_LINK_SHARE, "POST", self._config.share_path(), params)

    async def create_share(
        self,
        path: str,
        share_type: ShareType,
        share_with: str,
        permissions: SharePermission = SharePermission.DEFAULT,
    ) -> JobResult:
        params = {
            "path": path,
            "shareType": str(int(share_type)),
            "shareWith": share_with,
        }
        if permissions != SharePermission.DEFAULT:
            params["permissions"] = str(int(permissions))
        return await self._run(JobKind.CREATE_SHARE, "POST", self._config.share_path(), params)

    async def delete_share(self, share_id: str) -> JobResult:
        return await self._run(
            JobKind.DELETE_SHARE, "DELETE", self._config.share_path(share_id), {}
        )

    async def set_permissions(self, share_id: str, permissions: SharePermission) -> JobResult:
        return await self._run(
            JobKind.SET_PERMISSIONS,
            "PUT",
            self._config.share_path(share_id),
            {"permissions": str(int(permissions))},
            value=permissions,
        )

    async def set_name(self, share_id: str, name: str) -> JobResult:
        return await self._run(
            JobKind.SET_NAME, "PUT", self._config.share_path(share_id), {"name": name}, value=name
        )

    async def set_password(self, share_id: str, password: str) -> JobResult:
        return await self._run(
            JobKind.SET_PASSWORD,
            "PUT",
            self._config.share_path(share_id),
            {"password": password},
            value=password,
        )

    async def set_expire_date(self, share_id: str, expire_date: date | None) -> JobResult:
        return await self._run(
            JobKind.SET_EXPIRE_DATE,
            "PUT",
            self._config.share_path(share_id),
            {"expireDate": format_share_date(expire_date)},
            value=expire_date,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    async def _run(
        self,
        kind: JobKind,
        verb: str,
        path: str,
        params: dict[str, str],
        *,
        value: Any = None,
    ) -> JobResult:
        if self._request is not None:
            raise JobAlreadyIssuedError(
                f"Job already issued {self._request.kind.value}; create a new job for {kind.value}"
            )
        self._request = OcsRequest(kind=kind, verb=verb, path=path, params=params)
        logger.debug("Issuing %s %s %s", kind.value, verb, path)

        try:
            reply = await self._transport.send(self._request)
        except TransportError as exc:
            self._result = JobFailure(exc.status_code, exc.message)
            return self._result

        self._result = self._interpret(reply, value)
        return self._result

    def _interpret(self, reply: Any, value: Any) -> JobResult:
        code, message = get_json_return_code(reply)
        if code is None:
            return JobFailure(0, "Reply is not a valid OCS envelope")
        if code in self._config.success_status_codes or code in self._pass_status_codes:
            return JobSuccess(reply=reply, value=value)
        logger.warning("OCS request failed with status %s: %s", code, message)
        return JobFailure(code, message)
