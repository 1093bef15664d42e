"""Request and result types for share jobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JobKind(Enum):
    """Every request the share layer can issue."""

    GET_SHARES = "get_shares"
    GET_SHARED_WITH_ME = "get_shared_with_me"
    CREATE_LINK_SHARE = "create_link_share"
    CREATE_SHARE = "create_share"
    DELETE_SHARE = "delete_share"
    SET_PERMISSIONS = "set_permissions"
    SET_NAME = "set_name"
    SET_PASSWORD = "set_password"
    SET_EXPIRE_DATE = "set_expire_date"


@dataclass(frozen=True)
class OcsRequest:
    """A single OCS call, as handed to the transport."""

    kind: JobKind
    verb: str
    path: str
    params: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class JobSuccess:
    """Successful outcome.

    Attributes:
        reply: Decoded OCS envelope.
        value: Out-of-band value the caller needs on success, typically the
            value that was sent (new permissions, name, password, date).
    """

    reply: dict[str, Any]
    value: Any = None

    @property
    def data(self) -> Any:
        """The envelope's ``ocs.data`` member, or None."""
        ocs = self.reply.get("ocs")
        if not isinstance(ocs, dict):
            return None
        return ocs.get("data")

    @property
    def status_code(self) -> int | None:
        return get_json_return_code(self.reply)[0]


@dataclass(frozen=True)
class JobFailure:
    """Failed outcome with the server's status and message."""

    status_code: int
    message: str = ""


JobResult = JobSuccess | JobFailure


def get_json_return_code(reply: Any) -> tuple[int | None, str]:
    """Extract ``(statuscode, message)`` from an OCS envelope's ``meta`` block."""
    if not isinstance(reply, dict):
        return None, ""
    ocs = reply.get("ocs")
    meta = ocs.get("meta") if isinstance(ocs, dict) else None
    if not isinstance(meta, dict):
        return None, ""
    code = meta.get("statuscode")
    try:
        code = int(code) if code is not None else None
    except (TypeError, ValueError):
        code = None
    message = meta.get("message")
    return code, message if isinstance(message, str) else ""
