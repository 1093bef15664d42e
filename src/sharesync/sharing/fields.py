"""Decoders for the loosely-typed fields of OCS share records."""

from __future__ import annotations

from typing import Any

from sharesync.exceptions import ShareParseError
from sharesync.permissions import SharePermission, ShareType


def parse_share_id(value: Any) -> str:
    """Normalize a share id to a string.

    Older servers send integers, newer ones strings; both must give the
    same identity.

    Examples:
        parse_share_id(42) -> "42"
        parse_share_id(42.0) -> "42"
        parse_share_id("42") -> "42"
    """
    if isinstance(value, bool):
        raise ShareParseError(f"Invalid share id: {value!r}")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str) and value:
        return value
    raise ShareParseError(f"Invalid share id: {value!r}")


def _parse_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise ShareParseError(f"Invalid {field}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise ShareParseError(f"Invalid {field}: {value!r}")


def parse_share_type(value: Any) -> ShareType:
    """Decode ``share_type``; unknown codes are rejected."""
    code = _parse_int(value, "share_type")
    try:
        return ShareType(code)
    except ValueError:
        raise ShareParseError(f"Unknown share_type: {code}") from None


def parse_permissions(value: Any) -> SharePermission:
    """Decode ``permissions``; bits outside the known mask are rejected."""
    code = _parse_int(value, "permissions")
    if code < 0 or code & ~int(SharePermission.ALL):
        raise ShareParseError(f"Permissions out of range: {code}")
    return SharePermission(code)


def str_field(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""
