"""Share type and permission enums."""

from __future__ import annotations

from enum import IntEnum, IntFlag


class ShareType(IntEnum):
    """Integer share type codes used by the OCS sharing API."""

    USER = 0
    GROUP = 1
    LINK = 3
    EMAIL = 4
    REMOTE = 6


class SharePermission(IntFlag):
    """Permission bitmask of a share.

    ``DEFAULT`` is a sentinel, not a server bit: it means "no explicit
    permissions requested" and is never sent over the wire.
    """

    NONE = 0
    READ = 1
    UPDATE = 2
    CREATE = 4
    DELETE = 8
    SHARE = 16
    ALL = READ | UPDATE | CREATE | DELETE | SHARE
    DEFAULT = 1 << 30
