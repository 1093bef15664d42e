"""Account: read-only connection context shared by all share operations."""

from __future__ import annotations

import re
from dataclasses import dataclass

_VERSION_RE = re.compile(r"^\s*(\d+)(?:\.(\d+))?(?:\.(\d+))?")


def make_server_version(major: int, minor: int, patch: int) -> int:
    """Pack a version triple into a single comparable integer."""
    return (major << 16) | (minor << 8) | patch


def parse_server_version(version: str) -> tuple[int, int, int]:
    """Parse ``"8.2.1"``-style strings (extra components are ignored).

    Unparseable strings yield ``(0, 0, 0)``.

    Examples:
        parse_server_version("10.0.3.3") -> (10, 0, 3)
        parse_server_version("8") -> (8, 0, 0)
    """
    match = _VERSION_RE.match(version or "")
    if match is None:
        return 0, 0, 0
    major, minor, patch = (int(part) if part else 0 for part in match.groups())
    return major, minor, patch


@dataclass(frozen=True)
class Account:
    """Connection details of one server account.

    Attributes:
        url: Base URL of the server, e.g. ``"https://cloud.example.com/"``.
        server_version: Version string reported by the server's status endpoint.
        user: Login name, used to tell accounts apart.
    """

    url: str
    server_version: str = ""
    user: str = ""

    @property
    def server_version_tuple(self) -> tuple[int, int, int]:
        return parse_server_version(self.server_version)

    @property
    def server_version_int(self) -> int:
        return make_server_version(*self.server_version_tuple)

    def server_version_at_least(self, major: int, minor: int = 0, patch: int = 0) -> bool:
        """True when the server version is >= the given triple."""
        return self.server_version_int >= make_server_version(major, minor, patch)
