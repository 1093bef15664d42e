"""URL and date helpers shared by the parser and the job layer."""

from __future__ import annotations

import posixpath
from datetime import date, datetime
from urllib.parse import urlencode, urlsplit, urlunsplit

# Servers send expirations as a date with a forced midnight time component.
SHARE_DATE_FORMAT = "%Y-%m-%d 00:00:00"

# Format the API expects when setting an expiration.
SHARE_DATE_PARAM_FORMAT = "%Y-%m-%d"


# =============================================================================
# URL Utilities
# =============================================================================


def concat_url_path(
    base_url: str,
    path: str,
    query: list[tuple[str, str]] | None = None,
) -> str:
    """Append *path* to the path of *base_url*, with exactly one slash between.

    Examples:
        concat_url_path("https://x/", "index.php/s/abc") -> "https://x/index.php/s/abc"
        concat_url_path("https://x/oc", "/public.php", [("t", "abc")])
            -> "https://x/oc/public.php?t=abc"
    """
    parts = urlsplit(base_url)
    joined = parts.path.rstrip("/") + "/" + path.lstrip("/")
    query_string = urlencode(query) if query else parts.query
    return urlunsplit((parts.scheme, parts.netloc, joined, query_string, ""))


def append_url_path(url: str, suffix: str) -> str:
    """Append *suffix* to the path component of *url*, keeping query and fragment.

    Examples:
        append_url_path("https://x/index.php/s/abc", "/download")
            -> "https://x/index.php/s/abc/download"
    """
    parts = urlsplit(url)
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path + suffix, parts.query, parts.fragment)
    )


def relative_to_folder(path: str, folder_path: str) -> str | None:
    """Return *path* relative to *folder_path*, or None if it is outside it.

    The prefix must end on a path boundary: ``/a/b`` contains ``/a/b`` and
    ``/a/b/c`` but not ``/a/b2``.  A single leading slash is stripped from
    the result, so the folder root itself maps to ``""``.
    """
    if not path.startswith(folder_path):
        return None
    if not (
        path == folder_path
        or folder_path.endswith("/")
        or path[len(folder_path)] == "/"
    ):
        return None
    relative = path[len(folder_path):]
    if relative.startswith("/"):
        relative = relative[1:]
    return relative


def parent_paths(path: str) -> list[str]:
    """List the relative ancestors of *path*, nearest first, ending with ``""``.

    Examples:
        parent_paths("a/b/c") -> ["a/b", "a", ""]
        parent_paths("") -> []
    """
    parents: list[str] = []
    current = path
    while current:
        current = posixpath.dirname(current)
        parents.append(current)
    return parents


# =============================================================================
# Date Utilities
# =============================================================================


def parse_share_date(value: object) -> date | None:
    """Parse an ``expiration`` value; anything unparseable means no expiration."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, SHARE_DATE_FORMAT).date()
    except ValueError:
        return None


def format_share_date(value: date | None) -> str:
    """Format an expiration for a request; ``None`` clears it server-side."""
    if value is None:
        return ""
    return value.strftime(SHARE_DATE_PARAM_FORMAT)
