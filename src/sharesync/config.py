"""SharingConfig: tunables of the OCS sharing client."""

from __future__ import annotations

from dataclasses import dataclass, field

OCS_SHARES_PATH = "ocs/v1.php/apps/files_sharing/api/v1/shares"


@dataclass(frozen=True)
class SharingConfig:
    """Configuration for share jobs."""

    ocs_api_path: str = OCS_SHARES_PATH
    """Server-relative path of the shares endpoint."""

    success_status_codes: frozenset[int] = field(default_factory=lambda: frozenset({100, 200}))
    """OCS envelope status codes that count as success (v1 uses 100, v2 uses 200)."""

    fetch_reshares: bool = True
    """Include reshares of the path when fetching shares."""

    def share_path(self, share_id: str | None = None) -> str:
        """Endpoint path for the collection, or for a single share."""
        base = self.ocs_api_path.strip("/")
        if share_id is None:
            return base
        return f"{base}/{share_id}"
