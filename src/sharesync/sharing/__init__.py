"""Sharing layer: share entities, OCS jobs, response parsing, manager."""

from sharesync.sharing.context import ShareContext
from sharesync.sharing.fields import parse_permissions, parse_share_id, parse_share_type
from sharesync.sharing.jobs import ShareJob
from sharesync.sharing.manager import ShareManager, effective_permissions
from sharesync.sharing.parser import ShareParser
from sharesync.sharing.protocol import ShareTransport
from sharesync.sharing.shares import LinkShare, Share, Sharee
from sharesync.sharing.types import (
    JobFailure,
    JobKind,
    JobResult,
    JobSuccess,
    OcsRequest,
    get_json_return_code,
)

__all__ = [
    "JobFailure",
    "JobKind",
    "JobResult",
    "JobSuccess",
    "LinkShare",
    "OcsRequest",
    "Share",
    "ShareContext",
    "ShareJob",
    "ShareManager",
    "ShareParser",
    "ShareTransport",
    "Sharee",
    "effective_permissions",
    "get_json_return_code",
    "parse_permissions",
    "parse_share_id",
    "parse_share_type",
]
