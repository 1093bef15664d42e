"""ShareTransport protocol: the only way share jobs reach the network."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .types import OcsRequest


@runtime_checkable
class ShareTransport(Protocol):
    """Sends OCS requests for one account.

    Implementations own connection handling, authentication and timeouts.
    """

    async def send(self, request: OcsRequest) -> dict[str, Any]:
        """Perform *request* and return the decoded JSON envelope.

        Must raise ``TransportError`` when no envelope could be obtained
        (HTTP error status, connection failure).
        """
        ...
