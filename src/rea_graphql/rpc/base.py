"""Remote call transport interface and call descriptors."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

from ..capabilities import Capability

RemoteCall = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class RemoteCallDescriptor:
    """Addresses one backend operation: (capability module, zome, function)."""

    capability: Capability
    zome: str
    fn: str

    @property
    def cell(self) -> str:
        return self.capability.cell

    def __str__(self) -> str:
        return f"{self.cell}/{self.zome}/{self.fn}"


class RemoteCallTransport(Protocol):
    """Delivers a single request to a backend cell and returns its decoded result."""

    async def call(self, cell: str, zome: str, fn: str, payload: Any) -> Any:
        """
        Perform one RPC.

        Args:
            cell: Deployed address of the target cell
            zome: Zome (record type) name within the cell
            fn: Exposed zome function name
            payload: JSON-serializable request body

        Returns:
            The decoded result

        Raises:
            RemoteCallError: If the backend reports an error or the response cannot be decoded
        """
        ...

    async def aclose(self) -> None:
        """Release any connections held by the transport."""
        ...
