"""Binds (capability, zome, function) descriptors to callables over a transport."""

from typing import Any

from ..capabilities import Capability
from ..deployment import DeploymentConfig
from ..errors import CapabilityDisabledError, RemoteCallError
from ..logging import get_logger
from .base import RemoteCall, RemoteCallDescriptor, RemoteCallTransport

logger = get_logger(__name__)


class RemoteCallBinder:
    """
    Produces one callable per remote operation for a fixed deployment.

    Binding is pure construction: nothing is sent until the returned callable
    is awaited. Callables are cached per descriptor for the binder's lifetime.
    """

    def __init__(self, config: DeploymentConfig, transport: RemoteCallTransport | None):
        self.config = config
        self._transport = transport
        self._bound: dict[RemoteCallDescriptor, RemoteCall] = {}

    @property
    def capabilities(self) -> frozenset[Capability]:
        return self.config.capabilities

    def bind(self, capability: Capability, zome: str, fn: str) -> RemoteCall:
        """
        Bind a remote operation.

        Args:
            capability: Capability module owning the operation
            zome: Zome name within the module's cell
            fn: Zome function name

        Returns:
            Async callable taking the request payload and returning the decoded result

        Raises:
            CapabilityDisabledError: If the module is not enabled for this deployment
        """
        if capability not in self.config.capabilities:
            raise CapabilityDisabledError(capability.value)

        descriptor = RemoteCallDescriptor(capability, zome, fn)
        bound = self._bound.get(descriptor)
        if bound is None:
            bound = self._make_call(descriptor)
            self._bound[descriptor] = bound
        return bound

    def _make_call(self, descriptor: RemoteCallDescriptor) -> RemoteCall:
        address = self.config.cell_address(descriptor.cell)

        async def call(payload: Any = None) -> Any:
            if self._transport is None:
                raise RemoteCallError("no transport configured", descriptor)

            logger.debug("Remote call", call=str(descriptor))
            try:
                return await self._transport.call(address, descriptor.zome, descriptor.fn, payload)
            except RemoteCallError as e:
                logger.warning("Remote call failed", call=str(descriptor), error=str(e))
                if e.descriptor is None:
                    raise RemoteCallError(str(e), descriptor, e.payload) from e
                raise

        call.__qualname__ = f"remote_call[{descriptor}]"
        return call
