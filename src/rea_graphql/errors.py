"""Exception taxonomy for resolver construction and remote calls."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .rpc.base import RemoteCallDescriptor


class ReaGraphQLError(Exception):
    """Base exception for the gateway."""

    pass


class CapabilityDisabledError(ReaGraphQLError):
    """A resolver was bound against a capability module the deployment does not enable.

    Raised at construction time only. Conditional composition of resolver
    sets is expected to prevent it from ever being raised while serving.
    """

    def __init__(self, capability: str, message: str | None = None):
        self.capability = capability
        super().__init__(message or f"Capability module '{capability}' is not enabled")


class RemoteCallError(ReaGraphQLError):
    """A backend RPC failed or returned data that could not be decoded."""

    def __init__(
        self,
        message: str,
        descriptor: RemoteCallDescriptor | None = None,
        payload: Any = None,
    ):
        self.descriptor = descriptor
        self.payload = payload
        if descriptor is not None:
            message = f"{descriptor}: {message}"
        super().__init__(message)


class MissingRelationError(ReaGraphQLError):
    """A non-nullable to-one relationship resolved against an empty index result."""

    pass


class UnresolvedVariantError(ReaGraphQLError):
    """A value reached an interface or union field without a type discriminant."""

    pass
