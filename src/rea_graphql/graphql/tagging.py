"""
Explicit type discriminants for interface and union typed fields
"""

import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ..errors import UnresolvedVariantError

TypeName = str | Callable[[Any], str]


@dataclass(frozen=True)
class TaggedValue:
    """A resolved record together with the concrete graph type it represents."""

    type_name: str
    payload: Any


def _name_for(type_name: TypeName, value: Any) -> str:
    return type_name(value) if callable(type_name) else type_name


def tag(type_name: TypeName, resolver: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """Wrap a resolver so its result carries a type discriminant.

    ``type_name`` is either the concrete type name or a function deriving it
    from the resolved record. ``None`` results pass through untagged, and
    failures propagate unchanged.
    """

    @functools.wraps(resolver)
    async def tagged(*args: Any, **kwargs: Any) -> TaggedValue | None:
        value = await resolver(*args, **kwargs)
        if value is None:
            return None
        return TaggedValue(_name_for(type_name, value), value)

    return tagged


def tag_nodes(type_name: TypeName, resolver: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """Like ``tag``, for resolvers returning a connection of polymorphic nodes."""

    @functools.wraps(resolver)
    async def tagged(*args: Any, **kwargs: Any) -> Any:
        connection = await resolver(*args, **kwargs)
        edges = [
            {**edge, "node": TaggedValue(_name_for(type_name, edge["node"]), edge["node"])}
            for edge in connection["edges"]
        ]
        return {**connection, "edges": edges}

    return tagged


def untag(value: Any) -> Any:
    """The record behind a possibly tagged value."""
    return value.payload if isinstance(value, TaggedValue) else value


def resolve_variant(value: Any, *_: Any) -> str:
    """Concrete type name for an interface or union value.

    Usable directly as a graphql-core ``resolve_type`` callback.

    Raises:
        UnresolvedVariantError: If the value was never tagged
    """
    if isinstance(value, TaggedValue):
        return value.type_name
    raise UnresolvedVariantError(
        f"Value of type {type(value).__name__} reached a polymorphic field without a type tag"
    )
