"""
Capability-conditional composition of field resolver sets
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

from ..capabilities import Capability

Resolver = Callable[..., Awaitable[Any]]
ResolverMap = Mapping[str, Resolver]
Fragment = tuple[Capability, Callable[[], Mapping[str, Resolver]]]


def compose(
    capabilities: frozenset[Capability],
    base: Mapping[str, Resolver],
    fragments: Sequence[Fragment] = (),
) -> ResolverMap:
    """Merge a base resolver mapping with the fragments of enabled modules.

    Each fragment is a (capability, builder) pair. Builders of disabled
    modules are never invoked, so nothing is bound against a module the
    deployment lacks and its fields are absent from the result.

    Raises:
        ValueError: If two fragments (or a fragment and the base) define the same field
    """
    merged = dict(base)
    for capability, build in fragments:
        if capability not in capabilities:
            continue
        fragment = build()
        overlap = merged.keys() & fragment.keys()
        if overlap:
            raise ValueError(
                f"Fields {sorted(overlap)} from the '{capability.value}' fragment are already defined"
            )
        merged.update(fragment)
    return MappingProxyType(merged)
