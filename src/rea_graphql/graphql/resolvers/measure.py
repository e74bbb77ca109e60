"""
Resolvers for Measure fields (quantities embedded in other records)
"""

from ...capabilities import Capability
from ...records import UNIT
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .base import linked, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    def measurement_fields():
        return {"hasUnit": linked(read_record(binder, UNIT), "hasUnit")}

    return compose(capabilities, {}, [(Capability.MEASUREMENT, measurement_fields)])
