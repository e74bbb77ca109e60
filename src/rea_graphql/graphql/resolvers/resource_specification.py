"""
Resolvers for ResourceSpecification fields
"""

from typing import Any

from ...capabilities import Capability
from ...records import ECONOMIC_RESOURCE, UNIT, Record
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from ..connection import parse_connection
from .base import linked, query_index, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    def measurement_fields():
        return {"defaultUnitOfEffort": linked(read_record(binder, UNIT), "defaultUnitOfEffort")}

    def observation_fields():
        query_resources = query_index(binder, ECONOMIC_RESOURCE)

        async def conforming_resources(record: Record, **_: Any) -> Any:
            # Declared as a connection; edges keep the index order (most recently linked first)
            result = await query_resources(conformsTo=record["id"])
            parse_connection(result)
            return result

        return {"conformingResources": conforming_resources}

    return compose(
        capabilities,
        {},
        [
            (Capability.MEASUREMENT, measurement_fields),
            (Capability.OBSERVATION, observation_fields),
        ],
    )
