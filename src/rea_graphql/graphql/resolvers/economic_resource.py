"""
Resolvers for EconomicResource fields
"""

from ...capabilities import Capability
from ...records import ACTION, ECONOMIC_RESOURCE, PROCESS_SPECIFICATION, RESOURCE_SPECIFICATION, UNIT
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .agent import agent_field
from .base import indexed_first, indexed_list, linked, query_index, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    query_resources = query_index(binder, ECONOMIC_RESOURCE)

    # A resource is contained in whichever resource lists it under `contains`
    base = {
        "containedIn": indexed_first(query_resources, "contains"),
        "contains": indexed_list(query_resources, "containedIn"),
    }

    def knowledge_fields():
        return {
            "conformsTo": linked(read_record(binder, RESOURCE_SPECIFICATION), "conformsTo"),
            "stage": linked(read_record(binder, PROCESS_SPECIFICATION), "stage"),
            "state": linked(read_record(binder, ACTION), "state"),
        }

    def measurement_fields():
        return {"unitOfEffort": linked(read_record(binder, UNIT), "unitOfEffort")}

    def agent_fields():
        return {"primaryAccountable": agent_field(binder, "primaryAccountable")}

    return compose(
        capabilities,
        base,
        [
            (Capability.KNOWLEDGE, knowledge_fields),
            (Capability.MEASUREMENT, measurement_fields),
            (Capability.AGENT, agent_fields),
        ],
    )
