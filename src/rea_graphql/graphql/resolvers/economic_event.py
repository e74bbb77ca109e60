"""
Resolvers for EconomicEvent fields
"""

from typing import Any

from ...capabilities import Capability
from ...records import (
    ACTION,
    AGREEMENT,
    ECONOMIC_EVENT,
    ECONOMIC_RESOURCE,
    FULFILLMENT,
    PROCESS,
    RESOURCE_SPECIFICATION,
    SATISFACTION,
    Record,
)
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from ..connection import first
from .agent import agent_field
from .base import indexed_list, linked, query_index, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    query_processes = query_index(binder, PROCESS)
    read_resource = read_record(binder, ECONOMIC_RESOURCE)
    read_event = read_record(binder, ECONOMIC_EVENT)

    async def input_of(record: Record, **_: Any) -> Record | None:
        """Process consuming this event, if any."""
        return first(await query_processes(inputs=record["id"]))

    async def output_of(record: Record, **_: Any) -> Record | None:
        """Process producing this event, if any."""
        return first(await query_processes(outputs=record["id"]))

    base = {
        "inputOf": input_of,
        "outputOf": output_of,
        "resourceInventoriedAs": linked(read_resource, "resourceInventoriedAs"),
        "toResourceInventoriedAs": linked(read_resource, "toResourceInventoriedAs"),
        "triggeredBy": linked(read_event, "triggeredBy"),
    }

    def agent_fields():
        return {
            "provider": agent_field(binder, "provider"),
            "receiver": agent_field(binder, "receiver"),
        }

    def planning_fields():
        return {
            "fulfills": indexed_list(query_index(binder, FULFILLMENT), "fulfilledBy"),
            "satisfies": indexed_list(query_index(binder, SATISFACTION), "satisfiedBy"),
        }

    def knowledge_fields():
        return {
            "action": linked(read_record(binder, ACTION), "action"),
            "resourceConformsTo": linked(
                read_record(binder, RESOURCE_SPECIFICATION), "resourceConformsTo"
            ),
        }

    def agreement_fields():
        return {"realizationOf": linked(read_record(binder, AGREEMENT), "realizationOf")}

    return compose(
        capabilities,
        base,
        [
            (Capability.AGENT, agent_fields),
            (Capability.PLANNING, planning_fields),
            (Capability.KNOWLEDGE, knowledge_fields),
            (Capability.AGREEMENT, agreement_fields),
        ],
    )
