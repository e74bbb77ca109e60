"""
Resolvers for Commitment fields
"""

from ...capabilities import Capability
from ...records import (
    ACTION,
    AGREEMENT,
    ECONOMIC_RESOURCE,
    FULFILLMENT,
    PROCESS,
    RESOURCE_SPECIFICATION,
    SATISFACTION,
)
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .agent import agent_field
from .base import indexed_list, linked, query_index, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    base = {
        "fulfilledBy": indexed_list(query_index(binder, FULFILLMENT), "fulfills"),
        "satisfies": indexed_list(query_index(binder, SATISFACTION), "satisfiedBy"),
    }

    def observation_fields():
        read_process = read_record(binder, PROCESS)
        return {
            "inputOf": linked(read_process, "inputOf"),
            "outputOf": linked(read_process, "outputOf"),
            "resourceInventoriedAs": linked(
                read_record(binder, ECONOMIC_RESOURCE), "resourceInventoriedAs"
            ),
        }

    def agent_fields():
        return {
            "provider": agent_field(binder, "provider"),
            "receiver": agent_field(binder, "receiver"),
        }

    def knowledge_fields():
        return {
            "action": linked(read_record(binder, ACTION), "action"),
            "resourceConformsTo": linked(
                read_record(binder, RESOURCE_SPECIFICATION), "resourceConformsTo"
            ),
        }

    def agreement_fields():
        return {"clauseOf": linked(read_record(binder, AGREEMENT), "clauseOf")}

    return compose(
        capabilities,
        base,
        [
            (Capability.OBSERVATION, observation_fields),
            (Capability.AGENT, agent_fields),
            (Capability.KNOWLEDGE, knowledge_fields),
            (Capability.AGREEMENT, agreement_fields),
        ],
    )
