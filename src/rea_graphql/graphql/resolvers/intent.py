"""
Resolvers for Intent fields
"""

from ...capabilities import Capability
from ...records import (
    ACTION,
    ECONOMIC_RESOURCE,
    PROCESS,
    PROPOSED_INTENT,
    RESOURCE_SPECIFICATION,
    SATISFACTION,
)
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .agent import agent_field
from .base import indexed_list, linked, query_index, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    base = {
        "satisfiedBy": indexed_list(query_index(binder, SATISFACTION), "satisfies"),
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

    # Either side of an intent may be left open for someone to take up
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

    def proposal_fields():
        return {"publishedIn": indexed_list(query_index(binder, PROPOSED_INTENT), "publishes")}

    return compose(
        capabilities,
        base,
        [
            (Capability.OBSERVATION, observation_fields),
            (Capability.AGENT, agent_fields),
            (Capability.KNOWLEDGE, knowledge_fields),
            (Capability.PROPOSAL, proposal_fields),
        ],
    )
