"""
Resolvers for Process fields
"""

from ...capabilities import Capability
from ...records import COMMITMENT, ECONOMIC_EVENT, INTENT, PROCESS_SPECIFICATION
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .base import indexed_list, linked, query_index, read_record


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    query_events = query_index(binder, ECONOMIC_EVENT)

    base = {
        "inputs": indexed_list(query_events, "inputOf"),
        "outputs": indexed_list(query_events, "outputOf"),
    }

    def planning_fields():
        query_commitments = query_index(binder, COMMITMENT)
        query_intents = query_index(binder, INTENT)
        return {
            "committedInputs": indexed_list(query_commitments, "inputOf"),
            "committedOutputs": indexed_list(query_commitments, "outputOf"),
            "intendedInputs": indexed_list(query_intents, "inputOf"),
            "intendedOutputs": indexed_list(query_intents, "outputOf"),
        }

    def knowledge_fields():
        return {"basedOn": linked(read_record(binder, PROCESS_SPECIFICATION), "basedOn")}

    return compose(
        capabilities,
        base,
        [
            (Capability.PLANNING, planning_fields),
            (Capability.KNOWLEDGE, knowledge_fields),
        ],
    )
