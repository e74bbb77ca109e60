"""
Resolvers for Agreement fields
"""

from ...capabilities import Capability
from ...records import COMMITMENT, ECONOMIC_EVENT
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .base import indexed_list, query_index


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    def planning_fields():
        return {"commitments": indexed_list(query_index(binder, COMMITMENT), "clauseOf")}

    def observation_fields():
        return {"economicEvents": indexed_list(query_index(binder, ECONOMIC_EVENT), "realizationOf")}

    return compose(
        capabilities,
        {},
        [
            (Capability.PLANNING, planning_fields),
            (Capability.OBSERVATION, observation_fields),
        ],
    )
