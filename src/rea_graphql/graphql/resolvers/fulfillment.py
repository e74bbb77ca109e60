"""
Resolvers for Fulfillment fields
"""

from ...capabilities import Capability
from ...records import COMMITMENT, ECONOMIC_EVENT
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .base import indexed_required, query_index


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    base = {
        "fulfills": indexed_required(
            query_index(binder, COMMITMENT), "fulfilledBy", "Fulfillment.fulfills"
        ),
    }

    def observation_fields():
        return {
            "fulfilledBy": indexed_required(
                query_index(binder, ECONOMIC_EVENT), "fulfills", "Fulfillment.fulfilledBy"
            ),
        }

    return compose(capabilities, base, [(Capability.OBSERVATION, observation_fields)])
