"""
Resolvers for Proposal and ProposedIntent fields
"""

from ...capabilities import Capability
from ...records import INTENT, PROPOSAL, PROPOSED_INTENT
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from .base import indexed_list, linked, query_index, read_record


def build_proposal_resolvers(
    capabilities: frozenset[Capability], binder: RemoteCallBinder
) -> ResolverMap:
    base = {
        "publishes": indexed_list(query_index(binder, PROPOSED_INTENT), "publishedIn"),
    }
    return compose(capabilities, base)


def build_proposed_intent_resolvers(
    capabilities: frozenset[Capability], binder: RemoteCallBinder
) -> ResolverMap:
    base = {
        "publishedIn": linked(read_record(binder, PROPOSAL), "publishedIn"),
    }

    def planning_fields():
        return {"publishes": linked(read_record(binder, INTENT), "publishes")}

    return compose(capabilities, base, [(Capability.PLANNING, planning_fields)])
