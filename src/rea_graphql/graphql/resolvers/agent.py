"""
Resolvers for Agent (Person, Organization) fields
"""

from ...capabilities import Capability
from ...errors import RemoteCallError
from ...records import AGENT, COMMITMENT, ECONOMIC_EVENT, INTENT, Record
from ...rpc import RemoteCallBinder
from ..composition import Resolver, ResolverMap, compose
from ..tagging import tag
from .base import indexed_list, linked, query_index, read_record

AGENT_TYPES = ("Person", "Organization")


def agent_variant(record: Record) -> str:
    """Concrete Agent type of an agent record.

    Raises:
        RemoteCallError: If the backend record does not name a known agent type
    """
    agent_type = record.get("agentType")
    if agent_type not in AGENT_TYPES:
        raise RemoteCallError(f"agent record has unknown agentType {agent_type!r}", payload=record)
    return agent_type


def agent_field(binder: RemoteCallBinder, field: str) -> Resolver:
    """Agent-typed relationship through an agent address on the parent record."""
    return tag(agent_variant, linked(read_record(binder, AGENT), field))


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    def observation_fields():
        query_events = query_index(binder, ECONOMIC_EVENT)
        return {
            "economicEventsAsProvider": indexed_list(query_events, "provider"),
            "economicEventsAsReceiver": indexed_list(query_events, "receiver"),
        }

    def planning_fields():
        query_commitments = query_index(binder, COMMITMENT)
        query_intents = query_index(binder, INTENT)
        return {
            "commitmentsAsProvider": indexed_list(query_commitments, "provider"),
            "commitmentsAsReceiver": indexed_list(query_commitments, "receiver"),
            "intentsAsProvider": indexed_list(query_intents, "provider"),
            "intentsAsReceiver": indexed_list(query_intents, "receiver"),
        }

    return compose(
        capabilities,
        {},
        [
            (Capability.OBSERVATION, observation_fields),
            (Capability.PLANNING, planning_fields),
        ],
    )
