"""Field resolver sets for the ValueFlows graph types.

Each module builds the resolver mapping for one graph type from the
deployment's capability set. ``build_type_resolvers`` assembles the mappings
of every type whose owning module is enabled.
"""

from collections.abc import Callable

from ...capabilities import Capability
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap
from . import (
    agent,
    agreement,
    commitment,
    economic_event,
    economic_resource,
    fulfillment,
    intent,
    measure,
    process,
    proposal,
    resource_specification,
    satisfaction,
)

Builder = Callable[[frozenset[Capability], RemoteCallBinder], ResolverMap]

# (graph type, owning module or None when always present, builder)
TYPE_BUILDERS: tuple[tuple[str, Capability | None, Builder], ...] = (
    ("EconomicEvent", Capability.OBSERVATION, economic_event.build_resolvers),
    ("EconomicResource", Capability.OBSERVATION, economic_resource.build_resolvers),
    ("Process", Capability.OBSERVATION, process.build_resolvers),
    ("Commitment", Capability.PLANNING, commitment.build_resolvers),
    ("Intent", Capability.PLANNING, intent.build_resolvers),
    ("Fulfillment", Capability.PLANNING, fulfillment.build_resolvers),
    ("Satisfaction", Capability.PLANNING, satisfaction.build_resolvers),
    ("ResourceSpecification", Capability.KNOWLEDGE, resource_specification.build_resolvers),
    ("Agreement", Capability.AGREEMENT, agreement.build_resolvers),
    ("Proposal", Capability.PROPOSAL, proposal.build_proposal_resolvers),
    ("ProposedIntent", Capability.PROPOSAL, proposal.build_proposed_intent_resolvers),
    ("Agent", Capability.AGENT, agent.build_resolvers),
    ("Person", Capability.AGENT, agent.build_resolvers),
    ("Organization", Capability.AGENT, agent.build_resolvers),
    ("Measure", None, measure.build_resolvers),
)


def build_type_resolvers(
    capabilities: frozenset[Capability], binder: RemoteCallBinder
) -> dict[str, ResolverMap]:
    """Build the resolver mappings for every graph type available in a deployment.

    Args:
        capabilities: Enabled capability modules
        binder: Remote call binder for the same deployment

    Returns:
        Mapping of graph type name to its field resolver mapping
    """
    resolvers: dict[str, ResolverMap] = {}
    for type_name, owner, build in TYPE_BUILDERS:
        if owner is None or owner in capabilities:
            resolvers[type_name] = build(capabilities, binder)
    return resolvers


__all__ = ["TYPE_BUILDERS", "build_type_resolvers"]
