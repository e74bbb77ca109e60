"""
Root GraphQL mutation resolvers
"""

from typing import Any

from ...capabilities import Capability
from ...records import (
    AGREEMENT,
    COMMITMENT,
    ECONOMIC_EVENT,
    ECONOMIC_RESOURCE,
    FULFILLMENT,
    INTENT,
    PROCESS,
    PROCESS_SPECIFICATION,
    PROPOSAL,
    PROPOSED_INTENT,
    RESOURCE_SPECIFICATION,
    SATISFACTION,
    UNIT,
    RecordKind,
    snake_case,
)
from ...rpc import RemoteCallBinder
from ..composition import Resolver, ResolverMap, compose
from ..connection import unwrap

# Record types with plain create/update/delete mutations
CRUD_KINDS = (
    PROCESS,
    COMMITMENT,
    INTENT,
    FULFILLMENT,
    SATISFACTION,
    RESOURCE_SPECIFICATION,
    PROCESS_SPECIFICATION,
    UNIT,
    AGREEMENT,
    PROPOSAL,
)


def _record_response(result: Any, kind: RecordKind) -> Any:
    unwrap(result, kind.key)
    return result


def delete_mutation(binder: RemoteCallBinder, kind: RecordKind) -> Resolver:
    call = binder.bind(kind.capability, kind.zome, kind.delete_fn)

    async def delete(_: Any, revision_id: str) -> bool:
        return bool(await call({"revisionId": revision_id}))

    return delete


def update_mutation(binder: RemoteCallBinder, kind: RecordKind, arg: str) -> Resolver:
    call = binder.bind(kind.capability, kind.zome, kind.update_fn)
    param = snake_case(arg)

    async def update(_: Any, **args: Any) -> Any:
        return _record_response(await call({kind.key: args[param]}), kind)

    return update


def crud_mutations(binder: RemoteCallBinder, kind: RecordKind) -> dict[str, Resolver]:
    """create/update/delete mutations for a record type, taking its key as argument name."""
    create_call = binder.bind(kind.capability, kind.zome, kind.create_fn)
    param = snake_case(kind.key)

    async def create(_: Any, **args: Any) -> Any:
        return _record_response(await create_call({kind.key: args[param]}), kind)

    return {
        f"create{kind.type_name}": create,
        f"update{kind.type_name}": update_mutation(binder, kind, kind.key),
        f"delete{kind.type_name}": delete_mutation(binder, kind),
    }


def observation_mutations(binder: RemoteCallBinder) -> dict[str, Resolver]:
    create_call = binder.bind(ECONOMIC_EVENT.capability, ECONOMIC_EVENT.zome, ECONOMIC_EVENT.create_fn)

    async def create_economic_event(
        _: Any, event: dict[str, Any], new_inventoried_resource: dict[str, Any] | None = None
    ) -> Any:
        """Record an event, optionally creating the resource it first inventories."""
        payload: dict[str, Any] = {"event": event}
        if new_inventoried_resource is not None:
            payload["newInventoriedResource"] = new_inventoried_resource
        return _record_response(await create_call(payload), ECONOMIC_EVENT)

    return {
        "createEconomicEvent": create_economic_event,
        "updateEconomicEvent": update_mutation(binder, ECONOMIC_EVENT, "event"),
        "deleteEconomicEvent": delete_mutation(binder, ECONOMIC_EVENT),
        "updateEconomicResource": update_mutation(binder, ECONOMIC_RESOURCE, "resource"),
    }


def proposal_mutations(binder: RemoteCallBinder) -> dict[str, Resolver]:
    create_call = binder.bind(
        PROPOSED_INTENT.capability, PROPOSED_INTENT.zome, PROPOSED_INTENT.create_fn
    )

    async def propose_intent(
        _: Any, published_in: str, publishes: str, reciprocal: bool | None = None
    ) -> Any:
        proposed_intent = {"publishedIn": published_in, "publishes": publishes}
        if reciprocal is not None:
            proposed_intent["reciprocal"] = reciprocal
        result = await create_call({PROPOSED_INTENT.key: proposed_intent})
        return _record_response(result, PROPOSED_INTENT)

    return {
        "proposeIntent": propose_intent,
        "deleteProposedIntent": delete_mutation(binder, PROPOSED_INTENT),
    }


def build_mutation_resolvers(
    capabilities: frozenset[Capability], binder: RemoteCallBinder
) -> ResolverMap:
    fragments = [
        (Capability.OBSERVATION, lambda: observation_mutations(binder)),
        (Capability.PROPOSAL, lambda: proposal_mutations(binder)),
    ]
    for kind in CRUD_KINDS:
        fragments.append((kind.capability, lambda kind=kind: crud_mutations(binder, kind)))

    return compose(capabilities, {}, fragments)
