"""
Root GraphQL query resolvers
"""

from typing import Any

from ...capabilities import Capability
from ...records import ACTION, AGENT, PROPOSED_INTENT, RECORD_KINDS, RecordKind
from ...rpc import RemoteCallBinder
from ..composition import Resolver, ResolverMap, compose
from ..connection import parse_connection
from ..resolvers.agent import agent_variant
from ..resolvers.base import read_record
from ..tagging import tag, tag_nodes


def record_queries(binder: RemoteCallBinder, kind: RecordKind) -> dict[str, Resolver]:
    """Read-one and list-many entry points for a record type."""
    read = read_record(binder, kind)
    read_all = binder.bind(kind.capability, kind.index_zome, kind.read_all_fn)

    async def read_one(_: Any, id: str) -> Any:
        return await read(id)

    async def list_many(_: Any, **page: Any) -> Any:
        # Top-level listings keep their pagination envelope
        page = {name: value for name, value in page.items() if value is not None}
        result = await read_all(page or None)
        parse_connection(result)
        return result

    return {kind.key: read_one, kind.list_field: list_many}


def action_queries(binder: RemoteCallBinder) -> dict[str, Resolver]:
    """Actions are a fixed vocabulary listed in full rather than paginated."""
    read = read_record(binder, ACTION)
    get_all = binder.bind(ACTION.capability, ACTION.zome, "get_all_actions")

    async def action(_: Any, id: str) -> Any:
        return await read(id)

    async def actions(_: Any) -> list[Any]:
        return list(await get_all(None) or [])

    return {ACTION.key: action, ACTION.list_field: actions}


def agent_queries(binder: RemoteCallBinder) -> dict[str, Resolver]:
    queries = record_queries(binder, AGENT)
    return {
        AGENT.key: tag(agent_variant, queries[AGENT.key]),
        AGENT.list_field: tag_nodes(agent_variant, queries[AGENT.list_field]),
    }


def build_query_resolvers(
    capabilities: frozenset[Capability], binder: RemoteCallBinder
) -> ResolverMap:
    fragments = []
    for kind in RECORD_KINDS:
        if kind in (ACTION, AGENT, PROPOSED_INTENT):
            continue
        fragments.append((kind.capability, lambda kind=kind: record_queries(binder, kind)))

    fragments.append((ACTION.capability, lambda: action_queries(binder)))
    fragments.append((AGENT.capability, lambda: agent_queries(binder)))

    return compose(capabilities, {}, fragments)
