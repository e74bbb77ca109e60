"""
Shared pytest fixtures and configuration for all tests.
"""

import itertools
import os
from collections.abc import Callable, Generator, Iterable
from typing import Any

import pytest
from graphql import ExecutionResult, GraphQLSchema, graphql

from rea_graphql.capabilities import ALL_CAPABILITIES, Capability, parse_capabilities
from rea_graphql.deployment import DeploymentConfig
from rea_graphql.errors import RemoteCallError
from rea_graphql.graphql.schema import build_schema
from rea_graphql.records import RECORD_KINDS
from rea_graphql.rpc import RemoteCallBinder

_KINDS_BY_ZOME = {kind.zome: kind for kind in RECORD_KINDS}


def connection(nodes: Iterable[Any]) -> dict[str, Any]:
    """Backend-shaped connection over the given nodes, in the given order."""
    nodes = list(nodes)
    edges = [{"node": node, "cursor": str(node.get("id", i))} for i, node in enumerate(nodes)]
    return {
        "edges": edges,
        "pageInfo": {
            "startCursor": edges[0]["cursor"] if edges else None,
            "endCursor": edges[-1]["cursor"] if edges else None,
            "hasPreviousPage": False,
            "hasNextPage": False,
            "totalCount": len(edges),
        },
    }


class FakeConductor:
    """In-memory stand-in for the conductor gateway.

    Implements the remote call transport interface. Records created through
    ``create_*`` calls are stored per zome and served back by ``get_*``, index
    ``query_*`` and index read-all calls, most recently created first. Individual
    operations can be stubbed with ``respond``.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, str, Any]] = []
        self.records: dict[str, list[dict[str, Any]]] = {}
        self._responses: dict[tuple[str, str], Any] = {}
        self._ids = itertools.count(1)
        self.closed = False

    def respond(self, zome: str, fn: str, result: Any) -> None:
        """Stub an operation with a fixed result, a callable of the payload, or an exception."""
        self._responses[(zome, fn)] = result

    def cells_called(self) -> set[str]:
        return {cell for cell, _, _, _ in self.calls}

    async def call(self, cell: str, zome: str, fn: str, payload: Any) -> Any:
        self.calls.append((cell, zome, fn, payload))

        if (zome, fn) in self._responses:
            response = self._responses[(zome, fn)]
            if isinstance(response, Exception):
                raise response
            return response(payload) if callable(response) else response

        if fn.startswith(("get_all_", "read_all_")):
            return self._read_all(zome.removesuffix("_index"), payload or {})
        if fn.startswith("create_"):
            return self._create(zome, payload)
        if fn.startswith("get_"):
            return self._get(zome, payload)
        if fn.startswith("query_"):
            return self._query(zome.removesuffix("_index"), payload.get("params") or {})
        raise RemoteCallError(f"{zome}.{fn} is not implemented by the fake conductor", payload=payload)

    async def aclose(self) -> None:
        self.closed = True

    def add(self, zome: str, **fields: Any) -> dict[str, Any]:
        """Store a record directly and return it."""
        number = next(self._ids)
        record = {"id": f"{zome}:{number}", "revisionId": f"{zome}:{number}:0", **fields}
        self.records.setdefault(zome, []).append(record)
        return record

    def _create(self, zome: str, payload: dict[str, Any]) -> dict[str, Any]:
        if zome == "economic_event":
            event = dict(payload["event"])
            response: dict[str, Any] = {}
            if payload.get("newInventoriedResource") is not None:
                resource_fields = dict(payload["newInventoriedResource"])
                resource_fields.setdefault("conformsTo", event.get("resourceConformsTo"))
                resource = self.add("economic_resource", **resource_fields)
                event["resourceInventoriedAs"] = resource["id"]
                response["economicResource"] = resource
            response["economicEvent"] = self.add("economic_event", **event)
            return response

        kind = _KINDS_BY_ZOME[zome]
        return {kind.key: self.add(zome, **payload[kind.key])}

    def _get(self, zome: str, payload: dict[str, Any]) -> Any:
        kind = _KINDS_BY_ZOME[zome]
        identifier = payload[kind.read_by]
        for record in self.records.get(zome, []):
            if record["id"] == identifier:
                return {kind.key: record} if kind.wrapped else record
        raise RemoteCallError(f"No {kind.type_name} with id {identifier}", payload=payload)

    def _read_all(self, zome: str, page: dict[str, Any]) -> dict[str, Any]:
        records = list(reversed(self.records.get(zome, [])))
        if page.get("first") is not None:
            records = records[: page["first"]]
        return connection(records)

    def _query(self, zome: str, params: dict[str, Any]) -> dict[str, Any]:
        def matches(record: dict[str, Any]) -> bool:
            for name, value in params.items():
                held = record.get(name)
                if held != value and not (isinstance(held, list) and value in held):
                    return False
            return True

        return connection(reversed([r for r in self.records.get(zome, []) if matches(r)]))


@pytest.fixture
def conductor() -> FakeConductor:
    return FakeConductor()


@pytest.fixture
def make_binder(conductor: FakeConductor) -> Callable[..., RemoteCallBinder]:
    """Factory for binders over the fake conductor for a given module list."""

    def make(*modules: str | Capability) -> RemoteCallBinder:
        capabilities = parse_capabilities(modules) if modules else ALL_CAPABILITIES
        config = DeploymentConfig(capabilities=capabilities, conductor_uri="http://conductor.test")
        return RemoteCallBinder(config, conductor)

    return make


@pytest.fixture
def make_schema(make_binder: Callable[..., RemoteCallBinder]) -> Callable[..., GraphQLSchema]:
    def make(*modules: str | Capability) -> GraphQLSchema:
        binder = make_binder(*modules)
        return build_schema(binder.capabilities, binder)

    return make


async def execute(
    schema: GraphQLSchema, document: str, variables: dict[str, Any] | None = None
) -> ExecutionResult:
    return await graphql(schema, document, variable_values=variables)


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
