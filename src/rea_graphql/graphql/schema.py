"""
ValueFlows GraphQL schema assembled for a deployment's capability set
"""

import functools
import json
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from graphql import (
    DefinitionNode,
    DocumentNode,
    FieldDefinitionNode,
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    InterfaceTypeDefinitionNode,
    Node,
    ObjectTypeDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    build_ast_schema,
    default_field_resolver,
    get_introspection_query,
    graphql,
    graphql_sync,
    parse,
)
from graphql import validate_schema as gql_validate_schema
from pydantic import BaseModel, ConfigDict, Field

from ..capabilities import ALL_CAPABILITIES, Capability
from ..deployment import DeploymentConfig
from ..logging import get_logger
from ..records import RECORD_KINDS, snake_case
from ..rpc import RemoteCallBinder
from .composition import Resolver, ResolverMap
from .mutations.root import build_mutation_resolvers
from .queries.root import build_query_resolvers
from .resolvers import build_type_resolvers
from .resolvers.agent import AGENT_TYPES
from .tagging import resolve_variant, untag

logger = get_logger(__name__)

SDL_PATH = Path(__file__).with_name("valueflows.graphql")

ROOT_TYPES = ("Query", "Mutation")

# Graph types that only exist when their owning module is enabled
TYPE_OWNERS: dict[str, Capability] = {kind.type_name: kind.capability for kind in RECORD_KINDS}
TYPE_OWNERS.update({name: Capability.AGENT for name in AGENT_TYPES})


def build_resolvers(
    capabilities: frozenset[Capability], binder: RemoteCallBinder
) -> dict[str, ResolverMap]:
    """Resolver mappings for the query and mutation roots and every available graph type."""
    resolvers = {
        "Query": build_query_resolvers(capabilities, binder),
        "Mutation": build_mutation_resolvers(capabilities, binder),
    }
    resolvers.update(build_type_resolvers(capabilities, binder))
    return resolvers


@functools.lru_cache(maxsize=1)
def load_sdl() -> DocumentNode:
    return parse(SDL_PATH.read_text(encoding="utf-8"))


@functools.lru_cache(maxsize=1)
def resolver_backed_fields() -> frozenset[tuple[str, str]]:
    """Every (type, field) pair that has a resolver when all modules are enabled.

    Binding sends nothing, so the full build needs no transport.
    """
    config = DeploymentConfig(capabilities=ALL_CAPABILITIES, conductor_uri="")
    full = build_resolvers(ALL_CAPABILITIES, RemoteCallBinder(config, None))
    return frozenset(
        (type_name, field_name) for type_name, fields in full.items() for field_name in fields
    )


def _named_type(type_node: TypeNode) -> str:
    while not hasattr(type_node, "name"):
        type_node = type_node.type
    return type_node.name.value


def _referenced_types(definition: DefinitionNode) -> set[str]:
    names: set[str] = set()
    if isinstance(definition, UnionTypeDefinitionNode):
        names.update(member.name.value for member in definition.types or ())
        return names
    for field in getattr(definition, "fields", None) or ():
        names.add(_named_type(field.type))
        for arg in getattr(field, "arguments", None) or ():
            names.add(_named_type(arg.type))
    for interface in getattr(definition, "interfaces", None) or ():
        names.add(interface.name.value)
    return names


def _reachable(definitions: dict[str, DefinitionNode]) -> set[str]:
    """Names of the types reachable from the root operation types."""
    implementations: dict[str, set[str]] = {}
    for name, definition in definitions.items():
        for interface in getattr(definition, "interfaces", None) or ():
            implementations.setdefault(interface.name.value, set()).add(name)

    seen: set[str] = set()
    pending = [name for name in ROOT_TYPES if name in definitions]
    while pending:
        name = pending.pop()
        if name in seen or name not in definitions:
            continue
        seen.add(name)
        pending.extend(_referenced_types(definitions[name]))
        pending.extend(implementations.get(name, ()))
    return seen


def _rebuild(node: Node, **changes: Any) -> Node:
    """Copy of an AST node with some attributes replaced."""
    attributes = {key: getattr(node, key) for key in node.keys if key != "loc"}
    attributes.update(changes)
    return type(node)(**attributes)


def prune_document(
    document: DocumentNode,
    capabilities: frozenset[Capability],
    resolvers: dict[str, ResolverMap],
) -> tuple[DocumentNode, int]:
    """Remove the parts of the schema document a deployment cannot serve.

    Drops resolver-backed fields that have no resolver in ``resolvers``,
    types owned by disabled modules (and their union memberships), root
    operation types left without fields, and types no longer reachable from
    a root.

    Returns:
        The pruned document and the number of fields removed
    """
    backed = resolver_backed_fields()
    removed = 0
    definitions: dict[str, DefinitionNode] = {}

    for definition in document.definitions:
        name = getattr(definition, "name", None)
        if name is None:
            continue
        name = name.value
        owner = TYPE_OWNERS.get(name)
        if owner is not None and owner not in capabilities:
            continue

        if isinstance(definition, ObjectTypeDefinitionNode | InterfaceTypeDefinitionNode):
            available = resolvers.get(name, {})
            fields: list[FieldDefinitionNode] = []
            for field in definition.fields or ():
                if (name, field.name.value) in backed and field.name.value not in available:
                    removed += 1
                    continue
                fields.append(field)
            if not fields and name in ROOT_TYPES:
                continue
            definition = _rebuild(definition, fields=tuple(fields))

        definitions[name] = definition

    for name, definition in list(definitions.items()):
        if isinstance(definition, UnionTypeDefinitionNode):
            members = tuple(
                member for member in definition.types or () if member.name.value in definitions
            )
            definitions[name] = _rebuild(definition, types=members)

    reachable = _reachable(definitions)
    kept = tuple(definition for name, definition in definitions.items() if name in reachable)
    return DocumentNode(definitions=kept), removed


def _field_resolver(fn: Resolver):
    async def resolve(source: Any, info: Any, **args: Any) -> Any:
        return await fn(untag(source), **{snake_case(name): value for name, value in args.items()})

    resolve.__qualname__ = getattr(fn, "__qualname__", resolve.__qualname__)
    return resolve


def resolve_embedded(source: Any, info: Any, **args: Any) -> Any:
    """Default resolver for fields read straight off the parent record."""
    return default_field_resolver(untag(source), info, **args)


def attach_resolvers(
    schema: GraphQLSchema, resolvers: dict[str, ResolverMap], declared: set[str]
) -> None:
    """Install resolvers on the built schema by type and field name.

    Raises:
        ValueError: If a resolver targets a type or field the schema does not declare
    """
    for type_name, fields in resolvers.items():
        if not fields:
            continue
        if type_name not in declared:
            raise ValueError(f"Resolvers given for undeclared type '{type_name}'")
        graphql_type = schema.get_type(type_name)
        if graphql_type is None:
            # Unreachable for this deployment
            continue
        if not isinstance(graphql_type, GraphQLObjectType | GraphQLInterfaceType):
            raise ValueError(f"Resolvers given for non-object type '{type_name}'")
        for field_name, fn in fields.items():
            field = graphql_type.fields.get(field_name)
            if field is None:
                raise ValueError(f"Resolver given for undeclared field '{type_name}.{field_name}'")
            field.resolve = _field_resolver(fn)

    for graphql_type in schema.type_map.values():
        if graphql_type.name.startswith("__"):
            continue
        if isinstance(graphql_type, GraphQLInterfaceType | GraphQLUnionType):
            graphql_type.resolve_type = resolve_variant
        if isinstance(graphql_type, GraphQLObjectType | GraphQLInterfaceType):
            for field in graphql_type.fields.values():
                if field.resolve is None:
                    field.resolve = resolve_embedded


def build_schema(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> GraphQLSchema:
    """Build the executable schema for a deployment.

    Args:
        capabilities: Enabled capability modules
        binder: Remote call binder for the same deployment

    Returns:
        graphql-core schema with resolvers installed
    """
    resolvers = build_resolvers(capabilities, binder)
    document = load_sdl()
    declared = {
        definition.name.value
        for definition in document.definitions
        if getattr(definition, "name", None) is not None
    }

    pruned, removed = prune_document(document, capabilities, resolvers)
    schema = build_ast_schema(pruned)
    attach_resolvers(schema, resolvers, declared)

    logger.info(
        "GraphQL schema built",
        modules=sorted(capability.value for capability in capabilities),
        pruned_fields=removed,
        types=len([name for name in schema.type_map if not name.startswith("__")]),
    )
    return schema


def validate_schema(schema: GraphQLSchema) -> None:
    """Validate the GraphQL schema at startup.

    This ensures that all type references can be resolved and catches
    pruning mistakes early, causing the server to fail fast rather than
    returning errors at runtime.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        errors = gql_validate_schema(schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        # Check that introspection query works (catches most resolution issues)
        result = graphql_sync(schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


class GraphQLRequest(BaseModel):
    """GraphQL-over-HTTP request body."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


def create_graphql_router(schema: GraphQLSchema) -> APIRouter:
    """Create a GraphQL router for FastAPI."""
    router = APIRouter()

    async def execute(request: Request, body: GraphQLRequest) -> JSONResponse:
        result = await graphql(
            schema,
            body.query,
            variable_values=body.variables,
            operation_name=body.operation_name,
            context_value={"request": request},
        )
        if result.errors:
            logger.warning(
                "GraphQL execution returned errors",
                operation=body.operation_name,
                errors=[error.message for error in result.errors],
            )
        return JSONResponse(result.formatted)

    @router.post("/graphql")
    async def graphql_post(request: Request, body: GraphQLRequest) -> JSONResponse:
        return await execute(request, body)

    @router.get("/graphql")
    async def graphql_get(
        request: Request,
        query: str,
        variables: str | None = None,
        operation_name: str | None = Query(default=None, alias="operationName"),
    ) -> JSONResponse:
        try:
            parsed = json.loads(variables) if variables else None
        except json.JSONDecodeError as e:
            raise HTTPException(status_code=400, detail=f"Invalid variables: {e}") from e
        body = GraphQLRequest(query=query, variables=parsed, operation_name=operation_name)
        return await execute(request, body)

    return router
