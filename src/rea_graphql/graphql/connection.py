"""
Normalization of backend index results (connections) and record wrappers

Backend index zomes only expose multi-result queries, so every to-one
relationship in the schema is satisfied from a connection. These helpers are
the single place where "the backend returned a list" is reconciled with
"the field wants zero or one item".
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import MissingRelationError, RemoteCallError


class PageInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    start_cursor: str | None = Field(default=None, alias="startCursor")
    end_cursor: str | None = Field(default=None, alias="endCursor")
    has_previous_page: bool = Field(default=False, alias="hasPreviousPage")
    has_next_page: bool = Field(default=False, alias="hasNextPage")


class Edge(BaseModel):
    model_config = ConfigDict(extra="allow")

    node: Any
    cursor: str | None = None


class Connection(BaseModel):
    """Paginated edge list as returned by backend index queries."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    edges: list[Edge]
    page_info: PageInfo | None = Field(default=None, alias="pageInfo")

    @property
    def nodes(self) -> list[Any]:
        return [edge.node for edge in self.edges]


def parse_connection(result: Any) -> Connection:
    """Validate a raw index result as a connection.

    A missing connection object or missing ``edges`` list is malformed
    backend data, never an empty result.

    Raises:
        RemoteCallError: If the result is not connection-shaped
    """
    if isinstance(result, Connection):
        return result
    if not isinstance(result, Mapping):
        raise RemoteCallError(
            f"expected a connection, got {type(result).__name__}", payload=result
        )
    try:
        return Connection.model_validate(result)
    except ValidationError as e:
        raise RemoteCallError(f"malformed connection: {e}", payload=result) from e


def to_list(result: Any) -> list[Any]:
    """All nodes of a connection, in backend order."""
    connection = parse_connection(result)
    if not connection.edges:
        return []
    return connection.nodes


def first(result: Any) -> Any | None:
    """Node of the first edge, or None for an empty connection."""
    connection = parse_connection(result)
    if not connection.edges:
        return None
    return connection.edges[0].node


def first_or_fail(result: Any, relation: str = "relation") -> Any:
    """Node of the first edge of a connection that must not be empty.

    Raises:
        MissingRelationError: If the connection has no edges
    """
    node = first(result)
    if node is None:
        raise MissingRelationError(f"No record found for required {relation}")
    return node


def unwrap(response: Any, key: str) -> Any:
    """Extract the record from a ``{key: record}`` response wrapper.

    Raises:
        RemoteCallError: If the wrapper or record is missing
    """
    if not isinstance(response, Mapping) or response.get(key) is None:
        raise RemoteCallError(f"response has no '{key}' record", payload=response)
    return response[key]
