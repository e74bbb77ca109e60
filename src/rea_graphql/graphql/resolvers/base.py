"""
Building blocks shared by the per-type field resolver builders.

Field resolvers take the parent record plus the field's arguments as keyword
arguments. Each issues at most one remote call.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from ...errors import RemoteCallError
from ...records import Record, RecordKind
from ...rpc import RemoteCallBinder
from ..composition import Resolver
from ..connection import first, first_or_fail, to_list, unwrap

Reader = Callable[[str], Awaitable[Record]]
Query = Callable[..., Awaitable[Any]]


def read_record(binder: RemoteCallBinder, kind: RecordKind) -> Reader:
    """Bind the single-record read operation of a record type."""
    call = binder.bind(kind.capability, kind.zome, kind.read_fn)

    async def read(identifier: str) -> Record:
        result = await call({kind.read_by: identifier})
        if kind.wrapped:
            return unwrap(result, kind.key)
        if result is None:
            raise RemoteCallError(f"{kind.type_name} '{identifier}' not found")
        return result

    return read


def query_index(binder: RemoteCallBinder, kind: RecordKind) -> Query:
    """Bind the index query operation of a record type; returns the raw connection."""
    call = binder.bind(kind.capability, kind.index_zome, kind.query_fn)

    async def query(**params: Any) -> Any:
        return await call({"params": params})

    return query


def linked(read: Reader, field: str) -> Resolver:
    """To-one relationship through an identifier held on the parent record.

    Resolves to None without a remote call when the parent holds no identifier.
    """

    async def resolve(record: Record, **_: Any) -> Record | None:
        identifier = record.get(field)
        if not identifier:
            return None
        return await read(identifier)

    return resolve


def indexed_list(query: Query, param: str) -> Resolver:
    """To-many relationship found by querying an index for the parent's id."""

    async def resolve(record: Record, **_: Any) -> list[Record]:
        return to_list(await query(**{param: record["id"]}))

    return resolve


def indexed_first(query: Query, param: str) -> Resolver:
    """Optional to-one relationship found through an index query."""

    async def resolve(record: Record, **_: Any) -> Record | None:
        return first(await query(**{param: record["id"]}))

    return resolve


def indexed_required(query: Query, param: str, relation: str) -> Resolver:
    """Non-nullable to-one relationship found through an index query."""

    async def resolve(record: Record, **_: Any) -> Record:
        return first_or_fail(await query(**{param: record["id"]}), relation)

    return resolve
