"""
Resolvers for Satisfaction fields
"""

import asyncio
from typing import Any

from ...capabilities import Capability
from ...errors import MissingRelationError
from ...records import COMMITMENT, ECONOMIC_EVENT, INTENT, Record
from ...rpc import RemoteCallBinder
from ..composition import ResolverMap, compose
from ..connection import first
from ..tagging import TaggedValue
from .base import indexed_required, query_index


def build_resolvers(capabilities: frozenset[Capability], binder: RemoteCallBinder) -> ResolverMap:
    query_commitments = query_index(binder, COMMITMENT)
    query_events = None
    if Capability.OBSERVATION in capabilities:
        query_events = query_index(binder, ECONOMIC_EVENT)

    async def satisfied_by(record: Record, **_: Any) -> TaggedValue:
        """
        The event or commitment satisfying the intent.

        Observed events take precedence over the commitments planned to satisfy
        the same intent. Both indexes are queried concurrently, or only the
        commitment index when the deployment has no observation module.
        """
        satisfaction_id = record["id"]
        if query_events is None:
            commitment = first(await query_commitments(satisfies=satisfaction_id))
        else:
            events, commitments = await asyncio.gather(
                query_events(satisfies=satisfaction_id),
                query_commitments(satisfies=satisfaction_id),
            )
            event = first(events)
            if event is not None:
                return TaggedValue("EconomicEvent", event)
            commitment = first(commitments)

        if commitment is None:
            raise MissingRelationError("No record found for required Satisfaction.satisfiedBy")
        return TaggedValue("Commitment", commitment)

    base = {
        "satisfies": indexed_required(
            query_index(binder, INTENT), "satisfiedBy", "Satisfaction.satisfies"
        ),
        "satisfiedBy": satisfied_by,
    }

    return compose(capabilities, base)
