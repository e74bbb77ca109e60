"""
Catalogue of ValueFlows record types and the backend zomes that host them
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .capabilities import Capability

Record = Mapping[str, Any]

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(name: str) -> str:
    """Python spelling of a camelCase schema name, e.g. revisionId -> revision_id."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


@dataclass(frozen=True)
class RecordKind:
    """Naming for one record type across the graph schema and its backend zome."""

    type_name: str  # graph type, e.g. "EconomicEvent"
    capability: Capability
    zome: str  # e.g. "economic_event"
    plural: str  # e.g. "economic_events"
    key: str  # response wrapper key and single-record query field
    list_field: str  # multi-record query field
    read_by: str = "address"  # argument name of the read operation
    wrapped: bool = True  # read operation returns {key: record} rather than a bare record
    read_all: str | None = None  # index operation listing every record, when not get_all_<plural>

    @property
    def index_zome(self) -> str:
        return f"{self.zome}_index"

    @property
    def read_fn(self) -> str:
        return f"get_{self.zome}"

    @property
    def query_fn(self) -> str:
        return f"query_{self.plural}"

    @property
    def read_all_fn(self) -> str:
        return self.read_all or f"get_all_{self.plural}"

    @property
    def create_fn(self) -> str:
        return f"create_{self.zome}"

    @property
    def update_fn(self) -> str:
        return f"update_{self.zome}"

    @property
    def delete_fn(self) -> str:
        return f"delete_{self.zome}"


def _kind(type_name: str, capability: Capability, zome: str, plural: str, key: str, **kw) -> RecordKind:
    list_field = kw.pop("list_field", key + "s")
    return RecordKind(type_name, capability, zome, plural, key, list_field, **kw)


ECONOMIC_EVENT = _kind(
    "EconomicEvent", Capability.OBSERVATION, "economic_event", "economic_events", "economicEvent"
)
ECONOMIC_RESOURCE = _kind(
    "EconomicResource",
    Capability.OBSERVATION,
    "economic_resource",
    "economic_resources",
    "economicResource",
)
PROCESS = _kind(
    "Process",
    Capability.OBSERVATION,
    "process",
    "processes",
    "process",
    list_field="processes",
    read_all="read_all_processes",
)
COMMITMENT = _kind("Commitment", Capability.PLANNING, "commitment", "commitments", "commitment")
INTENT = _kind("Intent", Capability.PLANNING, "intent", "intents", "intent")
FULFILLMENT = _kind("Fulfillment", Capability.PLANNING, "fulfillment", "fulfillments", "fulfillment")
SATISFACTION = _kind(
    "Satisfaction", Capability.PLANNING, "satisfaction", "satisfactions", "satisfaction"
)
RESOURCE_SPECIFICATION = _kind(
    "ResourceSpecification",
    Capability.KNOWLEDGE,
    "resource_specification",
    "resource_specifications",
    "resourceSpecification",
)
PROCESS_SPECIFICATION = _kind(
    "ProcessSpecification",
    Capability.KNOWLEDGE,
    "process_specification",
    "process_specifications",
    "processSpecification",
)
ACTION = _kind(
    "Action", Capability.KNOWLEDGE, "action", "actions", "action", read_by="id", wrapped=False
)
UNIT = _kind("Unit", Capability.MEASUREMENT, "unit", "units", "unit", read_by="id")
AGREEMENT = _kind("Agreement", Capability.AGREEMENT, "agreement", "agreements", "agreement")
PROPOSAL = _kind("Proposal", Capability.PROPOSAL, "proposal", "proposals", "proposal")
PROPOSED_INTENT = _kind(
    "ProposedIntent",
    Capability.PROPOSAL,
    "proposed_intent",
    "proposed_intents",
    "proposedIntent",
)
AGENT = _kind("Agent", Capability.AGENT, "agent", "agents", "agent")

RECORD_KINDS: tuple[RecordKind, ...] = (
    ECONOMIC_EVENT,
    ECONOMIC_RESOURCE,
    PROCESS,
    COMMITMENT,
    INTENT,
    FULFILLMENT,
    SATISFACTION,
    RESOURCE_SPECIFICATION,
    PROCESS_SPECIFICATION,
    ACTION,
    UNIT,
    AGREEMENT,
    PROPOSAL,
    PROPOSED_INTENT,
    AGENT,
)
