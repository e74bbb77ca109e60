"""
Capability modules that may be enabled per deployment
"""

from collections.abc import Iterable
from enum import Enum


class Capability(str, Enum):
    """Optional ValueFlows feature areas."""

    AGENT = "agent"
    AGREEMENT = "agreement"
    KNOWLEDGE = "knowledge"
    MEASUREMENT = "measurement"
    OBSERVATION = "observation"
    PLANNING = "planning"
    PROPOSAL = "proposal"

    @property
    def cell(self) -> str:
        """Name of the backend cell hosting this module's zomes."""
        return _CELLS[self]


_CELLS = {
    Capability.AGENT: "agent",
    Capability.AGREEMENT: "agreement",
    Capability.KNOWLEDGE: "specification",
    Capability.MEASUREMENT: "specification",
    Capability.OBSERVATION: "observation",
    Capability.PLANNING: "planning",
    Capability.PROPOSAL: "proposal",
}

# Deployments commonly name modules after the cell that hosts them
_ALIASES = {
    "specification": Capability.KNOWLEDGE,
}

ALL_CAPABILITIES: frozenset[Capability] = frozenset(Capability)


def parse_capabilities(names: Iterable[str | Capability]) -> frozenset[Capability]:
    """Parse configured module names into a capability set.

    Args:
        names: Module identifiers, case-insensitive. Cell aliases are accepted.

    Returns:
        Frozen set of capabilities

    Raises:
        ValueError: If a name is unknown or no module is enabled
    """
    capabilities: set[Capability] = set()
    for name in names:
        if isinstance(name, Capability):
            capabilities.add(name)
            continue
        key = name.strip().lower()
        if not key:
            continue
        if key in _ALIASES:
            capabilities.add(_ALIASES[key])
            continue
        try:
            capabilities.add(Capability(key))
        except ValueError:
            raise ValueError(f"Unknown capability module: {name}") from None

    if not capabilities:
        raise ValueError("At least one capability module must be enabled")

    return frozenset(capabilities)
