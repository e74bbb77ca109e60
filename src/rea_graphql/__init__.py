"""
REA GraphQL gateway
ValueFlows query/mutation API over capability-modular REA backend cells
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
