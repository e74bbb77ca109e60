"""Remote call layer for reaching backend cells.

Main components:
- RemoteCallTransport: Interface for delivering one zome call
- HttpTransport: JSON-over-HTTP transport to a conductor gateway
- RemoteCallBinder: Binds (capability, zome, function) descriptors to callables
"""

from .base import RemoteCall, RemoteCallDescriptor, RemoteCallTransport
from .binder import RemoteCallBinder
from .http import HttpTransport

__all__ = [
    "RemoteCall",
    "RemoteCallDescriptor",
    "RemoteCallTransport",
    "RemoteCallBinder",
    "HttpTransport",
]
