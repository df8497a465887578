"""
RPC layer - transports, the typed client, and endpoint resolution.

Transports carry JSON-RPC over HTTP (httpx), the Infura gateway, or a local
IPC socket.  The Client sits on top of any of them.
"""

from .client import LATEST, PENDING, Client, block_param, parse_block_specifier
from .endpoint import new_client, resolve_transport
from .transport import HTTPTransport, InfuraTransport, IPCTransport, Transport

__all__ = [
    "LATEST",
    "PENDING",
    "Client",
    "block_param",
    "parse_block_specifier",
    "new_client",
    "resolve_transport",
    "HTTPTransport",
    "InfuraTransport",
    "IPCTransport",
    "Transport",
]
