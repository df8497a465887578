"""
Endpoint resolution - choose a Transport from an endpoint descriptor.

The descriptor comes from the SETH_URL environment variable (optionally
loaded from ~/.seth/.env) or is passed explicitly:

- unset: local IPC socket at the platform-default path
- http(s) URL on infura.io: InfuraTransport
- other http(s) URL: HTTPTransport
- existing filesystem path: IPCTransport
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..errors import EndpointError
from .client import Client
from .transport import HTTPTransport, InfuraTransport, IPCTransport, Transport

logger = logging.getLogger(__name__)

SETH_DIR = Path.home() / ".seth"
SETH_ENV = SETH_DIR / ".env"


def load_env(env_path: Optional[Path] = None) -> None:
    """Load variables from a .env file without overriding the environment."""
    env_path = env_path or SETH_ENV
    if env_path.exists():
        load_dotenv(env_path, override=False)


def get_endpoint() -> Optional[str]:
    """Get the endpoint descriptor from environment, or None if unset."""
    load_env()
    return os.environ.get("SETH_URL") or None


def get_infura_secret() -> Optional[str]:
    return os.environ.get("INFURA_PROJECT_SECRET") or None


def resolve_transport(endpoint: Optional[str] = None) -> Transport:
    """
    Build a Transport for ``endpoint``.

    Args:
        endpoint: Endpoint descriptor; None reads SETH_URL

    Raises:
        EndpointError: If the descriptor matches no transport
        TransportError: If an IPC socket cannot be dialled
    """
    if endpoint is None:
        endpoint = get_endpoint()

    if not endpoint:
        logger.debug("SETH_URL unset; trying to dial local client")
        return IPCTransport()

    if endpoint.startswith("http"):
        if "infura.io" in endpoint:
            logger.debug("interpreted %r as infura.io", endpoint)
            return InfuraTransport.from_url(endpoint, project_secret=get_infura_secret())
        logger.debug("using http transport %r", endpoint)
        return HTTPTransport(endpoint)

    if Path(endpoint).exists():
        logger.debug("using IPC path %s", endpoint)
        return IPCTransport(endpoint)

    raise EndpointError(f"cannot derive client from SETH_URL={endpoint!r}")


def new_client(endpoint: Optional[str] = None) -> Client:
    return Client(resolve_transport(endpoint))
