"""
JSON-RPC transports.

A transport performs one remote procedure call: it takes a method name and
already-serialised JSON parameters and returns the ``result`` member of the
response.  Network failures raise TransportError; HTTP error statuses and
JSON-RPC error objects raise RequestError.

Transports do not retry and (by default) do not time out.
"""

from __future__ import annotations

import codecs
import itertools
import json
import logging
import socket
import threading
from pathlib import Path
from typing import Any, Optional, Protocol, Sequence, Union
from urllib.parse import urlparse

import httpx

from ..errors import EndpointError, RequestError, TransportError

logger = logging.getLogger(__name__)

INFURA_URL = "https://{network}.infura.io/v3/{project_id}"

DEFAULT_IPC_PATHS = (
    Path.home() / ".ethereum" / "geth.ipc",
    Path.home() / "Library" / "Ethereum" / "geth.ipc",
    Path.home() / ".local" / "share" / "io.parity.ethereum" / "jsonrpc.ipc",
)


class Transport(Protocol):
    def execute(self, method: str, params: Sequence[Any]) -> Any:
        ...

    def close(self) -> None:
        ...


def _envelope(method: str, params: Sequence[Any], request_id: int) -> dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "method": method,
        "params": list(params),
        "id": request_id,
    }


def _unwrap(response: Any) -> Any:
    """Return the ``result`` of a JSON-RPC response, raising on error objects."""
    if not isinstance(response, dict):
        raise RequestError(f"malformed JSON-RPC response: {response!r}")
    error = response.get("error")
    if error is not None:
        if isinstance(error, dict):
            raise RequestError(
                f"RPC error {error.get('code')}: {error.get('message')}",
                code=error.get("code"),
                data=error.get("data"),
            )
        raise RequestError(f"RPC error: {error}")
    if "result" not in response:
        raise RequestError(f"JSON-RPC response has no result: {response!r}")
    return response["result"]


# ============ HTTP ============


class HTTPTransport:
    """
    JSON-RPC over HTTP POST.

    The underlying ``httpx.Client`` is safe to share between threads.

    Args:
        url: Endpoint URL (http or https)
        headers: Extra request headers
        auth: ``httpx`` auth (e.g. a ``(user, password)`` tuple)
        timeout: Seconds per request; None waits indefinitely
        transport: Custom ``httpx`` transport (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        url: str,
        *,
        headers: Optional[dict[str, str]] = None,
        auth: Optional[httpx.Auth | tuple[str, str]] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if urlparse(url).scheme not in ("http", "https"):
            raise EndpointError(f"Not an HTTP URL: {url!r}")
        self.url = url
        self._ids = itertools.count(1)
        self._client = httpx.Client(
            headers={"accept": "application/json", **(headers or {})},
            auth=auth,
            timeout=timeout,
            transport=transport,
        )

    def execute(self, method: str, params: Sequence[Any]) -> Any:
        payload = _envelope(method, params, next(self._ids))
        try:
            response = self._client.post(self.url, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"{method}: {exc}") from exc

        if not response.is_success:
            raise RequestError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status=response.status_code,
                data=response.text,
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise RequestError(
                f"invalid JSON in response: {exc}", status=response.status_code
            ) from exc
        return _unwrap(body)

    def close(self) -> None:
        self._client.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.url!r})"


class InfuraTransport(HTTPTransport):
    """
    HTTP transport for the Infura gateway.

    The project id is part of the URL; an optional project secret is sent
    as HTTP basic auth with an empty user name.
    """

    def __init__(
        self,
        project_id: str,
        network: str = "mainnet",
        *,
        project_secret: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        if not project_id:
            raise EndpointError("Infura project id is required")
        self.project_id = project_id
        self.network = network
        auth = ("", project_secret) if project_secret else None
        super().__init__(
            INFURA_URL.format(network=network, project_id=project_id),
            auth=auth,
            **kwargs,
        )

    @classmethod
    def from_url(cls, url: str, **kwargs: Any) -> "InfuraTransport":
        """Build from a gateway URL such as ``https://mainnet.infura.io/v3/<id>``."""
        parsed = urlparse(url)
        host = parsed.hostname or ""
        if not host.endswith(".infura.io"):
            raise EndpointError(f"Not an Infura URL: {url!r}")
        segments = [part for part in parsed.path.split("/") if part]
        if not segments:
            raise EndpointError(f"Infura URL has no project id: {url!r}")
        return cls(segments[-1], network=host.split(".")[0], **kwargs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(network={self.network!r})"


# ============ IPC ============


def default_ipc_path() -> Path:
    """First existing socket among the platform-default node locations."""
    for candidate in DEFAULT_IPC_PATHS:
        if candidate.exists():
            return candidate
    raise TransportError(
        "No local node socket found (tried "
        + ", ".join(str(p) for p in DEFAULT_IPC_PATHS)
        + ")"
    )


class IPCTransport:
    """
    JSON-RPC over a local unix socket.

    The connection is dialled once.  Calls are serialised over the single
    socket; responses are read as a stream of concatenated JSON values and
    matched to the in-flight request by id.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path else default_ipc_path()
        self._sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            self._sock.connect(str(self.path))
        except OSError as exc:
            self._sock.close()
            raise TransportError(f"cannot dial {self.path}: {exc}") from exc

        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self._decoder = json.JSONDecoder()
        self._utf8 = codecs.getincrementaldecoder("utf-8")()
        self._buffer = ""

    def execute(self, method: str, params: Sequence[Any]) -> Any:
        with self._lock:
            request_id = next(self._ids)
            payload = json.dumps(_envelope(method, params, request_id)) + "\n"
            try:
                self._sock.sendall(payload.encode("utf-8"))
                while True:
                    message = self._read_message()
                    if isinstance(message, dict) and message.get("id") == request_id:
                        return _unwrap(message)
                    logger.debug("Skipping unmatched IPC message (waiting for id %d)", request_id)
            except OSError as exc:
                raise TransportError(f"{method}: {exc}") from exc

    def _read_message(self) -> Any:
        while True:
            text = self._buffer.lstrip()
            if text:
                try:
                    message, end = self._decoder.raw_decode(text)
                except json.JSONDecodeError as exc:
                    # Nodes end each value with a newline: an error before the
                    # first newline is a bad message, otherwise it is incomplete.
                    newline = text.find("\n")
                    if 0 <= newline and exc.pos <= newline:
                        self._buffer = text[newline + 1:]
                        raise TransportError(
                            f"malformed IPC response: {text[:newline]!r}"
                        ) from exc
                    message, end = None, -1
                if end >= 0:
                    self._buffer = text[end:]
                    return message

            chunk = self._sock.recv(65536)
            if not chunk:
                raise TransportError(f"connection to {self.path} closed")
            try:
                self._buffer = text + self._utf8.decode(chunk)
            except UnicodeDecodeError as exc:
                self._utf8.reset()
                self._buffer = ""
                raise TransportError(f"invalid UTF-8 from {self.path}: {exc}") from exc

    def close(self) -> None:
        self._sock.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self.path)!r})"
