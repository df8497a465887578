"""
Error hierarchy for seth.

Every error carries an ``exit_code`` used by the CLI.  Encoding errors are
programmer errors and are raised before any calldata is produced; transport
and RPC errors are ordinary runtime failures that the caller may handle.
"""

from __future__ import annotations

from typing import Any, Optional


class SethError(RuntimeError):
    exit_code: int = 1


# ============ ABI encoding ============


class EncodingError(SethError):
    exit_code = 2


class MalformedSignatureError(EncodingError):
    pass


class ArityMismatchError(EncodingError):
    def __init__(self, declared: int, given: int):
        super().__init__(f"mismatched argument lists: {declared} args vs {given} given")
        self.declared = declared
        self.given = given


class TypeMismatchError(EncodingError):
    pass


class EncodingOverflowError(EncodingError):
    pass


# ============ Transport / RPC ============


class TransportError(SethError):
    exit_code = 3


class RequestError(TransportError):
    """Non-success response: an HTTP status outside 2xx or a JSON-RPC error object."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message)
        self.status = status
        self.code = code
        self.data = data


class RPCError(SethError):
    exit_code = 4

    def __init__(self, method: str, reason: str):
        super().__init__(f"{method}: {reason}")
        self.method = method


# ============ Configuration / parsing ============


class MalformedBlockSpecifierError(SethError, ValueError):
    exit_code = 5


class EndpointError(SethError):
    exit_code = 6
