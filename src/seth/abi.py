"""
Contract ABI encoding.

Encodes a function call as a 4-byte selector followed by the argument area:
one 32-byte word per argument in declaration order (the value itself for
static arguments, an offset for dynamic ones), then the dynamic segments.

Arguments are typechecked against the signature before anything is
encoded, and encoding errors are raised before any output is returned.

Example:
    >>> encode_abi("transfer(address,uint256)", Address(bytes(19) + b"\\x01"), Int(1000)).hex()[:8]
    'a9059cbb'
"""

from __future__ import annotations

from typing import Sequence

from .errors import (
    ArityMismatchError,
    MalformedSignatureError,
    TypeMismatchError,
)
from .types import ETHER_TYPES, EtherType, Kind
from .utils import WORD_SIZE, hash_string, uint_word

SELECTOR_SIZE = 4

ILLEGAL_CHARS = " \t\n\b-+/~!@#$%^&*=|;:\"<>\\?"

INT_TYPES = frozenset({"uint", "uint256", "int", "int256"})

# Declared types not listed here (and not ending in "[]") are not checked.
ACCEPTED_KINDS: dict[str, frozenset[Kind]] = {
    "address": frozenset({Kind.ADDRESS}),
    "bytes32": frozenset({Kind.DATA, Kind.INT}),
    **{name: frozenset({Kind.INT}) for name in INT_TYPES},
}


def function_selector(signature: str) -> bytes:
    """First 4 bytes of the Keccak-256 hash of the exact signature string."""
    return hash_string(signature)[:SELECTOR_SIZE]


def parse_signature(signature: str) -> tuple[str, list[str]]:
    """
    Split ``name(type0,type1,...)`` into its name and declared types.

    Raises:
        MalformedSignatureError: On illegal characters or bad parentheses
    """
    bad = sorted({c for c in signature if c in ILLEGAL_CHARS})
    if bad:
        raise MalformedSignatureError(
            f"illegal characters {''.join(bad)!r} in function signature {signature!r}"
        )
    if signature.count("(") != 1:
        raise MalformedSignatureError(f"{signature} has no single left paren")
    if signature.count(")") != 1 or not signature.endswith(")"):
        raise MalformedSignatureError(f"{signature} has a bad right paren")

    name, _, rest = signature.partition("(")
    inner = rest[:-1]
    if not inner:
        return name, []

    types = inner.split(",")
    if "" in types:
        raise MalformedSignatureError(f"{signature} has an empty argument type")
    return name, types


def typecheck(signature: str, args: Sequence[EtherType]) -> list[str]:
    """
    Check that ``args`` match the argument types declared in ``signature``.

    Any ``[]`` type accepts any slice; element types are not compared.

    Returns:
        The declared argument types

    Raises:
        MalformedSignatureError, ArityMismatchError, TypeMismatchError
    """
    _, types = parse_signature(signature)
    if len(types) != len(args):
        raise ArityMismatchError(len(types), len(args))

    for index, (declared, arg) in enumerate(zip(types, args)):
        if not isinstance(arg, ETHER_TYPES):
            raise TypeMismatchError(
                f"argument {index} is not an ABI value: {type(arg).__name__}"
            )
        if declared.endswith("[]"):
            if not arg.kind.dynamic:
                raise TypeMismatchError(f"argument {index} ({declared}) is not a slice")
            continue
        accepted = ACCEPTED_KINDS.get(declared)
        if accepted is not None and arg.kind not in accepted:
            raise TypeMismatchError(
                f"argument {index} ({declared}) cannot be a {type(arg).__name__}"
            )
    return types


def encode_abi(signature: str, *args: EtherType) -> bytes:
    """
    Encode a function call: selector, static area, then dynamic segments.

    Offsets in the static area are measured from the first byte after the
    selector.

    Raises:
        EncodingError: If the signature or arguments are invalid, or a
            value does not fit its word
    """
    typecheck(signature, args)

    head: list[bytes] = []
    tail: list[bytes] = []
    offset = WORD_SIZE * len(args)
    for arg in args:
        if arg.kind.dynamic:
            head.append(uint_word(offset))
            segment = uint_word(len(arg)) + arg.encode_abi()
            tail.append(segment)
            offset += len(segment)
        else:
            head.append(arg.encode_abi())

    return function_selector(signature) + b"".join(head) + b"".join(tail)
