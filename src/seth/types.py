"""
Value types for the Ethereum Contract ABI and the JSON-RPC wire format.

The set of ABI-encodable values is closed: Address, Int, Data,
AddressSlice and IntSlice.  Each carries a ``kind`` tag, and the tag
decides whether the value is static (encoded in place) or dynamic
(encoded behind an offset).

Scalars render themselves into a single 32-byte word.  Slices render the
concatenation of their elements only; the element-count word is emitted by
the encoder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Iterator, Optional, Union

from .errors import EncodingOverflowError
from .utils import WORD_SIZE, from_hex, from_quantity, pad_left, pad_right, to_hex, to_quantity

ADDRESS_SIZE = 20
HASH_SIZE = 32


class Kind(Enum):
    ADDRESS = "address"
    INT = "int"
    DATA = "data"
    ADDRESS_SLICE = "address[]"
    INT_SLICE = "int[]"

    @property
    def dynamic(self) -> bool:
        return self in (Kind.ADDRESS_SLICE, Kind.INT_SLICE)


def _fixed_bytes(value: Any, size: int, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} requires bytes, got {type(value).__name__}")
    value = bytes(value)
    if len(value) != size:
        raise ValueError(f"{name} must be {size} bytes, got {len(value)}")
    return value


# ============ Primitive types ============


@dataclass(frozen=True)
class Address:
    """20-byte account or contract address."""

    value: bytes
    kind: ClassVar[Kind] = Kind.ADDRESS

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _fixed_bytes(self.value, ADDRESS_SIZE, "Address"))

    @classmethod
    def from_hex(cls, text: str) -> "Address":
        digits = text[2:] if text[:2] in ("0x", "0X") else text
        if len(digits) != 2 * ADDRESS_SIZE:
            raise ValueError(f"Invalid address: {text!r}")
        return cls(bytes.fromhex(digits))

    from_json = from_hex

    def to_json(self) -> str:
        return to_hex(self.value)

    def encode_abi(self) -> bytes:
        return pad_left(self.value)

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.to_json()


@dataclass(frozen=True)
class Int:
    """
    Integer value of a 256-bit EVM word.

    Only 0 <= value < 2**256 can be ABI-encoded; negative values raise
    EncodingOverflowError instead of being encoded as their magnitude.
    """

    value: int
    kind: ClassVar[Kind] = Kind.INT

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Int requires an int, got {type(self.value).__name__}")

    @classmethod
    def parse(cls, text: str) -> "Int":
        """Parse decimal or 0x-prefixed hexadecimal text."""
        return cls(int(text, 0))

    @classmethod
    def from_json(cls, value: str) -> "Int":
        return cls(from_quantity(value))

    def to_json(self) -> str:
        return to_quantity(self.value)

    def encode_abi(self) -> bytes:
        if self.value < 0:
            raise EncodingOverflowError(f"ABI encoding: negative integer {self.value}")
        if self.value.bit_length() > 8 * WORD_SIZE:
            raise EncodingOverflowError("ABI encoding: integer overflow")
        return self.value.to_bytes(WORD_SIZE, "big")

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Data:
    """Opaque byte string; a single ABI word holds at most 32 bytes of it."""

    value: bytes = b""
    kind: ClassVar[Kind] = Kind.DATA

    def __post_init__(self) -> None:
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(f"Data requires bytes, got {type(self.value).__name__}")
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def from_json(cls, value: str) -> "Data":
        return cls(from_hex(value))

    from_hex = from_json

    def to_json(self) -> str:
        return to_hex(self.value)

    def encode_abi(self) -> bytes:
        if len(self.value) > WORD_SIZE:
            raise EncodingOverflowError(
                f"can't encode data with len {len(self.value)} greater than {WORD_SIZE}"
            )
        return pad_right(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __bytes__(self) -> bytes:
        return self.value


# ============ Slice types ============


@dataclass(frozen=True)
class AddressSlice:
    items: tuple[Address, ...] = ()
    kind: ClassVar[Kind] = Kind.ADDRESS_SLICE

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Address):
                raise TypeError(f"AddressSlice element is not an Address: {item!r}")
        object.__setattr__(self, "items", items)

    def encode_abi(self) -> bytes:
        return b"".join(item.encode_abi() for item in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Address]:
        return iter(self.items)


@dataclass(frozen=True)
class IntSlice:
    items: tuple[Int, ...] = ()
    kind: ClassVar[Kind] = Kind.INT_SLICE

    def __post_init__(self) -> None:
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Int):
                raise TypeError(f"IntSlice element is not an Int: {item!r}")
        object.__setattr__(self, "items", items)

    def encode_abi(self) -> bytes:
        return b"".join(item.encode_abi() for item in self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Int]:
        return iter(self.items)


EtherType = Union[Address, Int, Data, AddressSlice, IntSlice]
EtherSlice = Union[AddressSlice, IntSlice]

ETHER_TYPES = (Address, Int, Data, AddressSlice, IntSlice)


# ============ Wire-only types ============


@dataclass(frozen=True)
class Hash:
    """32-byte hash: transaction ids, block hashes, storage slots and words."""

    value: bytes

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _fixed_bytes(self.value, HASH_SIZE, "Hash"))

    @classmethod
    def from_hex(cls, text: str) -> "Hash":
        return cls(from_hex(text))

    from_json = from_hex

    @classmethod
    def from_int(cls, value: int) -> "Hash":
        return cls(value.to_bytes(HASH_SIZE, "big"))

    def to_json(self) -> str:
        return to_hex(self.value)

    def __int__(self) -> int:
        return int.from_bytes(self.value, "big")

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.to_json()


@dataclass(frozen=True)
class Block:
    """
    Block as returned by ``eth_getBlockByNumber``.

    Attributes:
        number: Block number (None for the pending block on some nodes)
        hash: Block hash (None for the pending block)
        transactions: Transaction hashes, or full transaction objects
            when the block was requested with transactions included
        raw: The JSON object as received
    """

    number: Optional[int]
    hash: Optional[Hash]
    parent_hash: Hash
    timestamp: int
    miner: Optional[Address]
    gas_limit: int
    gas_used: int
    transactions: tuple[Union[Hash, dict[str, Any]], ...] = ()
    raw: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> "Block":
        transactions = tuple(
            tx if isinstance(tx, dict) else Hash.from_hex(tx)
            for tx in payload.get("transactions", [])
        )
        number = payload.get("number")
        block_hash = payload.get("hash")
        miner = payload.get("miner")
        return cls(
            number=from_quantity(number) if number is not None else None,
            hash=Hash.from_hex(block_hash) if block_hash is not None else None,
            parent_hash=Hash.from_hex(payload["parentHash"]),
            timestamp=from_quantity(payload["timestamp"]),
            miner=Address.from_hex(miner) if miner is not None else None,
            gas_limit=from_quantity(payload["gasLimit"]),
            gas_used=from_quantity(payload["gasUsed"]),
            transactions=transactions,
            raw=payload,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.raw
