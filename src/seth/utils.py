from __future__ import annotations

from eth_hash.auto import keccak

WORD_SIZE = 32


def keccak256(data: bytes) -> bytes:
    # Keccak-256, not NIST SHA3-256 (hashlib.sha3_256).
    return keccak(data)


def hash_string(value: str) -> bytes:
    return keccak256(value.encode("utf-8"))


def to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def from_hex(value: str) -> bytes:
    if not isinstance(value, str):
        raise ValueError(f"Expected hex string, got {type(value).__name__}")
    digits = value[2:] if value[:2] in ("0x", "0X") else value
    if len(digits) % 2:
        digits = "0" + digits
    return bytes.fromhex(digits)


def to_quantity(value: int) -> str:
    if value < 0:
        raise ValueError(f"Quantity must be non-negative: {value}")
    return hex(value)


def from_quantity(value: str) -> int:
    if not isinstance(value, str) or value[:2] not in ("0x", "0X"):
        raise ValueError(f"Invalid hex quantity: {value!r}")
    return int(value[2:] or "0", 16)


def pad_left(data: bytes, size: int = WORD_SIZE) -> bytes:
    return bytes(size - len(data)) + data


def pad_right(data: bytes, size: int = WORD_SIZE) -> bytes:
    return data + bytes(size - len(data))


def uint_word(value: int) -> bytes:
    return value.to_bytes(WORD_SIZE, "big")
