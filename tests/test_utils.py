"""Unit tests for utils.py functions."""

from __future__ import annotations

import pytest

from seth.utils import (
    from_hex,
    from_quantity,
    hash_string,
    keccak256,
    pad_left,
    pad_right,
    to_hex,
    to_quantity,
    uint_word,
)


class TestKeccak256:
    """Tests for keccak256 (not NIST SHA3-256)."""

    def test_empty_bytes(self) -> None:
        result = keccak256(b"")
        assert result.hex() == "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"

    def test_differs_from_sha3(self) -> None:
        import hashlib

        assert keccak256(b"") != hashlib.sha3_256(b"").digest()

    def test_hash_string_is_utf8(self) -> None:
        assert hash_string("transfer(address,uint256)") == keccak256(b"transfer(address,uint256)")
        assert hash_string("transfer(address,uint256)").hex().startswith("a9059cbb")


class TestHex:
    """Tests for to_hex / from_hex."""

    def test_to_hex(self) -> None:
        assert to_hex(b"") == "0x"
        assert to_hex(b"\x00\xff") == "0x00ff"

    def test_from_hex_prefixes(self) -> None:
        assert from_hex("0x00ff") == b"\x00\xff"
        assert from_hex("0X00FF") == b"\x00\xff"
        assert from_hex("00ff") == b"\x00\xff"

    def test_from_hex_odd_length(self) -> None:
        assert from_hex("0x1") == b"\x01"

    def test_from_hex_invalid(self) -> None:
        with pytest.raises(ValueError):
            from_hex("0xzz")
        with pytest.raises(ValueError):
            from_hex(12)  # type: ignore[arg-type]


class TestQuantity:
    """Tests for hex quantities."""

    def test_to_quantity(self) -> None:
        assert to_quantity(0) == "0x0"
        assert to_quantity(1024) == "0x400"

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            to_quantity(-1)

    def test_from_quantity(self) -> None:
        assert from_quantity("0x400") == 1024
        assert from_quantity("0x") == 0

    def test_from_quantity_requires_prefix(self) -> None:
        with pytest.raises(ValueError):
            from_quantity("400")
        with pytest.raises(ValueError):
            from_quantity(None)  # type: ignore[arg-type]


class TestPadding:
    """Tests for 32-byte word helpers."""

    def test_pad_left(self) -> None:
        assert pad_left(b"\x01") == bytes(31) + b"\x01"

    def test_pad_right(self) -> None:
        assert pad_right(b"\x01") == b"\x01" + bytes(31)

    def test_uint_word(self) -> None:
        assert uint_word(64) == bytes(31) + b"\x40"
        assert len(uint_word(0)) == 32
