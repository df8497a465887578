"""Unit tests for the ABI value types."""

from __future__ import annotations

import pytest

from seth.errors import EncodingOverflowError
from seth.types import (
    Address,
    AddressSlice,
    Block,
    Data,
    Hash,
    Int,
    IntSlice,
    Kind,
)


class TestAddress:
    """Tests for Address."""

    def test_from_hex_roundtrips_to_json(self) -> None:
        text = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"
        assert Address.from_hex(text).to_json() == text

    def test_accepts_uppercase_and_no_prefix(self) -> None:
        addr = Address.from_hex("A0B86991C6218B36C1D19D4A2E9EB0CE3606EB48")
        assert str(addr) == "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"

    def test_rejects_wrong_length(self) -> None:
        with pytest.raises(ValueError):
            Address.from_hex("0x1234")
        with pytest.raises(ValueError):
            Address(bytes(21))

    def test_is_immutable(self, one: Address) -> None:
        with pytest.raises(AttributeError):
            one.value = bytes(20)  # type: ignore[misc]

    def test_encodes_left_padded(self, one: Address) -> None:
        word = one.encode_abi()
        assert len(word) == 32
        assert word == bytes(31) + b"\x01"

    def test_is_static(self, one: Address) -> None:
        assert one.kind is Kind.ADDRESS
        assert not one.kind.dynamic


class TestInt:
    """Tests for Int."""

    def test_encodes_right_aligned(self) -> None:
        assert Int(1000).encode_abi() == bytes(30) + b"\x03\xe8"

    def test_max_word(self) -> None:
        assert Int(2**256 - 1).encode_abi() == b"\xff" * 32

    def test_33_byte_magnitude_overflows(self) -> None:
        with pytest.raises(EncodingOverflowError):
            Int(2**256).encode_abi()
        with pytest.raises(EncodingOverflowError):
            Int(1 << 263).encode_abi()

    def test_negative_overflows(self) -> None:
        with pytest.raises(EncodingOverflowError):
            Int(-1).encode_abi()

    def test_rejects_non_int(self) -> None:
        with pytest.raises(TypeError):
            Int("12")  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Int(True)

    def test_parse_decimal_and_hex(self) -> None:
        assert Int.parse("1000") == Int(1000)
        assert Int.parse("0x10") == Int(16)

    def test_json_quantity(self) -> None:
        assert Int(0).to_json() == "0x0"
        assert Int(1000).to_json() == "0x3e8"
        assert Int.from_json("0x3e8") == Int(1000)


class TestData:
    """Tests for Data."""

    def test_encodes_right_padded(self) -> None:
        assert Data(b"\xab\xcd").encode_abi() == b"\xab\xcd" + bytes(30)

    def test_empty_encodes_to_zero_word(self) -> None:
        assert Data().encode_abi() == bytes(32)

    def test_full_word(self) -> None:
        assert Data(b"\x11" * 32).encode_abi() == b"\x11" * 32

    def test_longer_than_word_overflows(self) -> None:
        with pytest.raises(EncodingOverflowError):
            Data(bytes(33)).encode_abi()

    def test_json(self) -> None:
        assert Data(b"\x01\x02").to_json() == "0x0102"
        assert Data.from_json("0x") == Data(b"")


class TestSlices:
    """Tests for AddressSlice and IntSlice."""

    def test_address_slice_encodes_elements_without_length(self, one: Address, token: Address) -> None:
        s = AddressSlice([one, token])
        assert len(s) == 2
        assert s.encode_abi() == one.encode_abi() + token.encode_abi()

    def test_int_slice(self) -> None:
        s = IntSlice([Int(1), Int(2), Int(3)])
        assert len(s) == 3
        assert s.encode_abi() == b"".join(Int(i).encode_abi() for i in (1, 2, 3))

    def test_empty_slice(self) -> None:
        assert AddressSlice().encode_abi() == b""
        assert len(IntSlice()) == 0

    def test_slices_are_dynamic(self) -> None:
        assert AddressSlice.kind.dynamic
        assert IntSlice.kind.dynamic

    def test_rejects_mixed_elements(self, one: Address) -> None:
        with pytest.raises(TypeError):
            IntSlice([Int(1), one])  # type: ignore[list-item]
        with pytest.raises(TypeError):
            AddressSlice([Int(1)])  # type: ignore[list-item]

    def test_element_overflow_propagates(self) -> None:
        with pytest.raises(EncodingOverflowError):
            IntSlice([Int(1), Int(2**256)]).encode_abi()


class TestHash:
    """Tests for Hash."""

    def test_from_int(self) -> None:
        h = Hash.from_int(5)
        assert h.to_json() == "0x" + "00" * 31 + "05"
        assert int(h) == 5

    def test_requires_32_bytes(self) -> None:
        with pytest.raises(ValueError):
            Hash(bytes(31))


class TestBlock:
    """Tests for Block.from_json."""

    def test_parses_header_fields(self, one: Address) -> None:
        payload = {
            "number": "0x10",
            "hash": "0x" + "11" * 32,
            "parentHash": "0x" + "22" * 32,
            "timestamp": "0x5f5e100",
            "miner": one.to_json(),
            "gasLimit": "0x1c9c380",
            "gasUsed": "0x5208",
            "transactions": ["0x" + "33" * 32],
        }
        block = Block.from_json(payload)
        assert block.number == 16
        assert block.hash == Hash(b"\x11" * 32)
        assert block.parent_hash == Hash(b"\x22" * 32)
        assert block.timestamp == 100_000_000
        assert block.miner == one
        assert block.gas_limit == 30_000_000
        assert block.gas_used == 21_000
        assert block.transactions == (Hash(b"\x33" * 32),)
        assert block.to_dict() is payload

    def test_pending_block_without_number(self) -> None:
        payload = {
            "number": None,
            "hash": None,
            "parentHash": "0x" + "22" * 32,
            "timestamp": "0x1",
            "miner": None,
            "gasLimit": "0x1",
            "gasUsed": "0x0",
            "transactions": [{"hash": "0x" + "33" * 32}],
        }
        block = Block.from_json(payload)
        assert block.number is None
        assert block.hash is None
        assert block.transactions == ({"hash": "0x" + "33" * 32},)
