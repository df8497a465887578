"""
RPC client.

Wraps one Transport and exposes typed Ethereum JSON-RPC calls.  Every
operation raises RPCError on failure, with the transport or decoding error
as its ``__cause__``.  The client keeps no state besides its transport.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence, TypeVar

from ..call import CallOpts
from ..errors import MalformedBlockSpecifierError, RPCError, TransportError
from ..types import Address, Block, Data, Hash, Int
from ..utils import from_hex, from_quantity, to_quantity
from .transport import Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Block sentinels
LATEST = -1
PENDING = -2

_SENTINEL_NAMES = {LATEST: "latest", PENDING: "pending"}


def parse_block_specifier(text: str) -> int:
    """
    Convert a block specifier to a block number or sentinel.

    ``earliest`` is block 0, ``latest`` and ``pending`` map to LATEST and
    PENDING, anything else is parsed as a decimal or 0x-prefixed integer.

    Raises:
        MalformedBlockSpecifierError: If the text is not a valid specifier
    """
    if text == "earliest":
        return 0
    if text == "latest":
        return LATEST
    if text == "pending":
        return PENDING
    if text != text.strip():
        raise MalformedBlockSpecifierError(f"bad block specifier {text!r}: surrounding whitespace")
    try:
        number = int(text, 0)
    except ValueError as exc:
        raise MalformedBlockSpecifierError(f"bad block specifier {text!r}: {exc}") from exc
    if number < 0:
        raise MalformedBlockSpecifierError(f"bad block specifier {text!r}: negative")
    return number


def block_param(block: int) -> str:
    """Wire form of a block selector: ``"latest"``, ``"pending"`` or a hex quantity."""
    if block in _SENTINEL_NAMES:
        return _SENTINEL_NAMES[block]
    if block < 0:
        raise MalformedBlockSpecifierError(f"bad block number {block}")
    return to_quantity(block)


class Client:
    """
    Ethereum JSON-RPC client.

    Safe for concurrent use when its transport is.

    Example::

        client = Client(HTTPTransport("http://localhost:8545"))
        word = client.storage_at(token, Hash.from_int(0), PENDING)
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    def _do(
        self,
        method: str,
        params: Sequence[Any],
        decode: Callable[[Any], T],
    ) -> T:
        logger.debug("RPC %s via %r", method, self.transport)
        try:
            result = self.transport.execute(method, params)
        except TransportError as exc:
            raise RPCError(method, str(exc)) from exc
        if result is None:
            raise RPCError(method, "empty result")
        try:
            return decode(result)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise RPCError(method, f"cannot decode result {result!r}: {exc}") from exc

    # ============ Calls ============

    def send_call(self, opts: CallOpts) -> Hash:
        """Submit a state-changing call; returns the transaction hash."""
        return self._do("eth_sendTransaction", [opts.to_json()], Hash.from_json)

    def estimate_gas(self, opts: CallOpts) -> Int:
        """Estimate the gas used by ``opts``, evaluated in the pending block."""
        return self._do("eth_estimateGas", [opts.to_json(), "pending"], Int.from_json)

    def const_call(self, opts: CallOpts, pending: bool = False) -> Data:
        """
        Execute a call without mining a transaction.

        Runs against the pending block if ``pending`` is true, otherwise the
        latest block.  The raw return data is left for the caller to decode.
        """
        block = "pending" if pending else "latest"
        return self._do("eth_call", [opts.to_json(), block], Data.from_json)

    # ============ State ============

    def storage_at(self, address: Address, slot: Hash, block: int = LATEST) -> Hash:
        """Read the 32-byte storage word at ``slot`` of ``address``."""
        params = [address.to_json(), slot.to_json(), block_param(block)]
        return self._do("eth_getStorageAt", params, _storage_word)

    def get_code(self, address: Address, block: int = LATEST) -> bytes:
        return self._do("eth_getCode", [address.to_json(), block_param(block)], from_hex)

    def get_balance(self, address: Address, block: int = LATEST) -> Int:
        return self._do("eth_getBalance", [address.to_json(), block_param(block)], Int.from_json)

    # ============ Chain ============

    def get_block(self, number: int, include_transactions: bool = False) -> Block:
        params = [block_param(number), include_transactions]
        return self._do("eth_getBlockByNumber", params, Block.from_json)

    def block_number(self) -> int:
        return self._do("eth_blockNumber", [], from_quantity)

    def gas_price(self) -> Int:
        return self._do("eth_gasPrice", [], Int.from_json)

    # ============ Lifecycle ============

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def _storage_word(value: str) -> Hash:
    # Some nodes strip leading zeros from storage words.
    raw = from_hex(value)
    if len(raw) > 32:
        raise ValueError(f"storage word longer than 32 bytes: {value}")
    return Hash(bytes(32 - len(raw)) + raw)
