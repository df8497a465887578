"""
Call descriptor for transactions and read-only contract calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from .abi import encode_abi
from .types import Address, Data, EtherType, Int


@dataclass
class CallOpts:
    """
    Describes a transaction (contract call).

    Attributes:
        sender: Sender address (``from`` on the wire)
        to: Contract address
        gas: Gas offered for the call
        gas_price: Price offered per unit of gas
        value: Wei sent with the call
        data: Input to the call
    """

    sender: Optional[Address] = None
    to: Optional[Address] = None
    gas: Optional[Int] = None
    gas_price: Optional[Int] = None
    value: Optional[Int] = None
    data: Data = field(default_factory=Data)

    def encode_call(self, signature: str, *args: EtherType) -> "CallOpts":
        """
        Set ``data`` to the ABI encoding of ``signature`` and ``args``.

        The target address is not checked against the function; the caller
        must address the right contract.  For ``transfer(address,uint256)``
        this raises unless exactly an Address and an Int are given.
        """
        self.data = Data(encode_abi(signature, *args))
        return self

    def to_json(self) -> dict[str, Any]:
        """JSON-RPC transaction object; unset fields are omitted."""
        result: dict[str, Any] = {}
        if self.sender is not None:
            result["from"] = self.sender.to_json()
        if self.to is not None:
            result["to"] = self.to.to_json()
        if self.gas is not None:
            result["gas"] = self.gas.to_json()
        if self.gas_price is not None:
            result["gasPrice"] = self.gas_price.to_json()
        if self.value is not None:
            result["value"] = self.value.to_json()
        result["data"] = self.data.to_json()
        return result
