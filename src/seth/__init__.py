__all__ = [
    # Types
    "Kind",
    "Address",
    "Int",
    "Data",
    "AddressSlice",
    "IntSlice",
    "EtherType",
    "Hash",
    "Block",
    # ABI
    "encode_abi",
    "function_selector",
    "typecheck",
    "CallOpts",
    # Client
    "Client",
    "LATEST",
    "PENDING",
    "parse_block_specifier",
    "new_client",
    "resolve_transport",
    # Transports
    "Transport",
    "HTTPTransport",
    "InfuraTransport",
    "IPCTransport",
    # Errors
    "SethError",
    "EncodingError",
    "MalformedSignatureError",
    "ArityMismatchError",
    "TypeMismatchError",
    "EncodingOverflowError",
    "TransportError",
    "RequestError",
    "RPCError",
    "MalformedBlockSpecifierError",
    "EndpointError",
]

from .types import Address, AddressSlice, Block, Data, EtherType, Hash, Int, IntSlice, Kind
from .abi import encode_abi, function_selector, typecheck
from .call import CallOpts
from .errors import (
    ArityMismatchError,
    EncodingError,
    EncodingOverflowError,
    EndpointError,
    MalformedBlockSpecifierError,
    MalformedSignatureError,
    RequestError,
    RPCError,
    SethError,
    TransportError,
    TypeMismatchError,
)
from .rpc import (
    LATEST,
    PENDING,
    Client,
    HTTPTransport,
    InfuraTransport,
    IPCTransport,
    Transport,
    new_client,
    parse_block_specifier,
    resolve_transport,
)
