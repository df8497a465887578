"""
seth CLI

Command-line front end for the seth RPC client.

Commands:
  encode    - ABI-encode a function call
  call      - Execute a read-only contract call
  estimate  - Estimate gas for a call
  send      - Submit a call as a transaction
  storage   - Read a contract storage word
  code      - Show contract code
  balance   - Show account balance
  block     - Show a block
"""

from __future__ import annotations

import json
import logging
import sys
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Optional

import click
from eth_abi import decode
from eth_abi.exceptions import DecodingError, ParseError

from .abi import encode_abi, parse_signature
from .call import CallOpts
from .errors import ArityMismatchError, SethError
from .rpc.client import Client, parse_block_specifier
from .rpc.endpoint import new_client
from .types import Address, AddressSlice, Data, EtherType, Hash, Int, IntSlice
from .utils import to_hex


# ============ Constants ============

VERSION = "0.1.0"


# ============ Helpers ============


@contextmanager
def _reporting() -> Iterator[None]:
    """Print seth errors in red and exit with the error's exit code."""
    try:
        yield
    except SethError as exc:
        click.secho(f"ERROR: {exc}", fg="red", err=True)
        sys.exit(exc.exit_code)


def _client(ctx: click.Context) -> Client:
    return new_client(ctx.obj.get("url"))


def parse_arg(declared: str, text: str) -> EtherType:
    """
    Parse one textual argument for a declared ABI type.

    Lists are comma-separated.  ``bytes32`` takes 0x-hex as Data and any
    other text as an integer.
    """
    if declared.endswith("[]"):
        parts = [part for part in text.split(",") if part]
        if declared[:-2] == "address":
            return AddressSlice([Address.from_hex(part) for part in parts])
        return IntSlice([Int.parse(part) for part in parts])
    if declared == "address":
        return Address.from_hex(text)
    if declared == "bytes32" and text[:2] in ("0x", "0X"):
        return Data.from_hex(text)
    return Int.parse(text)


def parse_args(signature: str, texts: tuple[str, ...]) -> list[EtherType]:
    _, types = parse_signature(signature)
    if len(types) != len(texts):
        raise ArityMismatchError(len(types), len(texts))
    try:
        return [parse_arg(declared, text) for declared, text in zip(types, texts)]
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="ARGS") from exc


def _address(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[Address]:
    if value is None:
        return None
    try:
        return Address.from_hex(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _int(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[Int]:
    if value is None:
        return None
    try:
        parsed = Int.parse(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    if parsed.value < 0:
        raise click.BadParameter(f"must be non-negative: {value}")
    return parsed


def _block(ctx: click.Context, param: click.Parameter, value: str) -> int:
    try:
        return parse_block_specifier(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc


def _format_value(value: Any) -> str:
    if isinstance(value, bytes):
        return to_hex(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_format_value(v) for v in value) + "]"
    return str(value)


def call_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options and arguments shared by call, estimate and send."""
    decorators = [
        click.option("--to", required=True, callback=_address, help="Contract address"),
        click.option("--from", "sender", callback=_address, help="Sender address"),
        click.option("--gas", callback=_int, help="Gas limit"),
        click.option("--gas-price", callback=_int, help="Gas price in wei"),
        click.option("--value", callback=_int, help="Value in wei"),
        click.argument("signature"),
        click.argument("args", nargs=-1),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _build_call(
    to: Address,
    sender: Optional[Address],
    gas: Optional[Int],
    gas_price: Optional[Int],
    value: Optional[Int],
    signature: str,
    args: tuple[str, ...],
) -> CallOpts:
    opts = CallOpts(sender=sender, to=to, gas=gas, gas_price=gas_price, value=value)
    return opts.encode_call(signature, *parse_args(signature, args))


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="seth")
@click.option("--url", envvar="SETH_URL", default=None, help="HTTP URL or IPC socket path")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
@click.pass_context
def cli(ctx: click.Context, url: Optional[str], verbose: bool) -> None:
    """seth - Ethereum JSON-RPC client."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    ctx.obj = {"url": url}


# ============ Encoding ============


@cli.command()
@click.argument("signature")
@click.argument("args", nargs=-1)
def encode(signature: str, args: tuple[str, ...]) -> None:
    """Print the ABI encoding of SIGNATURE applied to ARGS."""
    with _reporting():
        click.echo(to_hex(encode_abi(signature, *parse_args(signature, args))))


# ============ Calls ============


@cli.command()
@call_options
@click.option("--pending", is_flag=True, help="Execute against the pending block")
@click.option("--returns", default=None, help="Comma-separated return types to decode")
@click.pass_context
def call(ctx: click.Context, pending: bool, returns: Optional[str], **kwargs: Any) -> None:
    """Execute a read-only call of SIGNATURE on --to."""
    with _reporting():
        opts = _build_call(**kwargs)
        with _client(ctx) as client:
            result = client.const_call(opts, pending=pending)

    if not returns:
        click.echo(result.to_json())
        return
    try:
        values = decode(returns.split(","), bytes(result))
    except (DecodingError, ParseError, ValueError) as exc:
        click.secho(f"ERROR: cannot decode result as {returns}: {exc}", fg="red", err=True)
        sys.exit(1)
    for value in values:
        click.echo(_format_value(value))


@cli.command()
@call_options
@click.pass_context
def estimate(ctx: click.Context, **kwargs: Any) -> None:
    """Estimate the gas needed by a call."""
    with _reporting():
        opts = _build_call(**kwargs)
        with _client(ctx) as client:
            click.echo(str(client.estimate_gas(opts)))


@cli.command()
@call_options
@click.pass_context
def send(ctx: click.Context, **kwargs: Any) -> None:
    """Submit a call as a transaction from the node's account."""
    with _reporting():
        opts = _build_call(**kwargs)
        with _client(ctx) as client:
            click.echo(str(client.send_call(opts)))


# ============ State ============


@cli.command()
@click.argument("address", callback=_address)
@click.argument("slot")
@click.argument("block", default="latest", callback=_block)
@click.pass_context
def storage(ctx: click.Context, address: Address, slot: str, block: int) -> None:
    """Read storage SLOT of ADDRESS."""
    try:
        key = Hash.from_int(int(slot, 0))
    except (ValueError, OverflowError) as exc:
        raise click.BadParameter(str(exc), param_hint="SLOT") from exc
    with _reporting():
        with _client(ctx) as client:
            click.echo(str(client.storage_at(address, key, block)))


@cli.command()
@click.argument("address", callback=_address)
@click.option("--block", default="latest", callback=_block, help="Block specifier")
@click.pass_context
def code(ctx: click.Context, address: Address, block: int) -> None:
    """Show the code deployed at ADDRESS."""
    with _reporting():
        with _client(ctx) as client:
            click.echo(to_hex(client.get_code(address, block)))


@cli.command()
@click.argument("address", callback=_address)
@click.option("--block", default="latest", callback=_block, help="Block specifier")
@click.pass_context
def balance(ctx: click.Context, address: Address, block: int) -> None:
    """Show the balance of ADDRESS in wei."""
    with _reporting():
        with _client(ctx) as client:
            click.echo(str(client.get_balance(address, block)))


# ============ Chain ============


@cli.command()
@click.argument("block", default="latest", callback=_block)
@click.option("--txs", is_flag=True, help="Include full transactions")
@click.pass_context
def block(ctx: click.Context, block: int, txs: bool) -> None:
    """Show BLOCK (number, earliest, latest or pending) as JSON."""
    with _reporting():
        with _client(ctx) as client:
            result = client.get_block(block, include_transactions=txs)
    click.echo(json.dumps(result.to_dict(), indent=2))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
