from __future__ import annotations

from typing import Any, Sequence

import pytest

from seth.types import Address


class FakeTransport:
    """In-memory transport returning canned results per method."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[Any]]] = []
        self.results: dict[str, Any] = {}
        self.error: Exception | None = None
        self.closed = False

    def respond(self, method: str, result: Any) -> None:
        self.results[method] = result

    def execute(self, method: str, params: Sequence[Any]) -> Any:
        self.calls.append((method, list(params)))
        if self.error is not None:
            raise self.error
        return self.results[method]

    def close(self) -> None:
        self.closed = True

    def __repr__(self) -> str:
        return "FakeTransport()"


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def one() -> Address:
    return Address(bytes(19) + b"\x01")


@pytest.fixture()
def token() -> Address:
    return Address.from_hex("0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48")
