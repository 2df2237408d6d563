"""Fixtures for market data tests.

Provides an in-memory stand-in for ``websockets.connect`` so the Finnhub
client and the arbiter can be driven end to end without a network.
"""

import asyncio
import json

import pytest

from tradegrid.market.store import PriceStore

_CLOSE = object()


class FakeSocket:
    """Async-iterable socket fed by the test through push()/close()/fail()."""

    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.exited = False
        self._inbox: asyncio.Queue = asyncio.Queue()

    async def __aenter__(self) -> "FakeSocket":
        return self

    async def __aexit__(self, *exc) -> bool:
        self.exited = True
        return False

    async def send(self, message: str) -> None:
        self.sent.append(json.loads(message))

    def push(self, message) -> None:
        self._inbox.put_nowait(message if isinstance(message, (str, bytes)) else json.dumps(message))

    def push_trade(self, symbol: str, price: float, volume: float = 100, t: int = 1707580800000) -> None:
        self.push({"type": "trade", "data": [{"s": symbol, "p": price, "v": volume, "t": t}]})

    def close(self) -> None:
        self._inbox.put_nowait(_CLOSE)

    def fail(self, exc: Exception) -> None:
        self._inbox.put_nowait(exc)

    def __aiter__(self) -> "FakeSocket":
        return self

    async def __anext__(self):
        item = await self._inbox.get()
        if item is _CLOSE:
            raise StopAsyncIteration
        if isinstance(item, Exception):
            raise item
        return item


class FakeConnector:
    """Replaces websockets.connect. Hands out a new FakeSocket per call.

    Set ``failures`` to make the next N connection attempts raise.
    """

    def __init__(self) -> None:
        self.urls: list[str] = []
        self.sockets: list[FakeSocket] = []
        self.failures = 0

    def __call__(self, url: str) -> FakeSocket:
        self.urls.append(url)
        if self.failures:
            self.failures -= 1
            raise ConnectionRefusedError("connection refused")
        socket = FakeSocket()
        self.sockets.append(socket)
        return socket

    @property
    def attempts(self) -> int:
        return len(self.urls)

    @property
    def latest(self) -> FakeSocket:
        return self.sockets[-1]


@pytest.fixture
def store() -> PriceStore:
    return PriceStore()


@pytest.fixture
def connector() -> FakeConnector:
    return FakeConnector()


@pytest.fixture
def eventually():
    """Poll ``predicate`` until true or fail after ``timeout`` seconds."""

    async def _eventually(predicate, timeout: float = 1.0, interval: float = 0.005) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not predicate():
            if loop.time() > deadline:
                raise AssertionError(f"condition not met within {timeout:.2f}s")
            await asyncio.sleep(interval)

    return _eventually
