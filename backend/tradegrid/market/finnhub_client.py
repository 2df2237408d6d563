"""Finnhub websocket client for live trade data."""

from __future__ import annotations

import asyncio
import json
import logging
import math
import time
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Any

import websockets

from .baseline_prices import TRACKED_SYMBOLS
from .events import EventSink, FeedEvent
from .interface import QuoteSource
from .models import SOURCE_LIVE, Quote, Trade
from .store import PriceStore

logger = logging.getLogger(__name__)

DEFAULT_WS_URL = "wss://ws.finnhub.io"


def parse_trade_message(raw: str | bytes | dict) -> list[Trade]:
    """Parse one inbound Finnhub message into trades.

    Only ``{"type": "trade", "data": [...]}`` messages carry trades. Anything
    else (pings, subscription acks, garbage) yields an empty list. Individual
    malformed entries inside a trade message are skipped.
    """
    message: Any = raw
    if isinstance(raw, (bytes, bytearray)):
        message = raw.decode("utf-8", errors="replace")
    if isinstance(message, str):
        try:
            message = json.loads(message)
        except ValueError:
            logger.debug("Ignoring non-JSON message: %.80r", message)
            return []

    if not isinstance(message, dict) or message.get("type") != "trade":
        return []
    data = message.get("data")
    if not isinstance(data, list):
        return []

    trades: list[Trade] = []
    for entry in data:
        try:
            trades.append(_parse_trade(entry))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Skipping trade entry %r: %s", entry, e)
    return trades


def _parse_trade(entry: dict) -> Trade:
    symbol = entry["s"]
    if not isinstance(symbol, str) or not symbol:
        raise ValueError("missing symbol")

    price = float(entry["p"])
    volume = float(entry.get("v", 0))
    if not (math.isfinite(price) and math.isfinite(volume)):
        raise ValueError("non-finite price or volume")
    if price < 0 or volume < 0:
        raise ValueError("negative price or volume")

    # Finnhub timestamps are Unix milliseconds → convert to seconds
    raw_ts = entry.get("t")
    timestamp = _to_seconds(raw_ts) if raw_ts is not None else time.time()

    return Trade(symbol=symbol, price=price, volume=int(volume), timestamp=timestamp)


def _to_seconds(raw_ts: Any) -> float:
    """Epoch millis → seconds. Raises ValueError unless datetime can render it."""
    seconds = float(raw_ts) / 1000.0
    if not math.isfinite(seconds):
        raise ValueError(f"non-finite timestamp: {raw_ts!r}")
    try:
        datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValueError(f"timestamp out of range: {raw_ts!r}") from None
    return seconds


class FinnhubStreamClient(QuoteSource):
    """Streaming client for the Finnhub trade websocket.

    A background task holds one connection open, subscribes to every tracked
    symbol and turns inbound trade messages into FeedEvents for the arbiter.
    When the connection closes or fails it reports the drop and reconnects
    after ``reconnect_delay`` seconds, forever, with no backoff growth.

    The client never writes to the store on its own. The arbiter calls
    apply_trades() once it has switched to LIVE, so simulated and live
    writes cannot interleave.
    """

    def __init__(
        self,
        api_key: str,
        store: PriceStore,
        symbols: Iterable[str] = TRACKED_SYMBOLS,
        ws_url: str = DEFAULT_WS_URL,
        reconnect_delay: float = 5.0,
        connect: Callable[[str], Any] | None = None,
    ) -> None:
        self._api_key = api_key
        self._store = store
        self._symbols: list[str] = list(symbols)
        self._tracked = frozenset(self._symbols)
        self._ws_url = ws_url
        self._reconnect_delay = reconnect_delay
        self._connect = connect or websockets.connect
        self._sink: EventSink | None = None
        self._task: asyncio.Task | None = None

        self.connected = False
        self.reconnect_attempts = 0
        self.last_error: str | None = None
        self.trades_received = 0

    def set_event_sink(self, sink: EventSink) -> None:
        self._sink = sink

    @property
    def url(self) -> str:
        return f"{self._ws_url}?token={self._api_key}"

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="finnhub-stream")
        logger.info(
            "Finnhub stream started: %d symbols, %s",
            len(self._symbols),
            self._ws_url,
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        if not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
        self._task = None
        self.connected = False
        logger.info("Finnhub stream stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def get_symbols(self) -> list[str]:
        return list(self._symbols)

    def apply_trades(self, trades: Iterable[Trade]) -> list[Quote]:
        """Write trades to the store in arrival order. Returns the new quotes.

        Change is measured against the previously stored price. A symbol's
        first trade is its own reference, so it reports zero change.
        """
        quotes: list[Quote] = []
        for trade in trades:
            previous = self._store.get_price(trade.symbol)
            quote = self._store.upsert(
                Quote(
                    symbol=trade.symbol,
                    price=trade.price,
                    volume=trade.volume,
                    reference_price=previous or trade.price,
                    timestamp=trade.timestamp,
                    source=SOURCE_LIVE,
                )
            )
            quotes.append(quote)
            logger.debug(
                "%s: $%.2f (%+.2f%%) [live]",
                quote.symbol,
                quote.price,
                quote.change_percent,
            )
        return quotes

    # --- Internal ---

    async def _run(self) -> None:
        """Connect, stream until the connection drops, wait, repeat."""
        while True:
            try:
                await self._stream_once()
                reason = "connection closed"
            except Exception as e:
                # Common failures: refused connection, 401 on handshake, abrupt close.
                reason = str(e) or type(e).__name__

            self.connected = False
            self.last_error = reason
            logger.warning(
                "Disconnected from Finnhub (%s), reconnecting in %.1fs",
                reason,
                self._reconnect_delay,
            )
            self._emit(FeedEvent.disconnected(reason))

            await asyncio.sleep(self._reconnect_delay)
            self.reconnect_attempts += 1

    async def _stream_once(self) -> None:
        async with self._connect(self.url) as ws:
            self.connected = True
            logger.info("Connected to Finnhub stream")
            self._emit(FeedEvent.connected())

            for symbol in self._symbols:
                await ws.send(json.dumps({"type": "subscribe", "symbol": symbol}))
                logger.debug("Subscribed to %s", symbol)

            async for raw in ws:
                trades = [t for t in parse_trade_message(raw) if t.symbol in self._tracked]
                if trades:
                    self.trades_received += len(trades)
                    self._emit(FeedEvent.trades_received(trades))

    def _emit(self, event: FeedEvent) -> None:
        if self._sink is None:
            logger.debug("No event sink set, dropping %s event", event.kind.value)
            return
        self._sink(event)
