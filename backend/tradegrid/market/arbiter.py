"""Feed arbiter: decides whether live or simulated data writes to the store."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum

from .events import FeedEvent, FeedEventKind
from .finnhub_client import FinnhubStreamClient
from .simulator import SimulatedFeed

logger = logging.getLogger(__name__)


class FeedMode(str, Enum):
    CONNECTING = "connecting"
    LIVE = "live"
    SIMULATED = "simulated"


@dataclass(frozen=True, slots=True)
class FeedStatus:
    """Point-in-time view of the arbiter, for health and status endpoints."""

    mode: FeedMode
    mode_since: float
    live_configured: bool
    live_connected: bool
    reconnect_attempts: int
    last_error: str | None
    trades_received: int
    transitions: int

    def to_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "mode_since": self.mode_since,
            "live_configured": self.live_configured,
            "live_connected": self.live_connected,
            "reconnect_attempts": self.reconnect_attempts,
            "last_error": self.last_error,
            "trades_received": self.trades_received,
            "transitions": self.transitions,
        }


class FeedArbiter:
    """State machine that owns both quote writers.

    States:
        CONNECTING  live client starting, fallback timer armed
        LIVE        only the live client writes
        SIMULATED   only the simulated feed writes

    Transitions:
        CONNECTING --trades--------> LIVE        (timer cancelled)
        CONNECTING --timer---------> SIMULATED
        any        --disconnect----> SIMULATED   (client reconnects on its own)
        SIMULATED  --trades--------> LIVE        (simulated feed stopped first)

    Live data always wins. Every event (inbound trades, connection changes,
    timer expiry) goes through one queue and is handled by one task, so mode
    switches and store writes are serialized without extra locking.
    """

    def __init__(
        self,
        simulated: SimulatedFeed,
        live: FinnhubStreamClient | None = None,
        fallback_window: float = 10.0,
    ) -> None:
        self._simulated = simulated
        self._live = live
        self._fallback_window = fallback_window

        self._mode = FeedMode.CONNECTING
        self._mode_since = time.time()
        self._transitions = 0

        self._events: asyncio.Queue[FeedEvent] | None = None
        self._loop_task: asyncio.Task | None = None
        self._fallback_task: asyncio.Task | None = None

    # --- Public API ---

    @property
    def mode(self) -> FeedMode:
        return self._mode

    @property
    def running(self) -> bool:
        return self._loop_task is not None and not self._loop_task.done()

    async def start(self) -> None:
        """Start the event loop and the live client, or go straight to simulation."""
        if self.running:
            return
        self._events = asyncio.Queue()
        self._loop_task = asyncio.create_task(self._run(), name="feed-arbiter")

        if self._live is None:
            logger.info("No live feed configured, serving simulated data only")
            await self._enter_simulated()
            return

        self._set_mode(FeedMode.CONNECTING)
        self._live.set_event_sink(self.post)
        self._fallback_task = asyncio.create_task(
            self._fallback_after(self._fallback_window), name="feed-fallback-timer"
        )
        await self._live.start()
        logger.info("Feed arbiter started, waiting up to %.1fs for live data", self._fallback_window)

    async def stop(self) -> None:
        """Cancel timers, stop both writers and the event loop. Idempotent."""
        self._cancel_fallback()
        if self._live is not None:
            await self._live.stop()
        await self._simulated.stop()
        if self._loop_task is not None:
            if not self._loop_task.done():
                self._loop_task.cancel()
                try:
                    await self._loop_task
                except asyncio.CancelledError:
                    pass
            self._loop_task = None
            logger.info("Feed arbiter stopped")
        self._events = None

    def post(self, event: FeedEvent) -> None:
        """Queue an event for the arbiter loop. Safe to call from callbacks."""
        if self._events is None:
            logger.debug("Arbiter not running, dropping %s event", event.kind.value)
            return
        self._events.put_nowait(event)

    def status(self) -> FeedStatus:
        live = self._live
        return FeedStatus(
            mode=self._mode,
            mode_since=self._mode_since,
            live_configured=live is not None,
            live_connected=bool(live and live.connected),
            reconnect_attempts=live.reconnect_attempts if live else 0,
            last_error=live.last_error if live else None,
            trades_received=live.trades_received if live else 0,
            transitions=self._transitions,
        )

    # --- Internal ---

    async def _run(self) -> None:
        assert self._events is not None
        while True:
            event = await self._events.get()
            try:
                await self._dispatch(event)
            except Exception:
                logger.exception("Failed to handle %s event", event.kind.value)

    async def _dispatch(self, event: FeedEvent) -> None:
        if event.kind is FeedEventKind.TRADES:
            if self._mode is not FeedMode.LIVE:
                await self._enter_live()
            assert self._live is not None
            self._live.apply_trades(event.trades)

        elif event.kind is FeedEventKind.DISCONNECTED:
            if self._mode is not FeedMode.SIMULATED:
                logger.info("Live feed lost (%s), filling the gap with simulated data", event.reason)
                await self._enter_simulated()

        elif event.kind is FeedEventKind.FALLBACK_EXPIRED:
            if self._mode is FeedMode.CONNECTING:
                logger.info(
                    "No live data within %.1fs (market may be closed)", self._fallback_window
                )
                await self._enter_simulated()
            else:
                logger.debug("Ignoring stale fallback timer in %s mode", self._mode.value)

        elif event.kind is FeedEventKind.CONNECTED:
            logger.info("Live feed connected, mode stays %s until trades arrive", self._mode.value)

    async def _enter_live(self) -> None:
        self._cancel_fallback()
        await self._simulated.stop()
        self._set_mode(FeedMode.LIVE)
        logger.info("Receiving live market data")

    async def _enter_simulated(self) -> None:
        self._cancel_fallback()
        await self._simulated.start()
        self._set_mode(FeedMode.SIMULATED)

    async def _fallback_after(self, delay: float) -> None:
        await asyncio.sleep(delay)
        self.post(FeedEvent.fallback_expired())

    def _cancel_fallback(self) -> None:
        if self._fallback_task is not None and not self._fallback_task.done():
            self._fallback_task.cancel()
        self._fallback_task = None

    def _set_mode(self, mode: FeedMode) -> None:
        if mode is self._mode:
            return
        logger.info("Feed mode: %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        self._mode_since = time.time()
        self._transitions += 1
