"""Random-walk quote simulator used as a gap-filler when live data is absent."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Mapping

import numpy as np

from .baseline_prices import (
    BASELINE_PRICES,
    MAX_STEP_PERCENT,
    SEED_VOLUME_RANGE,
    TICK_VOLUME_RANGE,
)
from .interface import QuoteSource
from .models import SOURCE_SIMULATED, Quote
from .store import PriceStore

logger = logging.getLogger(__name__)


class RandomWalkSimulator:
    """Uniform random walk around each symbol's baseline price.

    Each step moves every price by a percentage drawn uniformly from
    [-max_step_percent, +max_step_percent]:

        new_price = round(p + p * step / 100, 2)

    Change is always reported against the fixed baseline, not the previous
    tick, so the grid shows the drift since the simulation began. This is a
    visual placeholder, not a price model.
    """

    def __init__(
        self,
        baselines: Mapping[str, float] = BASELINE_PRICES,
        max_step_percent: float = MAX_STEP_PERCENT,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._baselines: dict[str, float] = dict(baselines)
        self._symbols: list[str] = list(self._baselines)
        self._prices: dict[str, float] = dict(self._baselines)
        self._max_step = max_step_percent
        self._rng = rng if rng is not None else np.random.default_rng()

    # --- Public API ---

    def seed(self, now: float | None = None) -> list[Quote]:
        """Reset every symbol to its baseline price. Returns the seed quotes.

        Seed volumes are drawn from a larger range than tick volumes so the
        first frame looks like a full session's worth of trading.
        """
        ts = now if now is not None else time.time()
        self._prices = dict(self._baselines)
        volumes = self._rng.integers(*SEED_VOLUME_RANGE, size=len(self._symbols))

        return [
            Quote(
                symbol=symbol,
                price=self._baselines[symbol],
                volume=int(volumes[i]),
                reference_price=self._baselines[symbol],
                timestamp=ts,
                source=SOURCE_SIMULATED,
            )
            for i, symbol in enumerate(self._symbols)
        ]

    def step(self, now: float | None = None) -> list[Quote]:
        """Advance all symbols by one tick. Returns the new quotes."""
        n = len(self._symbols)
        if n == 0:
            return []

        ts = now if now is not None else time.time()
        steps = self._rng.uniform(-self._max_step, self._max_step, size=n)
        volumes = self._rng.integers(*TICK_VOLUME_RANGE, size=n)

        quotes: list[Quote] = []
        for i, symbol in enumerate(self._symbols):
            price = self._prices[symbol]
            new_price = round(price + price * float(steps[i]) / 100, 2)
            self._prices[symbol] = new_price
            quotes.append(
                Quote(
                    symbol=symbol,
                    price=new_price,
                    volume=int(volumes[i]),
                    reference_price=self._baselines[symbol],
                    timestamp=ts,
                    source=SOURCE_SIMULATED,
                )
            )
        return quotes

    def get_price(self, symbol: str) -> float | None:
        """Current simulated price for a symbol, or None if not tracked."""
        return self._prices.get(symbol)

    @property
    def symbols(self) -> list[str]:
        return list(self._symbols)


class SimulatedFeed(QuoteSource):
    """QuoteSource backed by the random-walk simulator.

    start() seeds the store with baseline quotes, then a background asyncio
    task calls RandomWalkSimulator.step() every ``tick_interval`` seconds and
    writes the results to the PriceStore.
    """

    def __init__(
        self,
        store: PriceStore,
        baselines: Mapping[str, float] = BASELINE_PRICES,
        tick_interval: float = 2.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._store = store
        self._interval = tick_interval
        self._sim = RandomWalkSimulator(baselines=baselines, rng=rng)
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        if self.running:
            return
        # Seed before the first tick so readers never see an empty store
        self._write(self._sim.seed())
        self._task = asyncio.create_task(self._run_loop(), name="simulated-feed")
        logger.info(
            "Simulated feed started: %d symbols, %.1fs interval",
            len(self._sim.symbols),
            self._interval,
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
        logger.info("Simulated feed stopped")

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def get_symbols(self) -> list[str]:
        return self._sim.symbols

    # --- Internal ---

    async def _run_loop(self) -> None:
        """Core loop: sleep, step the simulation, write to store."""
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._write(self._sim.step())
            except Exception:
                logger.exception("Simulated tick failed")

    def _write(self, quotes: list[Quote]) -> None:
        for quote in quotes:
            self._store.upsert(quote)
            logger.debug(
                "%s: $%.2f (%+.2f%%) [simulated]",
                quote.symbol,
                quote.price,
                quote.change_percent,
            )
