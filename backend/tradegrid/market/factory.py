"""Factory for wiring the ingestion engine."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from .arbiter import FeedArbiter
from .baseline_prices import BASELINE_PRICES
from .finnhub_client import FinnhubStreamClient
from .simulator import SimulatedFeed
from .store import PriceStore

if TYPE_CHECKING:
    from ..config import FeedSettings

logger = logging.getLogger(__name__)


def create_feed_arbiter(
    store: PriceStore,
    settings: FeedSettings,
    baselines: Mapping[str, float] = BASELINE_PRICES,
) -> FeedArbiter:
    """Create the arbiter with its writers, all pointed at ``store``.

    - FINNHUB_API_KEY set → live Finnhub stream with simulated fallback
    - Otherwise → simulated feed only

    Returns an unstarted arbiter. Caller must await arbiter.start().
    """
    simulated = SimulatedFeed(
        store=store,
        baselines=baselines,
        tick_interval=settings.sim_tick_interval,
    )

    if settings.live_enabled:
        logger.info("Market data source: Finnhub stream (simulated fallback)")
        live = FinnhubStreamClient(
            api_key=settings.finnhub_api_key,
            store=store,
            symbols=list(baselines),
            ws_url=settings.finnhub_ws_url,
            reconnect_delay=settings.reconnect_delay,
        )
        return FeedArbiter(simulated=simulated, live=live, fallback_window=settings.fallback_window)

    logger.info("Market data source: simulated feed (FINNHUB_API_KEY not set)")
    return FeedArbiter(simulated=simulated, live=None, fallback_window=settings.fallback_window)
