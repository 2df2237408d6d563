"""Tests for the feed arbiter factory."""

from tradegrid.config import FeedSettings
from tradegrid.market.factory import create_feed_arbiter
from tradegrid.market.finnhub_client import FinnhubStreamClient
from tradegrid.market.simulator import SimulatedFeed
from tradegrid.market.store import PriceStore


class TestFactory:
    """Tests for create_feed_arbiter."""

    def test_simulation_only_without_api_key(self):
        """No API key → no live client."""
        arbiter = create_feed_arbiter(PriceStore(), FeedSettings())
        assert arbiter._live is None
        assert isinstance(arbiter._simulated, SimulatedFeed)

    def test_live_client_with_api_key(self):
        """An API key → Finnhub client alongside the simulator."""
        arbiter = create_feed_arbiter(PriceStore(), FeedSettings(finnhub_api_key="test-key-123"))
        assert isinstance(arbiter._live, FinnhubStreamClient)
        assert arbiter._live._api_key == "test-key-123"

    def test_settings_propagate(self):
        """Durations and URL reach the components."""
        settings = FeedSettings(
            finnhub_api_key="k",
            finnhub_ws_url="wss://example.test",
            fallback_window=3.0,
            reconnect_delay=1.5,
            sim_tick_interval=0.5,
        )
        arbiter = create_feed_arbiter(PriceStore(), settings)

        assert arbiter._fallback_window == 3.0
        assert arbiter._live._reconnect_delay == 1.5
        assert arbiter._live.url == "wss://example.test?token=k"
        assert arbiter._simulated._interval == 0.5

    def test_writers_share_store(self):
        """Both writers point at the store that was passed in."""
        store = PriceStore()
        arbiter = create_feed_arbiter(store, FeedSettings(finnhub_api_key="k"))
        assert arbiter._simulated._store is store
        assert arbiter._live._store is store

    def test_custom_baselines(self):
        """The baseline table decides the tracked symbols for both writers."""
        arbiter = create_feed_arbiter(
            PriceStore(), FeedSettings(finnhub_api_key="k"), baselines={"AAPL": 1.0, "TSLA": 2.0}
        )
        assert arbiter._simulated.get_symbols() == ["AAPL", "TSLA"]
        assert arbiter._live.get_symbols() == ["AAPL", "TSLA"]
