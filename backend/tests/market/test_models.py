"""Tests for the Quote and Trade dataclasses."""

import pytest

from tradegrid.market.models import Quote, Trade


class TestQuote:
    """Unit tests for the Quote model."""

    def test_quote_creation(self):
        """Test basic Quote creation."""
        quote = Quote(symbol="AAPL", price=226.00, volume=500, reference_price=225.50, timestamp=1234567890.0)
        assert quote.symbol == "AAPL"
        assert quote.price == 226.00
        assert quote.volume == 500
        assert quote.reference_price == 225.50
        assert quote.timestamp == 1234567890.0
        assert quote.source == "live"

    def test_change_calculation(self):
        """Change is measured against the reference price."""
        quote = Quote(symbol="AAPL", price=101.0, volume=1, reference_price=100.0, timestamp=0.0)
        assert quote.change == 1.0
        assert quote.change_percent == 1.0

    def test_change_negative(self):
        """Test negative price change."""
        quote = Quote(symbol="AAPL", price=189.50, volume=1, reference_price=190.00, timestamp=0.0)
        assert quote.change == -0.50

    def test_simulated_change_rounded_to_two_places(self):
        """Simulated deltas are rounded to 2 decimals."""
        quote = Quote(
            symbol="AAPL", price=190.50, volume=1, reference_price=190.00, timestamp=0.0, source="simulated"
        )
        assert quote.change_percent == 0.26  # 0.2632%

        quote = Quote(
            symbol="AAPL", price=226.63, volume=1, reference_price=225.50, timestamp=0.0, source="simulated"
        )
        assert quote.change == 1.13

    def test_live_change_not_rounded(self):
        """Live deltas keep full float precision."""
        quote = Quote(symbol="AAPL", price=190.50, volume=1, reference_price=190.00, timestamp=0.0)
        assert quote.change_percent == (190.50 - 190.00) / 190.00 * 100
        assert quote.change_percent != 0.26

        quote = Quote(symbol="AAPL", price=226.63, volume=1, reference_price=225.50, timestamp=0.0)
        assert quote.change == 226.63 - 225.50
        assert quote.to_dict()["change"] == 226.63 - 225.50

    def test_change_percent_zero_reference(self):
        """Test percentage change with zero reference price."""
        quote = Quote(symbol="AAPL", price=100.00, volume=1, reference_price=0.0, timestamp=0.0)
        assert quote.change_percent == 0.0

    def test_change_zero_when_reference_is_price(self):
        """First live trade uses its own price as reference."""
        quote = Quote(symbol="AAPL", price=50.0, volume=1, reference_price=50.0, timestamp=0.0)
        assert quote.change == 0.0
        assert quote.change_percent == 0.0

    def test_placeholder_is_zeroed(self):
        """Placeholder quotes carry zeros and a current timestamp."""
        quote = Quote.placeholder("ZZZZ")
        assert quote.symbol == "ZZZZ"
        assert quote.price == 0.0
        assert quote.volume == 0
        assert quote.change == 0.0
        assert quote.change_percent == 0.0
        assert quote.timestamp > 0
        assert quote.source == "placeholder"

    def test_iso_timestamp(self):
        """Timestamps render as ISO-8601 UTC."""
        quote = Quote(symbol="AAPL", price=1.0, volume=1, reference_price=1.0, timestamp=1707580800.0)
        assert quote.iso_timestamp == "2024-02-10T16:00:00.000Z"

    def test_to_dict(self):
        """Test serialization to dictionary."""
        quote = Quote(
            symbol="AAPL",
            price=226.63,
            volume=12000,
            reference_price=225.50,
            timestamp=1707580800.0,
            source="simulated",
        )
        result = quote.to_dict()

        assert result == {
            "symbol": "AAPL",
            "price": 226.63,
            "volume": 12000,
            "timestamp": "2024-02-10T16:00:00.000Z",
            "change": 1.13,
            "changePercent": 0.5,
            "source": "simulated",
        }

    def test_immutability(self):
        """Test that Quote is immutable."""
        quote = Quote(symbol="AAPL", price=190.50, volume=1, reference_price=190.00, timestamp=0.0)

        with pytest.raises(AttributeError):
            quote.price = 200.00


class TestTrade:
    """Unit tests for the Trade model."""

    def test_trade_is_immutable(self):
        """Test that Trade is immutable."""
        trade = Trade(symbol="AAPL", price=190.0, volume=10, timestamp=1.0)
        with pytest.raises(AttributeError):
            trade.price = 1.0
