"""Data models for market data."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone

SOURCE_LIVE = "live"
SOURCE_SIMULATED = "simulated"
SOURCE_PLACEHOLDER = "placeholder"


@dataclass(frozen=True, slots=True)
class Quote:
    """Immutable snapshot of a single symbol's quote at a point in time.

    ``reference_price`` is what ``change`` is measured against: the baseline
    price for simulated quotes, the previously stored price for live quotes.
    Simulated deltas are rounded to 2 places. Live deltas are passed through
    at full precision.
    """

    symbol: str
    price: float
    volume: int
    reference_price: float
    timestamp: float = field(default_factory=time.time)  # Unix seconds
    source: str = SOURCE_LIVE

    @property
    def change(self) -> float:
        """Absolute price change from the reference price."""
        return self._rounded(self.price - self.reference_price)

    @property
    def change_percent(self) -> float:
        """Percentage change from the reference price."""
        if not self.reference_price:
            return 0.0
        return self._rounded((self.price - self.reference_price) / self.reference_price * 100)

    def _rounded(self, value: float) -> float:
        return round(value, 2) if self.source == SOURCE_SIMULATED else value

    @property
    def iso_timestamp(self) -> str:
        return (
            datetime.fromtimestamp(self.timestamp, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z")
        )

    @classmethod
    def placeholder(cls, symbol: str, timestamp: float | None = None) -> Quote:
        """Zeroed quote returned for symbols the store has never seen."""
        return cls(
            symbol=symbol,
            price=0.0,
            volume=0,
            reference_price=0.0,
            timestamp=timestamp if timestamp is not None else time.time(),
            source=SOURCE_PLACEHOLDER,
        )

    def to_dict(self) -> dict:
        """Serialize for JSON / SSE transmission."""
        return {
            "symbol": self.symbol,
            "price": self.price,
            "volume": self.volume,
            "timestamp": self.iso_timestamp,
            "change": self.change,
            "changePercent": self.change_percent,
            "source": self.source,
        }


@dataclass(frozen=True, slots=True)
class Trade:
    """One trade event parsed off the live stream."""

    symbol: str
    price: float
    volume: int
    timestamp: float  # Unix seconds
