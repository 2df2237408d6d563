"""Thread-safe in-memory price store."""

from __future__ import annotations

from threading import Lock

from .models import Quote


class PriceStore:
    """Latest quote for each tracked symbol. The single source of truth.

    Writers: SimulatedFeed or FinnhubStreamClient (one at a time, as decided
    by the FeedArbiter).
    Readers: query surface, SSE stream.

    Entries are created on first write and never removed.
    """

    def __init__(self) -> None:
        self._quotes: dict[str, Quote] = {}
        self._lock = Lock()
        self._version: int = 0  # Monotonically increasing; bumped on every write

    def upsert(self, quote: Quote) -> Quote:
        """Replace the stored quote for ``quote.symbol``. Returns the quote."""
        with self._lock:
            self._quotes[quote.symbol] = quote
            self._version += 1
            return quote

    def get(self, symbol: str) -> Quote | None:
        """Get the latest quote for a single symbol, or None if unknown."""
        with self._lock:
            return self._quotes.get(symbol)

    def get_all(self) -> dict[str, Quote]:
        """Snapshot of all current quotes. Returns a shallow copy."""
        with self._lock:
            return dict(self._quotes)

    def get_price(self, symbol: str) -> float | None:
        """Convenience: get just the price float, or None."""
        quote = self.get(symbol)
        return quote.price if quote else None

    @property
    def version(self) -> int:
        """Current version counter. Useful for SSE change detection."""
        return self._version

    def __len__(self) -> int:
        with self._lock:
            return len(self._quotes)

    def __contains__(self, symbol: str) -> bool:
        with self._lock:
            return symbol in self._quotes
