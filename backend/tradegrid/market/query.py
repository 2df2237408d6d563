"""Read-only query surface over the PriceStore."""

from __future__ import annotations

import time
from collections.abc import Iterable

from .models import Quote
from .store import PriceStore


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


class StockQuery:
    """What the grid and any other consumer may ask of the store.

    Never writes. Unknown symbols are not errors: single lookups return None,
    batch lookups return zeroed placeholders so the result lines up one-to-one
    with the request.
    """

    def __init__(self, store: PriceStore) -> None:
        self._store = store

    def get_all_stocks(self) -> list[Quote]:
        return list(self._store.get_all().values())

    def get_stock(self, symbol: str) -> Quote | None:
        return self._store.get(normalize_symbol(symbol))

    def get_stocks(self, symbols: Iterable[str]) -> list[Quote]:
        now = time.time()
        result: list[Quote] = []
        for raw in symbols:
            symbol = normalize_symbol(raw)
            quote = self._store.get(symbol)
            result.append(quote if quote is not None else Quote.placeholder(symbol, timestamp=now))
        return result
