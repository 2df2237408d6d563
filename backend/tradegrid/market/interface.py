"""Abstract interface for quote writers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class QuoteSource(ABC):
    """Contract for anything that writes quotes into the shared PriceStore.

    The FeedArbiter owns every source and decides which one is allowed to
    write at any moment. Downstream code never calls a source for prices,
    it reads from the store.

    Lifecycle:
        source = SimulatedFeed(store)
        await source.start()
        # ... source writes on its own schedule ...
        await source.stop()
        # ... no further writes ...
        await source.start()  # restartable
    """

    @abstractmethod
    async def start(self) -> None:
        """Begin producing quotes for the tracked symbols.

        No-op if already running.
        """

    @abstractmethod
    async def stop(self) -> None:
        """Stop the background task and release resources.

        Safe to call multiple times. Once stop() returns, the source will not
        write to the store again until restarted.
        """

    @property
    @abstractmethod
    def running(self) -> bool:
        """True between start() and stop()."""

    @abstractmethod
    def get_symbols(self) -> list[str]:
        """Return the symbols this source produces quotes for."""
