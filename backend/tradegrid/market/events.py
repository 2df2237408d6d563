"""Events exchanged between the live client, timers and the FeedArbiter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .models import Trade


class FeedEventKind(str, Enum):
    CONNECTED = "connected"
    TRADES = "trades"
    DISCONNECTED = "disconnected"
    FALLBACK_EXPIRED = "fallback_expired"


@dataclass(frozen=True, slots=True)
class FeedEvent:
    kind: FeedEventKind
    trades: tuple[Trade, ...] = ()
    reason: str | None = None

    @classmethod
    def connected(cls) -> FeedEvent:
        return cls(FeedEventKind.CONNECTED)

    @classmethod
    def trades_received(cls, trades: list[Trade]) -> FeedEvent:
        return cls(FeedEventKind.TRADES, trades=tuple(trades))

    @classmethod
    def disconnected(cls, reason: str) -> FeedEvent:
        return cls(FeedEventKind.DISCONNECTED, reason=reason)

    @classmethod
    def fallback_expired(cls) -> FeedEvent:
        return cls(FeedEventKind.FALLBACK_EXPIRED)


EventSink = Callable[[FeedEvent], None]
