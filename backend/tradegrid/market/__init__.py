"""Market data subsystem for TradeGrid.

Public API:
    Quote               - Immutable quote snapshot dataclass
    Trade               - One parsed live trade event
    PriceStore          - Thread-safe in-memory quote store
    QuoteSource         - Abstract interface for quote writers
    SimulatedFeed       - Random-walk gap-filler feed
    FinnhubStreamClient - Live Finnhub websocket client
    FeedArbiter         - Live/simulated state machine
    FeedMode            - CONNECTING / LIVE / SIMULATED
    StockQuery          - Read-only query surface
    create_feed_arbiter - Factory that wires the engine from settings
    create_quotes_router - FastAPI router factory for the query endpoints
    create_stream_router - FastAPI router factory for the SSE endpoint
    create_graphql_router - strawberry GraphQL router over StockQuery
"""

from .api import create_quotes_router
from .arbiter import FeedArbiter, FeedMode, FeedStatus
from .factory import create_feed_arbiter
from .finnhub_client import FinnhubStreamClient
from .interface import QuoteSource
from .models import Quote, Trade
from .query import StockQuery
from .schema import create_graphql_router
from .simulator import SimulatedFeed
from .store import PriceStore
from .stream import create_stream_router

__all__ = [
    "Quote",
    "Trade",
    "PriceStore",
    "QuoteSource",
    "SimulatedFeed",
    "FinnhubStreamClient",
    "FeedArbiter",
    "FeedMode",
    "FeedStatus",
    "StockQuery",
    "create_feed_arbiter",
    "create_quotes_router",
    "create_stream_router",
    "create_graphql_router",
]
