"""HTTP endpoints for the stock query surface."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from .arbiter import FeedArbiter
from .query import StockQuery


def _split_symbols(values: list[str]) -> list[str]:
    """Accept both ``?symbols=A&symbols=B`` and ``?symbols=A,B``."""
    return [part for value in values for part in value.split(",") if part.strip()]


def create_quotes_router(query: StockQuery, arbiter: FeedArbiter) -> APIRouter:
    """Create the read-only quotes router bound to a query surface and arbiter."""
    router = APIRouter(prefix="/api", tags=["quotes"])

    @router.get("/stocks")
    async def all_stocks() -> list[dict]:
        return [quote.to_dict() for quote in query.get_all_stocks()]

    # Registered before /stocks/{symbol} so "batch" is not read as a symbol
    @router.get("/stocks/batch")
    async def stocks(symbols: list[str] = Query(default=[])) -> list[dict]:
        return [quote.to_dict() for quote in query.get_stocks(_split_symbols(symbols))]

    @router.get("/stocks/{symbol}")
    async def stock(symbol: str) -> dict:
        quote = query.get_stock(symbol)
        if quote is None:
            raise HTTPException(status_code=404, detail=f"Unknown symbol: {symbol.strip().upper()}")
        return quote.to_dict()

    @router.get("/feed/status")
    async def feed_status() -> dict:
        return arbiter.status().to_dict()

    @router.get("/health")
    async def health() -> dict:
        return {"status": "ok", "mode": arbiter.mode.value}

    return router
