"""FastAPI application: wires the store, the feed engine and the HTTP surface."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import FeedSettings
from .market import (
    PriceStore,
    StockQuery,
    create_feed_arbiter,
    create_graphql_router,
    create_quotes_router,
    create_stream_router,
)

logger = logging.getLogger(__name__)


def create_app(settings: FeedSettings | None = None) -> FastAPI:
    settings = settings or FeedSettings.from_env()
    store = PriceStore()
    arbiter = create_feed_arbiter(store, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await arbiter.start()
        try:
            yield
        finally:
            await arbiter.stop()

    app = FastAPI(title="TradeGrid", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    query = StockQuery(store)
    app.include_router(create_quotes_router(query, arbiter))
    app.include_router(create_stream_router(store))
    app.include_router(create_graphql_router(query))

    app.state.store = store
    app.state.arbiter = arbiter
    app.state.settings = settings
    return app


def run() -> None:
    import uvicorn

    settings = FeedSettings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting TradeGrid on %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
