"""SSE streaming endpoint for live quote updates."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from .store import PriceStore

logger = logging.getLogger(__name__)


def create_stream_router(store: PriceStore, interval: float = 0.5) -> APIRouter:
    """Create the SSE streaming router with a reference to the price store.

    This factory pattern lets us inject the PriceStore without globals.
    """
    router = APIRouter(prefix="/api/stream", tags=["streaming"])

    @router.get("/quotes")
    async def stream_quotes(request: Request) -> StreamingResponse:
        """SSE endpoint for quote updates.

        Pushes the full snapshot whenever the store changes. The client
        connects with EventSource and receives events in the format:

            data: [{"symbol": "AAPL", "price": 225.5, ...}, ...]

        Includes a retry directive so the browser auto-reconnects on
        disconnection (EventSource built-in behavior).
        """
        return StreamingResponse(
            _generate_events(store, request, interval),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    return router


async def _generate_events(
    store: PriceStore,
    request: Request,
    interval: float = 0.5,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted quote events.

    Checks the store every `interval` seconds and sends a snapshot only when
    its version has moved. Stops when the client disconnects.
    """
    # Tell the client to retry after 1 second if the connection drops
    yield "retry: 1000\n\n"

    last_version = -1
    client_ip = request.client.host if request.client else "unknown"
    logger.info("SSE client connected: %s", client_ip)

    try:
        while True:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %s", client_ip)
                break

            current_version = store.version
            if current_version != last_version:
                last_version = current_version
                quotes = store.get_all()

                if quotes:
                    payload = json.dumps([quote.to_dict() for quote in quotes.values()])
                    yield f"data: {payload}\n\n"

            await asyncio.sleep(interval)
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %s", client_ip)
        raise
