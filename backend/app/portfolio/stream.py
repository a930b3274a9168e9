"""Push endpoints (WebSocket and SSE) plus the last-snapshot HTTP view."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import StreamingResponse
from fastapi.websockets import WebSocketState

from .hub import SubscriberHub
from .scheduler import CycleScheduler
from .sinks import QueueSink

logger = logging.getLogger(__name__)


def create_stream_router(
    hub: SubscriberHub,
    scheduler: CycleScheduler | None = None,
    queue_size: int = 4,
) -> APIRouter:
    """Create the portfolio router with references to the hub and scheduler.

    This factory pattern lets us inject dependencies without globals.
    """
    router = APIRouter(tags=["portfolio"])

    @router.websocket("/ws/portfolio")
    async def portfolio_socket(websocket: WebSocket) -> None:
        """Push every published snapshot as one JSON text frame.

        Clients only listen; anything they send is ignored. The first frame
        arrives with the next refresh cycle. The socket is closed from our side
        once the hub drops the sink.
        """
        await websocket.accept()
        client = _client_label(websocket.client)
        sink = QueueSink(label=f"ws:{client}", maxsize=queue_size)
        sink.open()
        hub.register(sink)
        sender = asyncio.create_task(_pump_websocket(websocket, sink, hub), name=f"ws-sender-{client}")
        receiver = asyncio.create_task(_wait_for_disconnect(websocket), name=f"ws-receiver-{client}")
        try:
            await asyncio.wait({sender, receiver}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            sink.close()
            hub.unregister(sink)
            for task in (sender, receiver):
                task.cancel()
                try:
                    await task
                except asyncio.CancelledError:
                    pass

        if (
            websocket.client_state is WebSocketState.CONNECTED
            and websocket.application_state is WebSocketState.CONNECTED
        ):
            logger.info("Closing WebSocket for dropped subscriber %r", sink)
            await websocket.close()

    @router.get("/api/stream/portfolio")
    async def stream_portfolio(request: Request) -> StreamingResponse:
        """SSE endpoint for snapshot updates.

        Each event is ``data: <snapshot json>``. Includes a retry directive so
        the browser auto-reconnects on disconnection (EventSource built-in
        behavior).
        """
        sink = QueueSink(label=f"sse:{_client_label(request.client)}", maxsize=queue_size)
        sink.open()
        hub.register(sink)
        return StreamingResponse(
            _generate_events(sink, hub, request),
            media_type="text/event-stream",
            headers={
                "Cache-Control": "no-cache",
                "Connection": "keep-alive",
                "X-Accel-Buffering": "no",  # Disable nginx buffering if proxied
            },
        )

    @router.get("/api/portfolio")
    async def latest_portfolio() -> dict:
        """The last published snapshot."""
        snapshot = hub.latest
        if snapshot is None:
            raise HTTPException(status_code=503, detail="No snapshot published yet")
        return snapshot.to_dict()

    @router.get("/api/health")
    async def health() -> dict:
        latest = hub.latest
        return {
            "status": "ok",
            "subscribers": len(hub),
            "scheduler": scheduler.state.value if scheduler else None,
            "cyclesStarted": scheduler.cycles_started if scheduler else 0,
            "lastSnapshot": latest.timestamp.isoformat() if latest else None,
        }

    return router


def _client_label(client) -> str:
    return f"{client.host}:{client.port}" if client else "unknown"


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


async def _pump_websocket(websocket: WebSocket, sink: QueueSink, hub: SubscriberHub) -> None:
    """Drain the sink onto the socket until either side closes."""
    try:
        async for payload in sink:
            await websocket.send_text(payload)
    except (WebSocketDisconnect, RuntimeError, OSError) as e:
        logger.info("WebSocket send failed for %r: %s", sink, e)
        sink.close()
        hub.unregister(sink)


async def _generate_events(
    sink: QueueSink,
    hub: SubscriberHub,
    request: Request,
) -> AsyncGenerator[str, None]:
    """Async generator that yields SSE-formatted snapshot events."""
    # Tell the client to retry after 1 second if the connection drops
    yield "retry: 1000\n\n"
    logger.info("SSE client connected: %r", sink)
    try:
        async for payload in sink:
            if await request.is_disconnected():
                logger.info("SSE client disconnected: %r", sink)
                break
            yield f"data: {payload}\n\n"
    except asyncio.CancelledError:
        logger.info("SSE stream cancelled for: %r", sink)
        raise
    finally:
        sink.close()
        hub.unregister(sink)
