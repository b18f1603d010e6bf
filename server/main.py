"""FastAPI host exposing the current position fix.

Start with::

    NMEA_BRIDGE_PORT=11123 uvicorn server.main:app --host 0.0.0.0 --port 8000

The bridge is configured from ``NMEA_BRIDGE_*`` environment variables (see
``BridgeConfig.from_env``) and started with the application when
``auto_start`` is set. ``GET /fix`` returns the latest smoothed fix;
WebSocket clients connecting to ``ws://<host>:8000/ws`` receive one
``type="fix"`` JSON message per published fix.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect

from nmea_bridge import BridgeConfig, LocationBridge
from server.broadcaster import FixBroadcaster
from server.formatters import fix_to_dict

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 5.0


def create_bridge() -> LocationBridge:
    """Build the application's bridge from the environment."""
    return LocationBridge(BridgeConfig.from_env())


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    bridge = create_bridge()
    broadcaster = FixBroadcaster(asyncio.get_running_loop(), _QUEUE_MAX_SIZE)
    bridge.aggregator.on_fix.subscribe(broadcaster.publish)
    application.state.bridge = bridge
    application.state.broadcaster = broadcaster
    with bridge:
        yield
    bridge.aggregator.on_fix.unsubscribe(broadcaster.publish)


app = FastAPI(lifespan=_lifespan)


@app.get("/fix")
async def read_fix(request: Request) -> dict[str, Any]:
    """Return the current fix; ``valid`` is false until a position arrived."""
    bridge: LocationBridge = request.app.state.bridge
    return fix_to_dict(bridge.current_fix)


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except TimeoutError:
        await websocket.close(code=1001)
    except WebSocketDisconnect:
        pass


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream fix JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages).
    The oldest message is dropped when the queue is full so slow clients do
    not stall the receive loop. The connection closes with code 1001, and
    the client should reconnect, if no fix arrives within
    ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    broadcaster: FixBroadcaster = websocket.app.state.broadcaster
    queue = broadcaster.subscribe()
    try:
        await websocket.accept()
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        broadcaster.unsubscribe(queue)
