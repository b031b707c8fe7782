"""FastAPI server that streams decoded GPS fixes and rendered lidar scans.

Start with::

    python -m server

or ``uvicorn server.main:app --host 0.0.0.0 --port 8000``.

WebSocket clients connect to ``ws://<host>:8000/ws`` and receive a stream
of JSON messages: one ``type="gps"`` message and one ``type="scan"``
message (with draw commands for a 2D canvas) per update tick. Clients that
prefer polling can ``GET /api/fix`` and ``GET /api/scan`` for the latest
message of each type.

Telemetry comes from the replay logs named in the configuration (see
``telemetry.config``); without them the server starts idle.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect

from server.broadcaster import add_subscriber, latest_message, remove_subscriber
from server.formatters import GPS_MESSAGE_TYPE, SCAN_MESSAGE_TYPE
from server.publisher import BroadcastSink, run_monitor_loop
from telemetry.config import MonitorConfig, load_config
from telemetry.monitor import TelemetryMonitor, TelemetrySource
from telemetry.sources import ReplaySource

logger = logging.getLogger(__name__)

_QUEUE_MAX_SIZE = 10
_TIMEOUT_SECONDS = 5.0
_WEBSOCKET_GOING_AWAY = 1001


def _create_source(config: MonitorConfig) -> TelemetrySource | None:
    if not config.replay_enabled:
        logger.warning("No telemetry logs configured; server will stay idle")
        return None
    return ReplaySource.from_files(
        config.nmea_log, config.scan_log, loop=config.replay_loop
    )


async def _send_messages_until_disconnect(
    queue: asyncio.Queue[str],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await asyncio.wait_for(queue.get(), timeout=_TIMEOUT_SECONDS)
            await websocket.send_text(message)
    except asyncio.TimeoutError:
        await websocket.close(code=_WEBSOCKET_GOING_AWAY)
    except WebSocketDisconnect:
        pass


@asynccontextmanager
async def _lifespan(_application: FastAPI) -> AsyncIterator[None]:
    config = load_config()
    source = _create_source(config)
    if source is None:
        yield
        return

    loop = asyncio.get_running_loop()
    monitor = TelemetryMonitor(
        source,
        [BroadcastSink(loop)],
        surface=config.surface(),
        talker_ids=config.talker_ids,
    )
    executor = ThreadPoolExecutor(max_workers=1)
    loop.run_in_executor(
        executor, run_monitor_loop, monitor, config.update_interval_seconds
    )
    try:
        yield
    finally:
        monitor.cancel()
        executor.shutdown(wait=False)


app = FastAPI(lifespan=_lifespan)


def _latest_or_404(message_type: str) -> dict[str, Any]:
    message = latest_message(message_type)
    if message is None:
        raise HTTPException(status_code=404, detail=f"No {message_type} data yet")
    return json.loads(message)


@app.get("/api/fix")
async def get_fix() -> dict[str, Any]:
    """Return the most recently published GPS message."""
    return _latest_or_404(GPS_MESSAGE_TYPE)


@app.get("/api/scan")
async def get_scan() -> dict[str, Any]:
    """Return the most recently published scan message."""
    return _latest_or_404(SCAN_MESSAGE_TYPE)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream GPS and scan JSON messages to a connected WebSocket client.

    Each client gets its own bounded queue (max ``_QUEUE_MAX_SIZE`` messages).
    The oldest message is dropped when the queue is full so slow clients do
    not stall the telemetry thread. The connection closes with code 1001, and
    the client should reconnect, if no message arrives within
    ``_TIMEOUT_SECONDS``.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    queue: asyncio.Queue[str] = asyncio.Queue(maxsize=_QUEUE_MAX_SIZE)
    add_subscriber(queue)
    try:
        await _send_messages_until_disconnect(queue, websocket)
    finally:
        remove_subscriber(queue)
