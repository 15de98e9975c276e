"""WebSocket endpoint — live word-count delivery to browser clients.

Learn: Each client connects to /ws. The handler:
1. Sends the snapshot currently stored in Redis (if any)
2. Subscribes to the snapshot channel
3. Forwards every published snapshot to the client
4. Handles client disconnection gracefully

There is no backpressure and no replay: a client that drops simply
reconnects and gets the stored snapshot again.
"""

import asyncio
import json

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from redis.exceptions import RedisError
from starlette.websockets import WebSocketState

from blogwords.config import settings
from blogwords.realtime.pubsub import SnapshotStore, get_redis

logger = structlog.get_logger()
router = APIRouter()


@router.websocket("/ws")
async def snapshot_websocket(websocket: WebSocket):
    """Push the stored snapshot, then every change to it.

    Learn: Two concurrent tasks run:
    1. Redis listener — reads from pub/sub, sends to WebSocket
    2. Client listener — answers pings, notices disconnects

    When either side finishes, the other is cancelled.
    """
    await websocket.accept()
    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "?"
    log = logger.bind(client=client)
    log.info("ws.client_connected")

    r = get_redis()
    pubsub = r.pubsub()
    channel = settings.snapshot_channel
    tasks: list[asyncio.Task] = []

    async def redis_listener():
        """Forward Redis messages to the WebSocket client."""
        try:
            async for message in pubsub.listen():
                if message["type"] == "message":
                    await websocket.send_text(message["data"])
        except asyncio.CancelledError:
            pass

    async def client_listener():
        """Handle incoming WebSocket messages (only ping for now)."""
        try:
            while True:
                data = await websocket.receive_text()
                try:
                    msg = json.loads(data)
                except json.JSONDecodeError:
                    continue
                if isinstance(msg, dict) and msg.get("type") == "ping":
                    await websocket.send_text(json.dumps({"type": "pong"}))
        except (WebSocketDisconnect, asyncio.CancelledError):
            pass

    try:
        # Subscribe before reading the stored copy so no publish falls in between.
        await pubsub.subscribe(channel)

        current = await SnapshotStore(r).load_raw()
        if current is not None:
            await websocket.send_text(current)

        tasks = [
            asyncio.create_task(redis_listener()),
            asyncio.create_task(client_listener()),
        ]
        # Wait for either to finish (usually client disconnect)
        await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
    except WebSocketDisconnect:
        pass
    except Exception:
        log.exception("ws.handler_failed")
    finally:
        for task in tasks:
            task.cancel()
        try:
            await pubsub.unsubscribe(channel)
        except RedisError as e:
            log.warning("ws.unsubscribe_failed", error=str(e))
        await pubsub.aclose()
        if websocket.client_state == WebSocketState.CONNECTED:
            await websocket.close()
        log.info("ws.client_disconnected")
