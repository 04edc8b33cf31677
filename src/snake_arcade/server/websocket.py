"""WebSocket handler streaming frames and events, receiving control input."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from snake_arcade.control import parse_signal
from snake_arcade.server.registry import SessionHandle, SessionRegistry

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_registry(ws: WebSocket) -> SessionRegistry:
    return ws.app.state.registry


async def _pump_input(
    websocket: WebSocket, registry: SessionRegistry, handle: SessionHandle,
) -> None:
    """Apply ``{"signal": ...}`` / ``{"key": ...}`` messages until disconnect.

    Returns once the session has been removed from *registry*.
    """
    while True:
        raw = await websocket.receive_text()
        if registry.get(handle.session_id) is not handle:
            return
        try:
            msg = json.loads(raw)
        except json.JSONDecodeError:
            continue
        if not isinstance(msg, dict):
            continue

        name = msg.get("signal", msg.get("key"))
        if not isinstance(name, str):
            continue
        signal = parse_signal(name)
        if signal is None:
            continue
        handle.session.handle(signal)


async def _pump_output(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        message = await queue.get()
        if message is None:
            return
        await websocket.send_text(json.dumps(message, separators=(",", ":")))


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send signals, receive frames and events."""
    registry = _get_registry(websocket)
    handle = registry.get(session_id)
    if handle is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    queue = handle.subscribe()
    logger.info("Client connected to session %s.", session_id)

    # Initial snapshot so the client can draw before the first tick.
    frame = {"type": "frame", **handle.session.frame().to_dict()}
    await websocket.send_text(json.dumps(frame, separators=(",", ":")))

    tasks = [
        asyncio.create_task(_pump_input(websocket, registry, handle)),
        asyncio.create_task(_pump_output(websocket, queue)),
    ]
    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        failed = False
        for task in done:
            exc = task.exception()
            if exc is None:
                continue
            failed = True
            if not isinstance(exc, WebSocketDisconnect):
                logger.warning(
                    "Connection to session %s failed: %r", session_id, exc,
                )
        if not failed and registry.get(session_id) is not handle:
            await websocket.close(code=4004, reason="Session closed.")
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        handle.unsubscribe(queue)
        logger.info("Client disconnected from session %s.", session_id)
