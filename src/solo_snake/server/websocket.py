"""WebSocket handler streaming game events to the renderer."""

from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from solo_snake.server.session import ACTIONS, GameSession

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_session(ws: WebSocket) -> GameSession:
    return ws.app.state.session


async def _pump(websocket: WebSocket, queue: asyncio.Queue) -> None:
    while True:
        payload = await queue.get()
        await websocket.send_text(json.dumps(payload, separators=(",", ":")))


def _dispatch(session: GameSession, msg: dict) -> None:
    key = msg.get("key")
    if isinstance(key, str):
        session.handle_key(key)
        return
    action = msg.get("action")
    if isinstance(action, str) and action in ACTIONS:
        session.apply(action)


@ws_router.websocket("/game/play")
async def play(websocket: WebSocket) -> None:
    """Renderer WebSocket: send keys/actions, receive every game event."""
    session = _get_session(websocket)
    await websocket.accept()
    logger.info("Renderer connected.")

    # Queue starts with a snapshot so the client can draw before the first tick.
    queue = session.connect()
    sender = asyncio.create_task(_pump(websocket, queue))
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            _dispatch(session, msg)
    except WebSocketDisconnect:
        logger.info("Renderer disconnected.")
    finally:
        session.disconnect(queue)
        sender.cancel()
        await asyncio.gather(sender, return_exceptions=True)
