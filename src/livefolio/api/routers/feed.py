"""Live feed WebSocket endpoint."""

import asyncio
import contextlib
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from livefolio.api.schemas import to_wire
from livefolio.core.exceptions import AppError
from livefolio.services import FeedSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["feed"])

INVALID_MESSAGE = "Invalid message."


async def _forward(session: FeedSession, websocket: WebSocket) -> None:
    """Send queued feed messages to the client until cancelled."""
    while True:
        message = await session.outbox.get()
        await websocket.send_text(to_wire(message).model_dump_json())


@router.websocket("/ws/feed")
async def feed_socket(websocket: WebSocket) -> None:
    """
    Live quotes and simulated trading for one client.

    Client sends:
      {"type": "subscribe", "symbols": ["RELIANCE", "TCS"]}
      {"type": "trade", "symbol": "TCS", "action": "buy", "quantity": 5, "price": 4120.35}

    Server pushes:
      {"type": "quote_batch", "records": [...]}    (on subscribe, then every poll interval)
      {"type": "position_update", "record": {...}} (after each accepted trade)
      {"type": "error", "message": "..."}
    """
    await websocket.accept()
    session: FeedSession = websocket.app.state.context.open_feed_session()
    sender = asyncio.create_task(_forward(session, websocket))
    logger.info("Client connected")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError:
                session.push_error(INVALID_MESSAGE)
                continue

            try:
                await session.handle(payload)
            except (AppError, ArithmeticError):
                logger.exception("Feed command failed: %r", payload)
                session.push_error(INVALID_MESSAGE)
    except WebSocketDisconnect:
        logger.info("Client disconnected")
    finally:
        await session.close()
        sender.cancel()
        try:
            with contextlib.suppress(asyncio.CancelledError):
                await sender
        except (WebSocketDisconnect, RuntimeError) as exc:
            logger.info("Feed sender stopped: %s", exc)
