"""WS /ws: one persistent connection per client."""

from __future__ import annotations

import asyncio
import contextlib
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from arena.api.dependencies import get_gateway
from arena.api.gateway import Session, SessionGateway

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def game_socket(
    websocket: WebSocket,
    gateway: SessionGateway = Depends(get_gateway),
) -> None:
    await websocket.accept()
    session = gateway.open_session()
    client = f"{websocket.client.host}:{websocket.client.port}" if websocket.client else "unknown"
    logger.info("Connection from %s as session %d", client, session.session_id)

    tasks = {
        asyncio.create_task(_receive_frames(websocket, gateway, session)),
        asyncio.create_task(_send_frames(websocket, gateway, session)),
        asyncio.create_task(session.closed.wait()),
    }
    try:
        # Whichever side stops first ends the session
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        log_task_failures(done, session.session_id)
        for task in pending:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
    finally:
        gateway.close_session(session.session_id)
        with contextlib.suppress(RuntimeError, OSError):
            await websocket.close()
        logger.info("Session %d from %s ended", session.session_id, client)


async def _receive_frames(websocket: WebSocket, gateway: SessionGateway, session: Session) -> None:
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes")
            if raw is not None:
                gateway.handle_frame(session.session_id, raw)
    except WebSocketDisconnect:
        logger.debug("WebSocketDisconnect for session %d", session.session_id)


async def _send_frames(websocket: WebSocket, gateway: SessionGateway, session: Session) -> None:
    while True:
        text = await session.queue.get()
        try:
            await websocket.send_text(text)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            gateway.mark_failed(session, f"write failed: {exc!r}")
            return


def log_task_failures(tasks: set[asyncio.Task], session_id: int) -> int:
    """Log the exception of every finished task that raised. Returns how many did."""
    failed = 0
    for task in tasks:
        if task.cancelled() or task.exception() is None:
            continue
        failed += 1
        logger.error("Session %d connection task failed", session_id, exc_info=task.exception())
    return failed
