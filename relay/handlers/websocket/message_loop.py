"""Per-connection frame loop: receive, decode, dispatch.

Frames from one connection are handled strictly in arrival order: the next
frame is read only once the previous dispatch, fan-out included, has finished.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from fastapi import WebSocketDisconnect

from relay.protocol import Envelope, decode
from relay.errors import EnvelopeDecodeError

from .router import MessageRouter
from .lifecycle import WebSocketLifecycle

logger = logging.getLogger(__name__)

_DISCONNECT = "websocket.disconnect"


async def _receive_with_watchdog(ws: Any, lifecycle: WebSocketLifecycle) -> tuple[dict[str, Any] | None, bool]:
    if not lifecycle.enabled:
        return await ws.receive(), False
    try:
        message = await asyncio.wait_for(ws.receive(), timeout=lifecycle.tick_s * 2)
        return message, False
    except asyncio.TimeoutError:
        return None, lifecycle.should_close()


def _decode_or_log(frame: bytes, connection_id: int) -> Envelope | None:
    try:
        return decode(frame)
    except EnvelopeDecodeError as exc:
        logger.warning("connection %s sent an undecodable frame (%s); discarded", connection_id, exc)
        return None


async def run_message_loop(
    ws: Any,
    connection_id: int,
    lifecycle: WebSocketLifecycle,
    router: MessageRouter,
) -> int:
    """Drive one connection until its stream ends; returns the number of frames dispatched."""
    dispatched = 0
    while True:
        try:
            message, should_exit = await _receive_with_watchdog(ws, lifecycle)
        except WebSocketDisconnect:
            return dispatched
        except Exception:
            logger.info("connection %s receive failed; closing loop", connection_id, exc_info=True)
            return dispatched

        if should_exit:
            return dispatched
        if message is None:
            continue
        if message.get("type") == _DISCONNECT:
            return dispatched

        lifecycle.touch()

        frame = message.get("bytes")
        if frame is None:
            logger.warning("connection %s sent a non-binary frame; ignored", connection_id)
            continue

        envelope = _decode_or_log(frame, connection_id)
        if envelope is None:
            continue

        try:
            await router.route(connection_id, envelope, frame)
        except Exception:
            logger.exception("dispatch failed for connection %s", connection_id)
            continue
        dispatched += 1


__all__ = ["run_message_loop"]
