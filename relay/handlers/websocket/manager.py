"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from relay.state import RuntimeDeps
from relay.errors import HandshakeFailure
from relay.config.websocket import (
    WS_CLOSE_BUSY_CODE,
    WS_CLOSE_BUSY_REASON,
    WS_CLOSE_NORMAL_CODE,
    WS_CLOSE_HOST_DISCONNECTED_REASON,
)

from .sender import ConnectionSender
from .lifecycle import WebSocketLifecycle
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def _prepare_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> bool:
    if not await runtime_deps.connections.admit():
        logger.warning("refusing connection: %s", WS_CLOSE_BUSY_REASON)
        with contextlib.suppress(Exception):
            await ws.close(code=WS_CLOSE_BUSY_CODE, reason=WS_CLOSE_BUSY_REASON)
        return False

    try:
        await ws.accept()
    except Exception as exc:
        await runtime_deps.connections.release()
        raise HandshakeFailure(str(exc) or type(exc).__name__) from exc
    return True


async def _close_hosted_sessions(runtime_deps: RuntimeDeps, session_ids: list[str]) -> None:
    for session_id in session_ids:
        session = await runtime_deps.sessions.close_session(session_id)
        if session is None:
            continue
        for member_id in set(session.members):
            sender = await runtime_deps.connections.get_sender(member_id)
            if sender is not None:
                await sender.close(code=WS_CLOSE_NORMAL_CODE, reason=WS_CLOSE_HOST_DISCONNECTED_REASON)


async def _release_connection(runtime_deps: RuntimeDeps, connection_id: int) -> None:
    # Registry first, then sessions: the two locks are never held together.
    await runtime_deps.connections.unregister(connection_id)
    runtime_deps.router.forget(connection_id)
    hosted = await runtime_deps.sessions.remove_connection(connection_id)
    if hosted and runtime_deps.settings.sessions.close_session_on_host_disconnect:
        await _close_hosted_sessions(runtime_deps, hosted)


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    lifecycle: WebSocketLifecycle | None = None
    admitted = False
    connection_id: int | None = None
    dispatched = 0
    try:
        try:
            if not await _prepare_connection(ws, runtime_deps):
                return
        except HandshakeFailure as exc:
            logger.warning("WebSocket handshake failed: %s", exc.reason)
            return
        admitted = True

        lifecycle = WebSocketLifecycle.from_settings(ws, runtime_deps.settings.websocket)
        sender = ConnectionSender(ws, on_sent=lifecycle.touch)
        connection_id = await runtime_deps.connections.register(sender, ws)
        welcome = runtime_deps.router.welcome(connection_id)
        logger.info(
            "WebSocket connected, user: %s. Active: %s",
            welcome.user_id,
            runtime_deps.connections.get_connection_count(),
        )
        await sender.send(welcome)
        lifecycle.start()

        receiver = await runtime_deps.connections.get_receiver(connection_id)
        if receiver is None:
            return
        dispatched = await run_message_loop(receiver, connection_id, lifecycle, runtime_deps.router)
    finally:
        if lifecycle is not None:
            with contextlib.suppress(Exception):
                await lifecycle.stop()

        if connection_id is not None:
            try:
                await _release_connection(runtime_deps, connection_id)
            except Exception:
                logger.exception("cleanup failed for connection %s", connection_id)

        if admitted:
            await runtime_deps.connections.release()
            logger.info(
                "WebSocket connection %s closed after %s messages. Active: %s",
                connection_id,
                dispatched,
                runtime_deps.connections.get_connection_count(),
            )


__all__ = ["handle_websocket_connection"]
