"""Dispatch table for decoded relay envelopes.

All protocol state lives in the two registries; the router itself keeps none.
It never holds both registry locks at once: membership is copied out of the
session registry first, then senders are looked up one recipient at a time.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from collections.abc import Callable, Awaitable

from relay.errors import RateLimitError, SessionNotFoundError
from relay.state.settings import SessionSettings
from relay.handlers.limits import FanOutThrottle
from relay.handlers.sessions import SessionRegistry
from relay.handlers.connections import ConnectionRegistry
from relay.config.sessions import USER_ID_PREFIX, SESSION_URL_QUERY_KEY
from relay.protocol import (
    Params,
    Envelope,
    ServerInfo,
    WelcomeResponse,
    JoinSessionRequest,
    JoinSessionResponse,
    CreateSessionRequest,
    CreateSessionResponse,
    encode,
    type_name,
)

logger = logging.getLogger(__name__)

HandlerFn = Callable[["MessageRouter", int, Any, bytes | None], Awaitable[None]]


async def _handle_create_session(
    router: MessageRouter,
    connection_id: int,
    _envelope: CreateSessionRequest,
    _frame: bytes | None,
) -> None:
    session_id = await router.sessions.create_session(connection_id)
    logger.info("session created sid=%s host=%s", session_id, connection_id)
    await router.send_to(
        connection_id,
        CreateSessionResponse(accepted=True, session_url=router.session_url(session_id)),
    )


async def _handle_join_session(
    router: MessageRouter,
    connection_id: int,
    envelope: JoinSessionRequest,
    _frame: bytes | None,
) -> None:
    try:
        await router.sessions.join_session(connection_id, envelope.sid)
    except SessionNotFoundError:
        logger.warning("connection %s tried to join unknown session sid=%r", connection_id, envelope.sid)
        await router.send_to(connection_id, JoinSessionResponse(accepted=False))
        return

    logger.info("connection %s joined session sid=%s", connection_id, envelope.sid)
    await router.send_to(connection_id, JoinSessionResponse(accepted=True))

    if router.settings.notify_host_on_join:
        session = await router.sessions.get(envelope.sid)
        if session is not None and session.host_id != connection_id:
            await router.send_to(session.host_id, JoinSessionResponse(accepted=True))


async def _handle_params(
    router: MessageRouter,
    connection_id: int,
    envelope: Params,
    frame: bytes | None,
) -> None:
    try:
        members = await router.sessions.members(envelope.sid)
    except SessionNotFoundError:
        logger.warning("params from connection %s for unknown session sid=%r dropped", connection_id, envelope.sid)
        return

    try:
        router.throttle.check(connection_id)
    except RateLimitError as exc:
        logger.warning(
            "params from connection %s over budget (%s per %.0fs); not relayed, retry in %.1fs",
            connection_id,
            exc.limit,
            exc.window_seconds,
            exc.retry_in,
        )
        return

    # Relay the frame exactly as received; the payload is never rewritten.
    data = frame if frame is not None else encode(envelope)
    delivered = await router.fan_out(members, data)
    logger.debug(
        "params from connection %s relayed to %s/%s members of sid=%s",
        connection_id,
        delivered,
        len(members),
        envelope.sid,
    )


HANDLERS: dict[type, HandlerFn] = {
    CreateSessionRequest: _handle_create_session,
    JoinSessionRequest: _handle_join_session,
    Params: _handle_params,
}


class MessageRouter:
    def __init__(
        self,
        *,
        connections: ConnectionRegistry,
        sessions: SessionRegistry,
        settings: SessionSettings,
        throttle: FanOutThrottle | None = None,
    ) -> None:
        self.connections = connections
        self.sessions = sessions
        self.settings = settings
        self.throttle = throttle or FanOutThrottle(max_per_window=0, window_seconds=0)

    def session_url(self, session_id: str) -> str:
        base = self.settings.session_url_base
        sep = "&" if "?" in base else "?"
        return f"{base}{sep}{SESSION_URL_QUERY_KEY}={session_id}"

    def welcome(self, connection_id: int) -> WelcomeResponse:
        return WelcomeResponse(
            user_id=f"{USER_ID_PREFIX}{connection_id}",
            server_info=ServerInfo(version=self.settings.server_version),
        )

    async def route(self, connection_id: int, envelope: Envelope, frame: bytes | None = None) -> None:
        """Dispatch one inbound envelope. `frame` is the raw bytes it was decoded from."""
        handler = HANDLERS.get(type(envelope))
        if handler is None:
            logger.warning("unhandled envelope type '%s' from connection %s", type_name(envelope), connection_id)
            return
        await handler(self, connection_id, envelope, frame)

    def forget(self, connection_id: int) -> None:
        self.throttle.forget(connection_id)

    async def send_to(self, connection_id: int, envelope: Envelope) -> bool:
        return await self._send_bytes_to(connection_id, encode(envelope))

    async def fan_out(self, recipients: list[int], data: bytes) -> int:
        """Send `data` to every recipient independently; returns how many sends succeeded."""
        if not recipients:
            return 0
        results = await asyncio.gather(*(self._send_bytes_to(cid, data) for cid in recipients))
        return sum(1 for ok in results if ok)

    async def _send_bytes_to(self, connection_id: int, data: bytes) -> bool:
        sender = await self.connections.get_sender(connection_id)
        if sender is None:
            logger.debug("connection %s is no longer registered; skipping send", connection_id)
            return False
        ok = await sender.send_bytes(data)
        if not ok:
            logger.debug("send to connection %s failed", connection_id)
        return ok


__all__ = ["HANDLERS", "MessageRouter"]
