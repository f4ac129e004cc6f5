"""Serialized outbound side of one relay connection."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable

from fastapi import WebSocketDisconnect

from relay.protocol import Envelope, encode

logger = logging.getLogger(__name__)


class ConnectionSender:
    """Send capability for a single WebSocket.

    Fan-outs triggered by different connections may target the same recipient
    concurrently, so every write goes through one lock per connection.
    `on_sent` runs after each delivered frame; the idle watchdog uses it so a
    connection that only receives relayed Params still counts as active.
    """

    def __init__(
        self,
        ws: Any,
        *,
        connection_id: int | None = None,
        on_sent: Callable[[], None] | None = None,
    ) -> None:
        self._ws = ws
        self._lock = asyncio.Lock()
        self._on_sent = on_sent
        self.connection_id = connection_id

    async def send_bytes(self, data: bytes) -> bool:
        async with self._lock:
            try:
                await self._ws.send_bytes(data)
            except WebSocketDisconnect:
                return False
            except Exception:
                logger.debug("send to connection %s failed", self.connection_id, exc_info=True)
                return False
        if self._on_sent is not None:
            self._on_sent()
        return True

    async def send(self, envelope: Envelope) -> bool:
        return await self.send_bytes(encode(envelope))

    async def close(self, *, code: int, reason: str = "") -> None:
        async with self._lock:
            with contextlib.suppress(Exception):
                await self._ws.close(code=code, reason=reason)


__all__ = ["ConnectionSender"]
