"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from relay.config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_SHUTDOWN_REASON

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from relay.state.settings import AppSettings
    from relay.handlers.sessions import SessionRegistry
    from relay.handlers.websocket.router import MessageRouter
    from relay.handlers.connections import ConnectionRegistry


@dataclass(slots=True)
class RuntimeDeps:
    connections: ConnectionRegistry
    sessions: SessionRegistry
    router: MessageRouter
    settings: AppSettings

    async def shutdown(self) -> None:
        connection_ids = await self.connections.connection_ids()
        logger.info(
            "runtime: shutting down with %s connections and %s sessions",
            len(connection_ids),
            self.sessions.session_count(),
        )
        for connection_id in connection_ids:
            sender = await self.connections.get_sender(connection_id)
            if sender is None:
                continue
            try:
                await sender.close(code=WS_CLOSE_GOING_AWAY_CODE, reason=WS_CLOSE_SHUTDOWN_REASON)
            except Exception:
                logger.exception("runtime shutdown failed for connection %s", connection_id)


__all__ = ["RuntimeDeps"]
