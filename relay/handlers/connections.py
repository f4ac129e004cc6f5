"""Connection registry: identity, send/receive capabilities, admission control."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Any

from relay.state.connection import Connection

if TYPE_CHECKING:
    from relay.handlers.websocket.sender import ConnectionSender


class ConnectionRegistry:
    def __init__(self, *, max_connections: int) -> None:
        self._max = max(1, int(max_connections))
        self._lock = asyncio.Lock()
        self._conns: dict[int, Connection] = {}
        self._next_id = 0
        self._admitted = 0

    async def admit(self) -> bool:
        """Reserve a slot for a connection that is about to be accepted."""
        async with self._lock:
            if self._admitted >= self._max:
                return False
            self._admitted += 1
            return True

    async def release(self) -> None:
        async with self._lock:
            self._admitted = max(0, self._admitted - 1)

    async def register(self, sender: ConnectionSender, receiver: Any) -> int:
        # Id assignment and insert share the lock so concurrent accepts never collide.
        async with self._lock:
            connection_id = self._next_id
            self._next_id += 1
            self._conns[connection_id] = Connection(connection_id=connection_id, sender=sender, receiver=receiver)
        sender.connection_id = connection_id
        return connection_id

    async def unregister(self, connection_id: int) -> None:
        async with self._lock:
            self._conns.pop(connection_id, None)

    async def get_sender(self, connection_id: int) -> ConnectionSender | None:
        async with self._lock:
            conn = self._conns.get(connection_id)
        return conn.sender if conn is not None else None

    async def get_receiver(self, connection_id: int) -> Any | None:
        async with self._lock:
            conn = self._conns.get(connection_id)
        return conn.receiver if conn is not None else None

    async def connection_ids(self) -> list[int]:
        async with self._lock:
            return list(self._conns)

    def get_connection_count(self) -> int:
        return len(self._conns)


__all__ = ["ConnectionRegistry"]
