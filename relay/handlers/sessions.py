"""In-memory session registry.

Sessions are never evicted on their own: the protocol has no teardown message,
so a session lives until the process exits unless the host-disconnect teardown
is switched on.
"""

from __future__ import annotations

import uuid
import asyncio
import logging
from collections.abc import Callable

from relay.state.session import Session
from relay.errors import SessionNotFoundError

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def _new_session_id() -> str:
    return uuid.uuid4().hex


class SessionRegistry:
    def __init__(self, *, id_factory: IdFactory | None = None) -> None:
        self._lock = asyncio.Lock()
        self._sessions: dict[str, Session] = {}
        self._new_id = id_factory or _new_session_id

    async def create_session(self, host_id: int) -> str:
        async with self._lock:
            session_id = self._new_id()
            while session_id in self._sessions:
                session_id = self._new_id()
            self._sessions[session_id] = Session(session_id=session_id, host_id=host_id)
        return session_id

    async def join_session(self, client_id: int, session_id: str) -> None:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            session.members.append(client_id)

    async def members(self, session_id: str) -> list[int]:
        """Point-in-time copy of the member list, safe to iterate after the lock is released."""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionNotFoundError(session_id)
            return list(session.members)

    async def get(self, session_id: str) -> Session | None:
        async with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            return Session(session_id=session.session_id, host_id=session.host_id, members=list(session.members))

    async def remove_connection(self, connection_id: int) -> list[str]:
        """Drop every membership entry of a departed connection.

        Returns the ids of the sessions that connection hosts.
        """
        hosted: list[str] = []
        async with self._lock:
            for session in self._sessions.values():
                if connection_id in session.members:
                    session.members = [m for m in session.members if m != connection_id]
                if session.host_id == connection_id:
                    hosted.append(session.session_id)
        return hosted

    async def close_session(self, session_id: str) -> Session | None:
        async with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is not None:
            logger.info("session closed sid=%s members=%s", session_id, len(session.members))
        return session

    def session_count(self) -> int:
        return len(self._sessions)


__all__ = ["SessionRegistry"]
