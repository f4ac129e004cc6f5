"""Per-connection watchdog (idle timeout and max connection duration).

Both limits are off by default: the relay protocol itself defines no timeouts,
so a connection may sit idle for as long as its peer keeps it open.
"""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any

from relay.state.settings import WebSocketSettings
from relay.config.websocket import (
    WS_CLOSE_IDLE_CODE,
    WS_CLOSE_IDLE_REASON,
    WS_CLOSE_MAX_DURATION_CODE,
    WS_CLOSE_MAX_DURATION_REASON,
)

logger = logging.getLogger(__name__)


class WebSocketLifecycle:
    def __init__(
        self,
        websocket: Any,
        *,
        idle_timeout_s: float = 0.0,
        watchdog_tick_s: float = 5.0,
        max_connection_duration_s: float = 0.0,
    ) -> None:
        self._ws = websocket
        self._idle_timeout_s = max(0.0, float(idle_timeout_s))
        self._watchdog_tick_s = max(0.01, float(watchdog_tick_s))
        self._max_connection_duration_s = max(0.0, float(max_connection_duration_s))
        self._connection_start = time.monotonic()
        self._last_activity = time.monotonic()
        self._stop_event = asyncio.Event()
        self._task: asyncio.Task | None = None

    @classmethod
    def from_settings(cls, websocket: Any, settings: WebSocketSettings) -> WebSocketLifecycle:
        return cls(
            websocket,
            idle_timeout_s=settings.idle_timeout_s,
            watchdog_tick_s=settings.watchdog_tick_s,
            max_connection_duration_s=settings.max_connection_duration_s,
        )

    @property
    def enabled(self) -> bool:
        return self._idle_timeout_s > 0 or self._max_connection_duration_s > 0

    @property
    def tick_s(self) -> float:
        return self._watchdog_tick_s

    def touch(self) -> None:
        """Mark activity: any inbound frame, or any frame delivered to this peer."""
        self._last_activity = time.monotonic()

    def should_close(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> asyncio.Task | None:
        if self._task is None and self.enabled:
            self._task = asyncio.create_task(self._watchdog_loop())
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(Exception, asyncio.CancelledError):
            await self._task
        self._task = None

    async def _close(self, code: int, reason: str) -> None:
        self._stop_event.set()
        with contextlib.suppress(Exception):
            await self._ws.close(code=code, reason=reason)

    async def _watchdog_loop(self) -> None:
        try:
            while not self._stop_event.is_set():
                await asyncio.sleep(self._watchdog_tick_s)
                if self._stop_event.is_set():
                    break
                now = time.monotonic()
                if (
                    self._max_connection_duration_s > 0
                    and (now - self._connection_start) >= self._max_connection_duration_s
                ):
                    logger.info("WebSocket max duration reached; closing connection")
                    await self._close(WS_CLOSE_MAX_DURATION_CODE, WS_CLOSE_MAX_DURATION_REASON)
                    break
                if self._idle_timeout_s > 0 and (now - self._last_activity) >= self._idle_timeout_s:
                    logger.info("WebSocket idle timeout reached; closing connection")
                    await self._close(WS_CLOSE_IDLE_CODE, WS_CLOSE_IDLE_REASON)
                    break
        except asyncio.CancelledError:
            return
        except Exception:
            logger.debug("watchdog exiting due to unexpected error", exc_info=True)


__all__ = ["WebSocketLifecycle"]
