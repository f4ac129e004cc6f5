"""Per-connection budget for Params fan-outs.

Only the relay of Params is throttled: its cost grows with the size of the
session, while create and join requests are answered once to the sender.
"""

from __future__ import annotations

import time
import collections
from collections.abc import Callable

from relay.errors import RateLimitError

Clock = Callable[[], float]


class FanOutThrottle:
    def __init__(
        self,
        *,
        max_per_window: int,
        window_seconds: float,
        clock: Clock | None = None,
    ) -> None:
        self.max_per_window = max(0, int(max_per_window))
        self.window_seconds = max(0.0, float(window_seconds))
        self._clock = clock or time.monotonic
        self._history: dict[int, collections.deque[float]] = {}

    @property
    def enabled(self) -> bool:
        return self.max_per_window > 0 and self.window_seconds > 0

    def check(self, connection_id: int) -> None:
        """Record one fan-out by `connection_id`, or raise RateLimitError if its budget is spent."""
        if not self.enabled:
            return

        now = self._clock()
        horizon = now - self.window_seconds
        history = self._history.setdefault(connection_id, collections.deque())
        while history and history[0] <= horizon:
            history.popleft()

        if len(history) >= self.max_per_window:
            raise RateLimitError(
                retry_in=history[0] - horizon,
                limit=self.max_per_window,
                window_seconds=self.window_seconds,
            )
        history.append(now)

    def forget(self, connection_id: int) -> None:
        self._history.pop(connection_id, None)

    def tracked_connections(self) -> int:
        return len(self._history)


__all__ = ["FanOutThrottle"]
