from __future__ import annotations

import pytest

from relay.errors import RateLimitError
from relay.handlers.limits import FanOutThrottle


class _Clock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_budget_is_per_connection() -> None:
    throttle = FanOutThrottle(max_per_window=2, window_seconds=10, clock=_Clock())
    throttle.check(1)
    throttle.check(1)
    throttle.check(2)
    throttle.check(2)

    with pytest.raises(RateLimitError):
        throttle.check(1)
    with pytest.raises(RateLimitError):
        throttle.check(2)


def test_exhausted_budget_reports_retry_delay() -> None:
    clock = _Clock()
    throttle = FanOutThrottle(max_per_window=2, window_seconds=10, clock=clock)
    throttle.check(7)
    clock.now = 4.0
    throttle.check(7)

    with pytest.raises(RateLimitError) as exc:
        throttle.check(7)
    assert exc.value.limit == 2
    assert exc.value.window_seconds == 10
    assert exc.value.retry_in == pytest.approx(6.0)


def test_budget_refills_as_window_slides() -> None:
    clock = _Clock()
    throttle = FanOutThrottle(max_per_window=1, window_seconds=5, clock=clock)
    throttle.check(1)

    clock.now = 5.0
    throttle.check(1)


def test_forget_drops_history() -> None:
    throttle = FanOutThrottle(max_per_window=1, window_seconds=60, clock=_Clock())
    throttle.check(3)
    assert throttle.tracked_connections() == 1

    throttle.forget(3)
    throttle.forget(3)
    assert throttle.tracked_connections() == 0
    throttle.check(3)


def test_zero_budget_disables_throttle() -> None:
    throttle = FanOutThrottle(max_per_window=0, window_seconds=10)
    assert not throttle.enabled
    for _ in range(1000):
        throttle.check(1)
    assert throttle.tracked_connections() == 0
