"""Burst-allowance throttle.

Up to ``burst_size`` calls run immediately within a burst window. Once the
allowance is spent, further calls are queued and drained one per
``interval_ms``, exactly like the fixed-interval throttle. The allowance is
restored on a fixed cadence: the first admitted call of a window arms a
reset timer that zeroes the burst counter ``burst_window_ms`` later.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from callthrottle.core.scheduler import Scheduler
from callthrottle.core.temporal import Duration
from callthrottle.core.timer import TimerHandle
from callthrottle.throttle.base import PendingCall, positive_count, positive_duration
from callthrottle.throttle.interval import IntervalThrottle

logger = logging.getLogger(__name__)


class BurstThrottle(IntervalThrottle):
    """Absorbs short bursts without delay, then falls back to a steady rate.

    Args:
        fn: The function to rate-limit.
        burst_size: Calls allowed to run immediately per burst window.
        burst_window_ms: How long after the first call of a burst the
            counter resets, in milliseconds.
        interval_ms: Spacing of queued executions once the burst is spent.
        scheduler: Host scheduler. Defaults to an AsyncioScheduler.
        name: Identifier used in logs.

    Raises:
        ThrottleConfigError: If any parameter is out of range.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        burst_size: int,
        burst_window_ms: float,
        interval_ms: float,
        *,
        scheduler: Scheduler | None = None,
        name: str | None = None,
    ):
        burst_size = positive_count("burst_size", burst_size)
        burst_window = positive_duration("burst_window_ms", burst_window_ms)
        super().__init__(fn, interval_ms, scheduler=scheduler, name=name)
        self._burst_size = burst_size
        self._burst_window = burst_window
        self._burst_count = 0
        self._burst_reset_timer: TimerHandle | None = None

    @property
    def burst_size(self) -> int:
        return self._burst_size

    @property
    def burst_window(self) -> Duration:
        return self._burst_window

    @property
    def burst_count(self) -> int:
        """Calls admitted to the dispatch decision since the last reset."""
        return self._burst_count

    @property
    def burst_reset_timer(self) -> TimerHandle | None:
        return self._burst_reset_timer

    def _dispatch(self, call: PendingCall) -> TimerHandle | None:
        if self._burst_reset_timer is None:
            self._burst_reset_timer = self._scheduler.schedule(
                self._burst_window, self._reset_burst, label=f"burst_reset::{self._name}",
            )
        self._burst_count += 1

        if self._burst_count > self._burst_size:
            logger.debug(
                "[%.3f][%s] Burst allowance spent (%d/%d)",
                self._now_s(), self._name, self._burst_count, self._burst_size,
            )
            timer = self._arm(self._interval)
            self._enqueue(call)
            return timer

        self._execute_now(call)
        return self._timer

    def _reset_burst(self) -> None:
        logger.debug(
            "[%.3f][%s] Burst counter reset from %d",
            self._now_s(), self._name, self._burst_count,
        )
        self._burst_count = 0
        self._burst_reset_timer = None


def make_burst_throttle(
    fn: Callable[..., Any],
    burst_size: int,
    burst_window_ms: float,
    interval_ms: float,
    *,
    scheduler: Scheduler | None = None,
    name: str | None = None,
) -> BurstThrottle:
    """Wrap ``fn`` with a burst allowance of ``burst_size`` calls per window.

    Example:
        >>> on_key = make_burst_throttle(render, 3, 1000, 250, scheduler=sim)
        >>> for _ in range(5):
        ...     on_key()   # 3 renders now, 2 more at 250ms and 500ms
    """
    return BurstThrottle(
        fn, burst_size, burst_window_ms, interval_ms, scheduler=scheduler, name=name,
    )
