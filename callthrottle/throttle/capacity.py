"""Sliding-window (capacity) throttle.

Allows at most ``count`` executions within any rolling window of
``window_ms``. Recent execution times are kept in a history list that is
trimmed from the front as entries age out, so the window slides
continuously instead of resetting on a clock tick.

When a call finds the window full, it is queued and a drain is scheduled
for when the second-most-recent entry leaves the window. The drain clears
the history and runs up to ``count`` queued calls, re-arming every
``window_ms`` while anything is left.

Clearing the whole history on drain (rather than only the aged-out
entries) can let slightly more than ``count`` calls through in a window
that straddles a drain. This matches the established behaviour and is
left as is.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from callthrottle.core.scheduler import Scheduler
from callthrottle.core.temporal import Duration, Instant
from callthrottle.core.timer import TimerHandle
from callthrottle.throttle.base import PendingCall, Throttle, positive_count, positive_duration

logger = logging.getLogger(__name__)


class CapacityThrottle(Throttle):
    """Runs ``fn`` at most ``count`` times per sliding ``window_ms``.

    Args:
        fn: The function to rate-limit.
        count: Executions allowed per window.
        window_ms: Window length in milliseconds.
        scheduler: Host scheduler. Defaults to an AsyncioScheduler.
        name: Identifier used in logs.

    Raises:
        ThrottleConfigError: If ``count`` < 1 or ``window_ms`` <= 0.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        count: int,
        window_ms: float,
        *,
        scheduler: Scheduler | None = None,
        name: str | None = None,
    ):
        count = positive_count("count", count)
        window = positive_duration("window_ms", window_ms)
        super().__init__(fn, scheduler=scheduler, name=name)
        self._count = count
        self._window = window
        self._history: list[Instant] = []

    @property
    def count(self) -> int:
        return self._count

    @property
    def window(self) -> Duration:
        return self._window

    @property
    def history(self) -> tuple[Instant, ...]:
        """Copy of the execution timestamps currently counted against the window."""
        return tuple(self._history)

    def _trim(self, now: Instant) -> None:
        while self._history and now - self._history[0] >= self._window:
            self._history.pop(0)

    def _dispatch(self, call: PendingCall) -> TimerHandle | None:
        now = self._scheduler.now
        # Counted before the capacity check, even if the call ends up queued
        self._history.append(now)
        self._trim(now)

        if len(self._history) > self._count:
            elapsed = now - self._history[-2]
            delay = self._window - elapsed
            logger.debug(
                "[%.3f][%s] Window full (%d/%d); draining in %.3fms",
                now.to_seconds(), self._name, len(self._history), self._count,
                delay.to_millis(),
            )
            try:
                timer = self._arm(delay)
            except Exception:
                # Neither ran nor queued; release its slot
                self._history.pop()
                raise
            self._enqueue(call)
            return timer

        self._execute_now(call)
        return None

    def _drain(self) -> None:
        self._history = []
        while len(self._history) < self._count and self._queue:
            call = self._queue.popleft()
            self._history.append(self._scheduler.now)
            self._execute_queued(call)

        if self._queue:
            self._arm(self._window)
        else:
            self._timer = None
            logger.debug("[%.3f][%s] Queue empty; drain idle", self._now_s(), self._name)

    def _resume_delay(self) -> Duration:
        return self._window


def make_capacity_throttle(
    fn: Callable[..., Any],
    count: int,
    window_ms: float,
    *,
    scheduler: Scheduler | None = None,
    name: str | None = None,
) -> CapacityThrottle:
    """Wrap ``fn`` so it runs at most ``count`` times in any ``window_ms`` span.

    Example:
        >>> fetch = make_capacity_throttle(client.get, 5, 1000, scheduler=sim)
        >>> for url in urls:
        ...     fetch(url)   # 5 now, then up to 5 per second
    """
    return CapacityThrottle(fn, count, window_ms, scheduler=scheduler, name=name)
