"""Fixed-interval throttle.

The first call runs immediately. After any execution, no other call runs
until ``interval_ms`` has passed; calls arriving in the meantime are queued
and drained one per interval, in arrival order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from callthrottle.core.scheduler import Scheduler
from callthrottle.core.temporal import Duration
from callthrottle.core.timer import TimerHandle
from callthrottle.throttle.base import PendingCall, Throttle, positive_duration

logger = logging.getLogger(__name__)


class IntervalThrottle(Throttle):
    """Runs ``fn`` at most once per interval, queuing the overflow.

    Args:
        fn: The function to rate-limit.
        interval_ms: Minimum spacing between executions, in milliseconds.
        scheduler: Host scheduler. Defaults to an AsyncioScheduler.
        name: Identifier used in logs.

    Raises:
        ThrottleConfigError: If ``interval_ms`` is not a positive number.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        interval_ms: float,
        *,
        scheduler: Scheduler | None = None,
        name: str | None = None,
    ):
        interval = positive_duration("interval_ms", interval_ms)
        super().__init__(fn, scheduler=scheduler, name=name)
        self._interval = interval

    @property
    def interval(self) -> Duration:
        return self._interval

    def _dispatch(self, call: PendingCall) -> TimerHandle | None:
        timer = self._arm(self._interval)
        self._execute_now(call)
        return timer

    def _drain(self) -> None:
        if not self._queue:
            self._timer = None
            logger.debug("[%.3f][%s] Queue empty; drain idle", self._now_s(), self._name)
            return
        call = self._queue.popleft()
        # Re-armed before the call runs so re-entrant calls queue behind it
        self._arm(self._interval)
        self._execute_queued(call)

    def _resume_delay(self) -> Duration:
        return self._interval


def make_throttle(
    fn: Callable[..., Any],
    interval_ms: float,
    *,
    scheduler: Scheduler | None = None,
    name: str | None = None,
) -> IntervalThrottle:
    """Wrap ``fn`` so it runs at most once every ``interval_ms`` milliseconds.

    Example:
        >>> log = make_throttle(print, 1000, scheduler=sim)
        >>> log("a")   # prints now
        >>> log("b")   # queued, prints 1000ms later
    """
    return IntervalThrottle(fn, interval_ms, scheduler=scheduler, name=name)
