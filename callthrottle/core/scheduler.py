"""Delayed-callback schedulers.

A Scheduler is the host environment a throttle runs in: it tells the time
and runs callbacks after a delay, returning a TimerHandle for each one.

Available schedulers:
- AsyncioScheduler: real time, on a running asyncio event loop
- SimulatedScheduler (callthrottle.core.simulation): virtual time, driven
  explicitly, for deterministic tests and what-if runs
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from callthrottle.core.clock import Clock, MonotonicClock
from callthrottle.core.temporal import Duration, Instant
from callthrottle.core.timer import TimerHandle

logger = logging.getLogger(__name__)


@runtime_checkable
class Scheduler(Protocol):
    """Protocol for delayed-callback schedulers."""

    @property
    def now(self) -> Instant:
        """Current time on this scheduler's clock."""
        ...

    def schedule(
        self,
        delay: Duration,
        callback: Callable[[], object],
        label: str = "",
    ) -> TimerHandle:
        """Run ``callback`` once after ``delay``.

        Args:
            delay: Non-negative delay before the callback runs.
            callback: Zero-argument function to call.
            label: Tag carried by the handle for debugging.

        Returns:
            A pending TimerHandle that can be inspected or cancelled.
        """
        ...


def check_delay(delay: Duration) -> None:
    if delay < Duration.ZERO:
        raise ValueError(f"delay must be >= 0, got {delay!r}")


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``.

    Args:
        loop: Event loop to schedule on. When omitted, the running loop is
            looked up at each ``schedule`` call, so the scheduler (and any
            throttle using it) can be created before the loop starts.
        clock: Time source. Defaults to ``time.monotonic()``, asyncio's
            default loop clock.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        clock: Clock | None = None,
    ):
        self._loop = loop
        self._clock = clock if clock is not None else MonotonicClock()

    @property
    def now(self) -> Instant:
        return self._clock.now

    def schedule(
        self,
        delay: Duration,
        callback: Callable[[], object],
        label: str = "",
    ) -> TimerHandle:
        check_delay(delay)
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        handle = TimerHandle(self.now + delay, callback, label)
        loop_handle = loop.call_later(delay.to_seconds(), handle.fire)
        handle.bind_cancel(loop_handle.cancel)
        logger.debug("Scheduled %r in %.3fms", label, delay.to_millis())
        return handle
