"""Shared machinery for the throttles.

A Throttle wraps a function and decides, per call, whether to run it now
or defer it. Deferred calls wait in a FIFO queue of PendingCall objects
and are run later by a timer-driven drain loop. Subclasses supply the
admission rule (``_dispatch``) and the drain step (``_drain``).

Every call returns the throttle's current drain TimerHandle (or None when
no drain is active) so the caller can inspect or cancel it.
"""

from __future__ import annotations

import functools
import logging
import math
import numbers
import types
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from callthrottle.core.scheduler import AsyncioScheduler, Scheduler
from callthrottle.core.temporal import Duration
from callthrottle.core.timer import TimerHandle
from callthrottle.errors import ThrottleConfigError

logger = logging.getLogger(__name__)


def positive_duration(param: str, millis: Any) -> Duration:
    """Validate a millisecond parameter and convert it to a Duration."""
    if isinstance(millis, bool) or not isinstance(millis, numbers.Real):
        raise ThrottleConfigError(f"{param} must be a number of milliseconds, got {millis!r}")
    if not math.isfinite(millis):
        raise ThrottleConfigError(f"{param} must be finite, got {millis}")
    if not millis > 0:
        raise ThrottleConfigError(f"{param} must be > 0, got {millis}")
    duration = Duration.from_millis(millis)
    if duration == Duration.ZERO:
        raise ThrottleConfigError(f"{param} must be at least 1ns, got {millis}")
    return duration


def positive_count(param: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ThrottleConfigError(f"{param} must be an integer, got {value!r}")
    if value < 1:
        raise ThrottleConfigError(f"{param} must be >= 1, got {value}")
    return int(value)


@dataclass(frozen=True)
class PendingCall:
    """A deferred invocation: the function plus the arguments it was called with."""

    fn: Callable[..., Any]
    args: tuple = ()
    kwargs: dict[str, Any] | None = None

    def __call__(self) -> Any:
        if self.kwargs:
            return self.fn(*self.args, **self.kwargs)
        return self.fn(*self.args)


@dataclass(frozen=True)
class ThrottleStats:
    """Frozen snapshot of throttle statistics.

    Attributes:
        received: Calls made to the throttle.
        executed: Calls that ran, immediately or from the queue.
        queued: Calls that were deferred.
        drained: Deferred calls run by the drain loop.
        failed: Drained calls that raised.
    """

    received: int = 0
    executed: int = 0
    queued: int = 0
    drained: int = 0
    failed: int = 0


class Throttle(ABC):
    """Base class for rate-limited function wrappers.

    Args:
        fn: The function to rate-limit.
        scheduler: Host scheduler providing time and delayed callbacks.
            Defaults to an AsyncioScheduler on the running loop.
        name: Identifier used in logs. Defaults to ``fn``'s qualified name.

    Raises:
        ThrottleConfigError: If ``fn`` is not callable.
    """

    def __init__(
        self,
        fn: Callable[..., Any],
        *,
        scheduler: Scheduler | None = None,
        name: str | None = None,
    ):
        if not callable(fn):
            raise ThrottleConfigError(f"fn must be callable, got {fn!r}")
        # Metadata first, so nothing copied from fn.__dict__ shadows the state below
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._scheduler: Scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._name = name or getattr(fn, "__qualname__", None) or type(fn).__name__
        self._queue: deque[PendingCall] = deque()
        self._timer: TimerHandle | None = None
        self._draining = False

        self._received = 0
        self._executed = 0
        self._queued = 0
        self._drained = 0
        self._failed = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def timer(self) -> TimerHandle | None:
        """The drain timer, or None when no drain is armed."""
        return self._timer

    @property
    def queue_depth(self) -> int:
        return len(self._queue)

    @property
    def stats(self) -> ThrottleStats:
        """Frozen snapshot of throttle statistics."""
        return ThrottleStats(
            received=self._received,
            executed=self._executed,
            queued=self._queued,
            drained=self._drained,
            failed=self._failed,
        )

    def __get__(self, instance, owner=None):
        # Stored on a class, the throttle binds like a method; every
        # instance shares this one throttle's queue and timers.
        if instance is None:
            return self
        return types.MethodType(self, instance)

    def __call__(self, *args: Any, **kwargs: Any) -> TimerHandle | None:
        call = PendingCall(self._fn, args, kwargs or None)
        self._received += 1

        if self._is_busy():
            self._enqueue(call)
            return self._timer

        # Whatever timer is left has fired or been cancelled
        self._timer = None

        if self._queue:
            # Drain was cancelled externally with calls still waiting.
            self._enqueue(call)
            self._resume()
            return self._timer

        return self._dispatch(call)

    # -- subclass hooks -------------------------------------------------

    @abstractmethod
    def _dispatch(self, call: PendingCall) -> TimerHandle | None:
        """Admit or defer a call when no drain is pending."""

    @abstractmethod
    def _drain(self) -> None:
        """Run queued calls when the drain timer fires."""

    @abstractmethod
    def _resume_delay(self) -> Duration:
        """Delay before draining a queue left stranded by a cancelled timer."""

    # -- shared helpers -------------------------------------------------

    def _is_busy(self) -> bool:
        return self._draining or (self._timer is not None and self._timer.pending)

    def _arm(self, delay: Duration) -> TimerHandle:
        self._timer = self._scheduler.schedule(delay, self._on_timer, label=f"drain::{self._name}")
        return self._timer

    def _resume(self) -> None:
        logger.debug(
            "[%.3f][%s] Resuming stalled queue; queue_depth=%d",
            self._now_s(), self._name, len(self._queue),
        )
        self._arm(self._resume_delay())

    def _on_timer(self) -> None:
        self._draining = True
        try:
            self._drain()
        finally:
            self._draining = False

    def _enqueue(self, call: PendingCall) -> None:
        self._queue.append(call)
        self._queued += 1
        logger.debug(
            "[%.3f][%s] Queued call; queue_depth=%d",
            self._now_s(), self._name, len(self._queue),
        )

    def _execute_now(self, call: PendingCall) -> None:
        """Run a call on the caller's stack; exceptions propagate to the caller."""
        self._executed += 1
        logger.debug("[%.3f][%s] Executing immediately", self._now_s(), self._name)
        call()

    def _execute_queued(self, call: PendingCall) -> None:
        """Run a dequeued call inside a timer callback.

        There is no caller to hand an exception to, so it is logged and
        counted and the drain carries on with the next entry.
        """
        self._executed += 1
        self._drained += 1
        try:
            call()
        except Exception:
            self._failed += 1
            logger.exception(
                "[%.3f][%s] Queued call raised; continuing drain",
                self._now_s(), self._name,
            )

    def _now_s(self) -> float:
        return self._scheduler.now.to_seconds()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._name!r}, queue_depth={len(self._queue)}, "
            f"timer={self._timer!r})"
        )
