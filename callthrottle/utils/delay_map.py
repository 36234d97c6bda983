"""Apply a callback to items one at a time with a delay between them."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from callthrottle.core.scheduler import AsyncioScheduler, Scheduler
from callthrottle.core.timer import TimerHandle
from callthrottle.throttle.base import positive_duration

logger = logging.getLogger(__name__)


class DelayedMap:
    """A running delay_map; exposes the current timer so it can be stopped.

    The delay is measured from the end of one callback to the start of the
    next, so a slow callback pushes the rest of the sequence back.
    """

    def __init__(
        self,
        items: Iterable[Any],
        callback: Callable[[Any], Any],
        delay_ms: float,
        last: Callable[[], Any] | None = None,
        *,
        scheduler: Scheduler | None = None,
    ):
        self._items = list(items)
        self._callback = callback
        self._delay = positive_duration("delay_ms", delay_ms)
        self._last = last
        self._scheduler = scheduler if scheduler is not None else AsyncioScheduler()
        self._index = 0
        self._timer: TimerHandle | None = None
        self._finished = False

    @property
    def timer(self) -> TimerHandle | None:
        return self._timer

    @property
    def processed(self) -> int:
        return self._index

    @property
    def finished(self) -> bool:
        return self._finished

    def start(self) -> DelayedMap:
        self._step()
        return self

    def cancel(self) -> bool:
        """Stop the sequence; items not yet processed are skipped."""
        if self._timer is None:
            return False
        return self._timer.cancel()

    def _step(self) -> None:
        if self._index < len(self._items):
            item = self._items[self._index]
            self._index += 1
            self._callback(item)
            self._timer = self._scheduler.schedule(self._delay, self._step, label="delay_map")
            return

        self._timer = None
        self._finished = True
        logger.debug("delay_map finished after %d items", self._index)
        if self._last is not None:
            self._last()


def delay_map(
    items: Iterable[Any],
    callback: Callable[[Any], Any],
    delay_ms: float,
    last: Callable[[], Any] | None = None,
    *,
    scheduler: Scheduler | None = None,
) -> DelayedMap:
    """Call ``callback`` on each item, waiting ``delay_ms`` after each one.

    The first item is processed synchronously. ``last`` runs one delay
    after the final item (immediately if ``items`` is empty).
    """
    return DelayedMap(items, callback, delay_ms, last, scheduler=scheduler).start()
