"""Heap entries for the simulated scheduler.

Each Event wraps one TimerHandle and the instant it is due. Sorting uses
(time, insertion_order) so timers due at the same instant fire in the
order they were scheduled.
"""

from __future__ import annotations

from itertools import count

from callthrottle.core.temporal import Instant
from callthrottle.core.timer import TimerHandle

_global_event_counter = count()


class Event:
    """A timer firing scheduled onto the EventHeap.

    Cancellation is lazy: a cancelled event stays on the heap and is
    skipped when popped.

    Attributes:
        time: When this event should be processed.
        handle: The timer to fire.
    """

    __slots__ = ("_cancelled", "_sort_index", "handle", "time")

    def __init__(self, time: Instant, handle: TimerHandle):
        self.time = time
        self.handle = handle
        self._sort_index = next(_global_event_counter)
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Mark this event as cancelled. Idempotent."""
        self._cancelled = True

    def invoke(self) -> None:
        self.handle.fire()

    def __lt__(self, other: Event) -> bool:
        """
        1. Time (Primary)
        2. Insert Order (Secondary - guarantees FIFO for simultaneous events)
        """
        if self.time != other.time:
            return self.time < other.time
        return self._sort_index < other._sort_index

    def __repr__(self) -> str:
        return f"Event({self.time!r}, {self.handle.label!r})"
