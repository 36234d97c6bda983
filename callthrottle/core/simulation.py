"""Deterministic virtual-time scheduler.

SimulatedScheduler is a small discrete-event loop: timers are pushed onto
an EventHeap and fired in (time, insertion order) when the owner calls
``run`` or ``advance``. Time only moves while the loop runs, and jumps
straight from one due timer to the next, so throttle behaviour over
minutes of wall time can be checked in microseconds.

Example:
    sim = SimulatedScheduler()
    limited = make_throttle(send, 1000, scheduler=sim)
    limited("a")
    limited("b")
    sim.advance(Duration.from_millis(1000))  # "b" runs here
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from callthrottle.core.clock import ManualClock
from callthrottle.core.event import Event
from callthrottle.core.event_heap import EventHeap
from callthrottle.core.scheduler import check_delay
from callthrottle.core.temporal import Duration, Instant
from callthrottle.core.timer import TimerHandle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationSummary:
    """Frozen summary of one ``run`` call."""

    events_processed: int = 0
    events_cancelled: int = 0
    end_time: Instant = Instant.Epoch


class SimulatedScheduler:
    """Scheduler that runs timers against a manually advanced clock.

    Args:
        start_time: Initial clock reading.
    """

    def __init__(self, start_time: Instant = Instant.Epoch):
        self._clock = ManualClock(start_time)
        self._event_heap = EventHeap()
        self._events_processed = 0

    @property
    def now(self) -> Instant:
        return self._clock.now

    @property
    def pending_events(self) -> int:
        """Number of scheduled timers that have not fired or been cancelled."""
        return self._event_heap.live_size()

    @property
    def events_processed(self) -> int:
        """Total timers fired over the scheduler's lifetime."""
        return self._events_processed

    def schedule(
        self,
        delay: Duration,
        callback: Callable[[], object],
        label: str = "",
    ) -> TimerHandle:
        check_delay(delay)
        deadline = self.now + delay
        handle = TimerHandle(deadline, callback, label)
        event = Event(deadline, handle)
        handle.bind_cancel(event.cancel)
        self._event_heap.push(event)
        logger.debug(
            "[%.3f] Scheduled %r for %.3f",
            self.now.to_seconds(), label, deadline.to_seconds(),
        )
        return handle

    def run(self, until: Instant | None = None) -> SimulationSummary:
        """Fire due timers in order.

        Args:
            until: Stop once the next timer is later than this instant and
                leave the clock at ``until``. When omitted, run until no
                timers remain.

        Returns:
            A summary of the events fired and skipped during this call.
        """
        processed = 0
        cancelled = 0

        while True:
            event, skipped = self._event_heap.pop_due(until)
            cancelled += skipped
            if event is None:
                break

            self._clock.update(event.time)
            event.invoke()
            processed += 1

        if until is not None and until > self.now:
            self._clock.update(until)

        self._events_processed += processed
        logger.debug(
            "[%.3f] Run finished: processed=%d cancelled=%d",
            self.now.to_seconds(), processed, cancelled,
        )
        return SimulationSummary(
            events_processed=processed,
            events_cancelled=cancelled,
            end_time=self.now,
        )

    def advance(self, delay: Duration) -> SimulationSummary:
        """Run all timers due within ``delay`` of the current time."""
        check_delay(delay)
        return self.run(until=self.now + delay)

    def advance_ms(self, millis: float) -> SimulationSummary:
        return self.advance(Duration.from_millis(millis))
