"""Priority queue of pending timer events for the simulated scheduler."""

from __future__ import annotations

import heapq

from callthrottle.core.event import Event
from callthrottle.core.temporal import Instant


class EventHeap:
    """Events kept in firing order.

    Cancelled events are not removed when cancelled; ``pop_due`` discards
    them as it reaches them and reports how many it skipped.
    """

    def __init__(self) -> None:
        self._heap: list[Event] = []

    def push(self, event: Event) -> None:
        heapq.heappush(self._heap, event)

    def pop_due(self, until: Instant | None = None) -> tuple[Event | None, int]:
        """Remove and return the earliest live event due at or before ``until``.

        Returns:
            ``(event, skipped)`` where ``event`` is None when nothing live is
            due, and ``skipped`` counts cancelled events discarded on the way.
        """
        skipped = 0
        while self._heap:
            if until is not None and self._heap[0].time > until:
                break
            event = heapq.heappop(self._heap)
            if event.cancelled:
                skipped += 1
                continue
            return event, skipped
        return None, skipped

    def live_size(self) -> int:
        """Number of events that have not been cancelled."""
        return sum(1 for event in self._heap if not event.cancelled)

    def __len__(self) -> int:
        return len(self._heap)
