"""Clocks that report the current time as an Instant."""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable

from callthrottle.core.temporal import Instant


@runtime_checkable
class Clock(Protocol):
    """Anything with a ``now`` property returning an Instant."""

    @property
    def now(self) -> Instant:
        ...


class MonotonicClock:
    """Wall-time clock backed by ``time.monotonic()``.

    This is the same clock asyncio's default event loop uses, so deadlines
    computed from it line up with ``loop.call_later``.
    """

    @property
    def now(self) -> Instant:
        return Instant.from_seconds(time.monotonic())


class ManualClock:
    """Clock whose time only moves when ``update`` is called."""

    def __init__(self, start_time: Instant = Instant.Epoch):
        self._current_time = start_time

    @property
    def now(self) -> Instant:
        return self._current_time

    def update(self, time: Instant) -> None:
        if time < self._current_time:
            raise ValueError(f"Clock cannot move backwards: {time!r} < {self._current_time!r}")
        self._current_time = time
