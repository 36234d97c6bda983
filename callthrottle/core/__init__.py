"""Time, timers and schedulers the throttles run on."""

from callthrottle.core.clock import Clock, ManualClock, MonotonicClock
from callthrottle.core.event import Event
from callthrottle.core.event_heap import EventHeap
from callthrottle.core.scheduler import AsyncioScheduler, Scheduler
from callthrottle.core.simulation import SimulatedScheduler, SimulationSummary
from callthrottle.core.temporal import Duration, Instant
from callthrottle.core.timer import TimerHandle

__all__ = [
    "AsyncioScheduler",
    "Clock",
    "Duration",
    "Event",
    "EventHeap",
    "Instant",
    "ManualClock",
    "MonotonicClock",
    "Scheduler",
    "SimulatedScheduler",
    "SimulationSummary",
    "TimerHandle",
]
