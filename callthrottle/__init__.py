"""callthrottle: rate-limited function wrappers that defer instead of drop.

Quick start:
    import asyncio
    from callthrottle import make_throttle

    async def main():
        log = make_throttle(print, interval_ms=500)
        for i in range(3):
            log(i)          # 0 now, 1 at 500ms, 2 at 1000ms
        await asyncio.sleep(1.1)

    asyncio.run(main())

For deterministic runs, pass ``scheduler=SimulatedScheduler()`` and drive
time with ``run()`` / ``advance()``.
"""

import logging

from callthrottle.core import (
    AsyncioScheduler,
    Duration,
    Instant,
    Scheduler,
    SimulatedScheduler,
    SimulationSummary,
    TimerHandle,
)
from callthrottle.errors import ThrottleConfigError
from callthrottle.instrumentation import ExecutionRecord, ExecutionRecorder
from callthrottle.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_file_logging,
    enable_json_logging,
    enable_timed_file_logging,
    set_level,
    set_module_level,
)
from callthrottle.throttle import (
    BurstThrottle,
    CapacityThrottle,
    IntervalThrottle,
    PendingCall,
    Throttle,
    ThrottleStats,
    make_burst_throttle,
    make_capacity_throttle,
    make_throttle,
)
from callthrottle.utils import (
    DelayedMap,
    UniqueIdGenerator,
    delay_map,
    get_unique_id,
    get_unique_prefix_id,
    group,
    latch,
    randomize,
    safe_randomize,
    split,
)

# Silent unless the application configures logging
logging.getLogger("callthrottle").addHandler(logging.NullHandler())

__all__ = [
    # Throttles
    "BurstThrottle",
    "CapacityThrottle",
    "IntervalThrottle",
    "PendingCall",
    "Throttle",
    "ThrottleStats",
    "make_burst_throttle",
    "make_capacity_throttle",
    "make_throttle",
    # Time & scheduling
    "AsyncioScheduler",
    "Duration",
    "Instant",
    "Scheduler",
    "SimulatedScheduler",
    "SimulationSummary",
    "TimerHandle",
    # Errors
    "ThrottleConfigError",
    # Instrumentation
    "ExecutionRecord",
    "ExecutionRecorder",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_file_logging",
    "enable_json_logging",
    "enable_timed_file_logging",
    "set_level",
    "set_module_level",
    # Utilities
    "DelayedMap",
    "UniqueIdGenerator",
    "delay_map",
    "get_unique_id",
    "get_unique_prefix_id",
    "group",
    "latch",
    "randomize",
    "safe_randomize",
    "split",
]
