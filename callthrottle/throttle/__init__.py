"""Rate-limited function wrappers that defer excess calls instead of dropping them.

This module provides:
- IntervalThrottle / make_throttle: one execution per fixed interval
- BurstThrottle / make_burst_throttle: immediate bursts, then a steady rate
- CapacityThrottle / make_capacity_throttle: at most N executions per sliding window

Example:
    from callthrottle.throttle import make_capacity_throttle

    fetch = make_capacity_throttle(client.get, count=5, window_ms=1000)
    for url in urls:
        fetch(url)
"""

from callthrottle.throttle.base import PendingCall, Throttle, ThrottleStats
from callthrottle.throttle.burst import BurstThrottle, make_burst_throttle
from callthrottle.throttle.capacity import CapacityThrottle, make_capacity_throttle
from callthrottle.throttle.interval import IntervalThrottle, make_throttle

__all__ = [
    "BurstThrottle",
    "CapacityThrottle",
    "IntervalThrottle",
    "PendingCall",
    "Throttle",
    "ThrottleStats",
    "make_burst_throttle",
    "make_capacity_throttle",
    "make_throttle",
]
