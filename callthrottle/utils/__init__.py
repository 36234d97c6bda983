"""General-purpose helpers that sit alongside the throttles."""

from callthrottle.utils.delay_map import DelayedMap, delay_map
from callthrottle.utils.ids import (
    UniqueIdGenerator,
    default_generator,
    get_unique_id,
    get_unique_prefix_id,
)
from callthrottle.utils.latch import latch
from callthrottle.utils.sequences import group, randomize, safe_randomize, split

__all__ = [
    "DelayedMap",
    "UniqueIdGenerator",
    "default_generator",
    "delay_map",
    "get_unique_id",
    "get_unique_prefix_id",
    "group",
    "latch",
    "randomize",
    "safe_randomize",
    "split",
]
