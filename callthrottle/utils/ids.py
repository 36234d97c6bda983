"""Monotonically increasing IDs, optionally namespaced by a string prefix.

State lives in a UniqueIdGenerator instance rather than module globals, so
tests and independent subsystems can each hold their own counters. The
module-level helpers delegate to a shared default instance.
"""

from __future__ import annotations

import threading


class UniqueIdGenerator:
    """Thread-safe counters for plain and prefixed IDs.

    A reset returns 0 and leaves the counter at 1, exactly as if the
    counter had just been created and used once.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter = 0
        self._prefixed: dict[str, int] = {}

    def next_id(self, reset: bool = False) -> int:
        """Return the next integer ID, starting at 0."""
        with self._lock:
            if reset:
                self._counter = 1
                return 0
            value = self._counter
            self._counter += 1
            return value

    def next_prefixed(self, prefix: str, reset: bool = False) -> str:
        """Return ``prefix`` followed by the next ID for that prefix.

        Each prefix counts independently; resetting one leaves the others
        untouched.
        """
        with self._lock:
            if reset:
                self._prefixed[prefix] = 1
                return f"{prefix}0"
            value = self._prefixed.get(prefix, 0)
            self._prefixed[prefix] = value + 1
            return f"{prefix}{value}"

    def reset(self, prefix: str | None = None) -> None:
        """Return counters to their initial state.

        Args:
            prefix: Only reset this prefix. When omitted, the plain counter
                and every prefix are cleared.
        """
        with self._lock:
            if prefix is None:
                self._counter = 0
                self._prefixed.clear()
            else:
                self._prefixed.pop(prefix, None)


_default_generator = UniqueIdGenerator()


def default_generator() -> UniqueIdGenerator:
    return _default_generator


def get_unique_id(reset: bool = False) -> int:
    return _default_generator.next_id(reset)


def get_unique_prefix_id(prefix: str, reset: bool = False) -> str:
    return _default_generator.next_prefixed(prefix, reset)
