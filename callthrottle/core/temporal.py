"""Time values used by clocks, schedulers and throttles.

Both types store integer nanoseconds so that arithmetic and ordering are
exact. Throttle parameters are given in milliseconds and converted with
``Duration.from_millis``.

- Instant: a point in time (relative to the clock's own epoch).
- Duration: a span of time.
"""

from __future__ import annotations

from typing import Union

_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_MILLI = 1_000_000

Number = Union[int, float]


class Duration:
    """A span of time in integer nanoseconds."""

    __slots__ = ("nanoseconds",)

    ZERO: Duration

    def __init__(self, nanoseconds: int):
        self.nanoseconds = int(nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: Number) -> Duration:
        return cls(round(seconds * _NANOS_PER_SECOND))

    @classmethod
    def from_millis(cls, millis: Number) -> Duration:
        return cls(round(millis * _NANOS_PER_MILLI))

    def to_seconds(self) -> float:
        return self.nanoseconds / _NANOS_PER_SECOND

    def to_millis(self) -> float:
        return self.nanoseconds / _NANOS_PER_MILLI

    def __add__(self, other: Duration) -> Duration:
        if isinstance(other, Duration):
            return Duration(self.nanoseconds + other.nanoseconds)
        return NotImplemented

    def __sub__(self, other: Duration) -> Duration:
        if isinstance(other, Duration):
            return Duration(self.nanoseconds - other.nanoseconds)
        return NotImplemented

    def __mul__(self, factor: Number) -> Duration:
        if isinstance(factor, (int, float)):
            return Duration(round(self.nanoseconds * factor))
        return NotImplemented

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanoseconds == other.nanoseconds

    def __lt__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanoseconds < other.nanoseconds

    def __le__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanoseconds <= other.nanoseconds

    def __gt__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanoseconds > other.nanoseconds

    def __ge__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.nanoseconds >= other.nanoseconds

    def __hash__(self):
        return hash(("Duration", self.nanoseconds))

    def __repr__(self) -> str:
        return f"Duration({self.to_millis():g}ms)"


Duration.ZERO = Duration(0)


class Instant:
    """A point in time in integer nanoseconds since the clock's epoch."""

    __slots__ = ("nanoseconds",)

    Epoch: Instant

    def __init__(self, nanoseconds: int):
        self.nanoseconds = int(nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: Number) -> Instant:
        return cls(round(seconds * _NANOS_PER_SECOND))

    @classmethod
    def from_millis(cls, millis: Number) -> Instant:
        return cls(round(millis * _NANOS_PER_MILLI))

    def to_seconds(self) -> float:
        return self.nanoseconds / _NANOS_PER_SECOND

    def to_millis(self) -> float:
        return self.nanoseconds / _NANOS_PER_MILLI

    def __add__(self, other: Duration) -> Instant:
        if isinstance(other, Duration):
            return Instant(self.nanoseconds + other.nanoseconds)
        return NotImplemented

    def __sub__(self, other: Union[Instant, Duration]):
        # Instant - Instant is a Duration; Instant - Duration is an Instant
        if isinstance(other, Instant):
            return Duration(self.nanoseconds - other.nanoseconds)
        if isinstance(other, Duration):
            return Instant(self.nanoseconds - other.nanoseconds)
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds == other.nanoseconds

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds < other.nanoseconds

    def __le__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds <= other.nanoseconds

    def __gt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds > other.nanoseconds

    def __ge__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds >= other.nanoseconds

    def __hash__(self):
        return hash(("Instant", self.nanoseconds))

    def __repr__(self) -> str:
        return f"Instant({self.to_millis():g}ms)"


Instant.Epoch = Instant(0)
