"""Execution recording for checking and visualising throttle behaviour.

ExecutionRecorder wraps the function a throttle guards and notes the
scheduler time and arguments of every execution. The record can be
queried directly (``max_in_window``, ``gaps_ms``), exported to a pandas
DataFrame, or plotted as a cumulative step chart.

Example:
    sim = SimulatedScheduler()
    recorder = ExecutionRecorder(sim)
    limited = make_capacity_throttle(recorder.wrap(send), 5, 1000, scheduler=sim)
    for i in range(20):
        limited(i)
    sim.run()
    assert recorder.max_in_window(1000) <= 5
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pandas as pd

from callthrottle.core.scheduler import Scheduler
from callthrottle.core.temporal import Duration, Instant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionRecord:
    """One observed execution."""

    seq: int
    time: Instant
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)


class ExecutionRecorder:
    """Records when a wrapped function actually ran.

    Args:
        scheduler: Source of timestamps; use the same scheduler the
            throttle runs on.
    """

    def __init__(self, scheduler: Scheduler):
        self._scheduler = scheduler
        self._records: list[ExecutionRecord] = []

    def wrap(self, fn: Callable[..., Any] | None = None) -> Callable[..., Any]:
        """Return a function that records each call and then calls ``fn``.

        With no ``fn`` the returned function only records.
        """

        def recorded(*args: Any, **kwargs: Any) -> Any:
            self._records.append(
                ExecutionRecord(
                    seq=len(self._records),
                    time=self._scheduler.now,
                    args=args,
                    kwargs=kwargs,
                )
            )
            if fn is not None:
                return fn(*args, **kwargs)
            return None

        if fn is not None:
            functools.update_wrapper(recorded, fn)
        return recorded

    @property
    def records(self) -> list[ExecutionRecord]:
        return list(self._records)

    @property
    def times(self) -> list[Instant]:
        return [record.time for record in self._records]

    @property
    def args(self) -> list[tuple]:
        return [record.args for record in self._records]

    @property
    def count(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()

    def gaps_ms(self) -> list[float]:
        """Milliseconds between consecutive executions."""
        times = self.times
        return [(later - earlier).to_millis() for earlier, later in zip(times, times[1:])]

    def max_in_window(self, window_ms: float) -> int:
        """Largest number of executions in any half-open ``[t, t + window)``.

        Only windows starting at an execution time are considered; any other
        window holds no more executions than one of these.
        """
        window = Duration.from_millis(window_ms)
        times = sorted(self.times)
        best = 0
        end = 0
        for start, t in enumerate(times):
            while end < len(times) and times[end] - t < window:
                end += 1
            best = max(best, end - start)
        return best

    def to_dataframe(self) -> pd.DataFrame:
        """Executions as a DataFrame with ``seq``, ``time_ms`` and ``args`` columns."""
        return pd.DataFrame(
            {
                "seq": [record.seq for record in self._records],
                "time_ms": [record.time.to_millis() for record in self._records],
                "args": [record.args for record in self._records],
            },
            columns=["seq", "time_ms", "args"],
        )

    def plot(self, path: str | Path, title: str | None = None) -> Path:
        """Write a cumulative-executions step chart to ``path``.

        Returns:
            The path written.
        """
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        df = self.to_dataframe()
        fig, ax = plt.subplots(figsize=(12, 5))
        ax.step(df["time_ms"], df["seq"] + 1, where="post", label="executed")
        ax.set_xlabel("Time (ms)")
        ax.set_ylabel("Cumulative executions")
        ax.set_title(title or "Throttled executions")
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper left")
        fig.tight_layout()
        fig.savefig(path)
        plt.close(fig)

        logger.info("Saved execution plot to %s", path)
        return path
