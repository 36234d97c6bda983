"""Recording and analysis of throttled executions."""

from callthrottle.instrumentation.recorder import ExecutionRecord, ExecutionRecorder

__all__ = [
    "ExecutionRecord",
    "ExecutionRecorder",
]
