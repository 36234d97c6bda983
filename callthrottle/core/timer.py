"""Timer handles returned by schedulers.

A TimerHandle owns its ``pending`` flag: it is True from creation until the
callback fires or the handle is cancelled. Throttles decide between
"execute now" and "enqueue" from this flag alone, never from scheduler
internals, and hand the handle back to callers so they can cancel a
pending drain.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from callthrottle.core.temporal import Instant

logger = logging.getLogger(__name__)


class TimerHandle:
    """Handle to a callback scheduled for a future instant.

    Attributes:
        deadline: When the callback is due to run.
        label: Human-readable tag for logging and debugging.
    """

    __slots__ = ("_callback", "_cancel_hook", "_pending", "deadline", "label")

    def __init__(
        self,
        deadline: Instant,
        callback: Callable[[], object],
        label: str = "",
    ):
        self.deadline = deadline
        self.label = label
        self._callback = callback
        self._cancel_hook: Callable[[], object] | None = None
        self._pending = True

    @property
    def pending(self) -> bool:
        """True until the callback has fired or the handle was cancelled."""
        return self._pending

    def is_pending(self) -> bool:
        return self._pending

    def bind_cancel(self, hook: Callable[[], object]) -> None:
        """Register the scheduler-side action that unschedules this timer."""
        self._cancel_hook = hook

    def cancel(self) -> bool:
        """Stop the callback from running.

        Returns:
            True if the timer was pending and is now cancelled, False if it
            had already fired or been cancelled.
        """
        if not self._pending:
            return False
        self._pending = False
        if self._cancel_hook is not None:
            self._cancel_hook()
        logger.debug("Cancelled timer %r due at %r", self.label, self.deadline)
        return True

    def fire(self) -> None:
        """Run the callback if still pending. Called by the scheduler."""
        if not self._pending:
            return
        # Cleared before the callback so the callback can observe a fired timer
        self._pending = False
        self._callback()

    def __repr__(self) -> str:
        state = "pending" if self._pending else "done"
        return f"TimerHandle({self.label!r}, deadline={self.deadline!r}, {state})"
