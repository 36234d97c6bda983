"""Wait for a group of asynchronous actions to finish."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

Action = Callable[[Callable[..., None]], Any]


def latch(actions: Sequence[Action], callback: Callable[..., Any]) -> list[Any]:
    """Start every action and call ``callback`` once all of them are done.

    Each action is called with a ``done`` function and should call it when
    its work completes. ``callback`` receives the arguments of the final
    ``done`` call; any further ``done`` calls are ignored. With no actions,
    ``callback`` runs immediately.

    Returns:
        Whatever each action returned, typically a handle for cancelling it.
    """
    remaining = len(actions)
    if remaining == 0:
        callback()
        return []

    def done(*args: Any, **kwargs: Any) -> None:
        nonlocal remaining
        remaining -= 1
        if remaining == 0:
            callback(*args, **kwargs)

    return [action(done) for action in actions]
