"""Unit tests for TimerHandle's pending flag and cancellation."""

from __future__ import annotations

from callthrottle.core.temporal import Instant
from callthrottle.core.timer import TimerHandle


def test_new_handle_is_pending():
    handle = TimerHandle(Instant.from_millis(10), lambda: None, "t")
    assert handle.pending
    assert handle.is_pending()


def test_fire_runs_callback_once_and_clears_pending():
    fired: list[bool] = []
    handle = TimerHandle(Instant.Epoch, lambda: fired.append(handle.pending))

    handle.fire()
    handle.fire()

    # The callback already sees the handle as fired
    assert fired == [False]
    assert not handle.pending


def test_cancel_prevents_fire_and_calls_hook():
    fired: list[int] = []
    hooks: list[str] = []
    handle = TimerHandle(Instant.Epoch, lambda: fired.append(1))
    handle.bind_cancel(lambda: hooks.append("cancelled"))

    assert handle.cancel() is True
    handle.fire()

    assert fired == []
    assert hooks == ["cancelled"]
    assert not handle.is_pending()


def test_cancel_is_idempotent():
    hooks: list[str] = []
    handle = TimerHandle(Instant.Epoch, lambda: None)
    handle.bind_cancel(lambda: hooks.append("cancelled"))

    assert handle.cancel() is True
    assert handle.cancel() is False
    assert hooks == ["cancelled"]


def test_cancel_after_fire_returns_false():
    handle = TimerHandle(Instant.Epoch, lambda: None)
    handle.fire()
    assert handle.cancel() is False


def test_repr_shows_state():
    handle = TimerHandle(Instant.Epoch, lambda: None, "drain::send")
    assert "pending" in repr(handle)
    handle.cancel()
    assert "done" in repr(handle)
