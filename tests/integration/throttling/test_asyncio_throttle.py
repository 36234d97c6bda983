"""Throttles running on a real asyncio event loop.

These use short intervals so the suite stays fast; timing assertions
leave a few milliseconds of slack for loop scheduling jitter.

Run:
    pytest tests/integration/throttling/test_asyncio_throttle.py -v
"""

from __future__ import annotations

import asyncio

from callthrottle import (
    AsyncioScheduler,
    Duration,
    ExecutionRecorder,
    make_burst_throttle,
    make_capacity_throttle,
    make_throttle,
)


def test_interval_throttle_spaces_calls_on_event_loop():
    async def scenario():
        scheduler = AsyncioScheduler()
        recorder = ExecutionRecorder(scheduler)
        limited = make_throttle(recorder.wrap(), 50, scheduler=scheduler)

        for i in range(4):
            limited(i)
        assert recorder.count == 1

        await asyncio.sleep(0.3)
        return recorder

    recorder = asyncio.run(scenario())

    assert recorder.args == [(0,), (1,), (2,), (3,)]
    assert all(gap >= 45 for gap in recorder.gaps_ms())


def test_throttle_created_before_loop_starts():
    scheduler = AsyncioScheduler()
    seen: list[int] = []
    limited = make_throttle(seen.append, 20, scheduler=scheduler)

    async def scenario():
        limited(1)
        limited(2)
        await asyncio.sleep(0.1)

    asyncio.run(scenario())

    assert seen == [1, 2]


def test_burst_then_spacing():
    async def scenario():
        scheduler = AsyncioScheduler()
        recorder = ExecutionRecorder(scheduler)
        limited = make_burst_throttle(recorder.wrap(), 2, 200, 40, scheduler=scheduler)

        for i in range(4):
            limited(i)
        assert recorder.count == 2

        await asyncio.sleep(0.3)
        return recorder

    recorder = asyncio.run(scenario())

    assert recorder.args == [(0,), (1,), (2,), (3,)]


def test_capacity_throttle_respects_window():
    async def scenario():
        scheduler = AsyncioScheduler()
        recorder = ExecutionRecorder(scheduler)
        limited = make_capacity_throttle(recorder.wrap(), 3, 60, scheduler=scheduler)

        for i in range(7):
            limited(i)
        assert recorder.count == 3

        await asyncio.sleep(0.4)
        return recorder

    recorder = asyncio.run(scenario())

    assert [args[0] for args in recorder.args] == list(range(7))
    # Each batch of three starts a full window after the previous batch began;
    # the 0.1ms allowance covers float rounding of the monotonic clock.
    times = recorder.times
    assert (times[3] - times[0]).to_millis() >= 59.9
    assert (times[6] - times[3]).to_millis() >= 59.9


def test_cancelled_timer_never_fires():
    async def scenario():
        scheduler = AsyncioScheduler()
        fired: list[str] = []
        timer = scheduler.schedule(Duration.from_millis(20), lambda: fired.append("x"))
        assert timer.pending
        assert timer.cancel() is True

        await asyncio.sleep(0.06)
        return timer, fired

    timer, fired = asyncio.run(scenario())

    assert fired == []
    assert not timer.pending
