"""Unit tests for UniqueIdGenerator and the module-level ID helpers."""

from __future__ import annotations

import threading

from callthrottle.utils.ids import (
    UniqueIdGenerator,
    default_generator,
    get_unique_id,
    get_unique_prefix_id,
)


class TestPlainIds:

    def test_counts_from_zero(self):
        gen = UniqueIdGenerator()
        assert [gen.next_id() for _ in range(3)] == [0, 1, 2]

    def test_reset_returns_zero_then_continues_from_one(self):
        gen = UniqueIdGenerator()
        gen.next_id()
        gen.next_id()

        assert gen.next_id(reset=True) == 0
        assert gen.next_id() == 1
        assert gen.next_id() == 2

    def test_generators_are_independent(self):
        a = UniqueIdGenerator()
        b = UniqueIdGenerator()
        a.next_id()
        a.next_id()
        assert b.next_id() == 0


class TestPrefixedIds:

    def test_each_prefix_counts_separately(self):
        gen = UniqueIdGenerator()
        assert gen.next_prefixed("req-") == "req-0"
        assert gen.next_prefixed("req-") == "req-1"
        assert gen.next_prefixed("job-") == "job-0"

    def test_reset_only_affects_that_prefix(self):
        gen = UniqueIdGenerator()
        gen.next_prefixed("a")
        gen.next_prefixed("a")
        gen.next_prefixed("b")

        assert gen.next_prefixed("a", reset=True) == "a0"
        assert gen.next_prefixed("a") == "a1"
        assert gen.next_prefixed("b") == "b1"

    def test_prefixed_and_plain_do_not_interact(self):
        gen = UniqueIdGenerator()
        gen.next_prefixed("x")
        assert gen.next_id() == 0


class TestReset:

    def test_reset_all(self):
        gen = UniqueIdGenerator()
        gen.next_id()
        gen.next_prefixed("p")

        gen.reset()

        assert gen.next_id() == 0
        assert gen.next_prefixed("p") == "p0"

    def test_reset_single_prefix(self):
        gen = UniqueIdGenerator()
        gen.next_id()
        gen.next_prefixed("p")
        gen.next_prefixed("q")

        gen.reset("p")

        assert gen.next_prefixed("p") == "p0"
        assert gen.next_prefixed("q") == "q1"
        assert gen.next_id() == 1


def test_thread_safety():
    gen = UniqueIdGenerator()
    results: list[int] = []
    lock = threading.Lock()

    def worker():
        local = [gen.next_id() for _ in range(1000)]
        with lock:
            results.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == list(range(8000))


def test_module_helpers_use_default_generator():
    default_generator().reset()
    try:
        assert get_unique_id() == 0
        assert get_unique_id() == 1
        assert get_unique_prefix_id("evt") == "evt0"
        assert get_unique_id(reset=True) == 0
    finally:
        default_generator().reset()
