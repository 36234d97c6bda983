"""Unit tests for Instant and Duration."""

from __future__ import annotations

import pytest

from callthrottle.core.temporal import Duration, Instant


class TestDuration:

    def test_from_millis_round_trip(self):
        assert Duration.from_millis(1500).to_millis() == 1500.0
        assert Duration.from_millis(1500).to_seconds() == 1.5

    def test_from_seconds_uses_nanoseconds(self):
        assert Duration.from_seconds(0.25).nanoseconds == 250_000_000

    def test_fractional_millis(self):
        assert Duration.from_millis(0.5).nanoseconds == 500_000

    def test_arithmetic(self):
        assert Duration.from_millis(300) + Duration.from_millis(200) == Duration.from_millis(500)
        assert Duration.from_millis(300) - Duration.from_millis(200) == Duration.from_millis(100)
        assert Duration.from_millis(100) * 3 == Duration.from_millis(300)
        assert 2 * Duration.from_millis(100) == Duration.from_millis(200)

    def test_ordering(self):
        assert Duration.ZERO < Duration(1)
        assert Duration.from_millis(2) >= Duration.from_millis(2)
        assert Duration.from_millis(3) > Duration.from_millis(2)

    def test_not_equal_to_instant(self):
        assert Duration(5) != Instant(5)


class TestInstant:

    def test_epoch_is_zero(self):
        assert Instant.Epoch.nanoseconds == 0

    def test_add_duration(self):
        t = Instant.from_millis(1000) + Duration.from_millis(250)
        assert t == Instant.from_millis(1250)

    def test_subtract_instants_gives_duration(self):
        elapsed = Instant.from_millis(1250) - Instant.from_millis(1000)
        assert isinstance(elapsed, Duration)
        assert elapsed == Duration.from_millis(250)

    def test_subtract_duration_gives_instant(self):
        earlier = Instant.from_millis(1250) - Duration.from_millis(250)
        assert isinstance(earlier, Instant)
        assert earlier == Instant.from_millis(1000)

    def test_ordering_is_consistent(self):
        a = Instant.from_millis(1)
        b = Instant.from_millis(2)
        assert a < b and a <= b and b > a and b >= a
        assert not (a > b) and not (a >= b)
        assert a <= Instant.from_millis(1)

    def test_hashable(self):
        assert len({Instant.from_millis(1), Instant.from_millis(1), Instant.from_millis(2)}) == 2

    def test_cannot_add_instants(self):
        with pytest.raises(TypeError):
            Instant.from_millis(1) + Instant.from_millis(2)
