"""Tests for the clocks that stamp payment dates."""

from datetime import datetime, timedelta, timezone

import pytest

from marketplace_kernel.domain.clock import DeterministicClock, SystemClock


def test_system_clock_is_utc_aware():
    now = SystemClock().now()
    assert now.utcoffset() == timedelta(0)


class TestDeterministicClock:

    def test_stands_still(self):
        clock = DeterministicClock()
        assert clock.now() == clock.now() == DeterministicClock.DEFAULT_START

    def test_advance_by_seconds_or_delta(self):
        clock = DeterministicClock()
        start = clock.now()

        clock.advance(90)
        clock.advance(timedelta(days=1))

        assert clock.now() - start == timedelta(days=1, seconds=90)

    def test_set_time_converts_to_utc(self):
        clock = DeterministicClock()
        plus_two = timezone(timedelta(hours=2))

        clock.set_time(datetime(2020, 8, 15, 12, 0, tzinfo=plus_two))

        assert clock.now() == datetime(2020, 8, 15, 10, 0, tzinfo=timezone.utc)
        assert clock.now().tzinfo == timezone.utc

    def test_naive_times_rejected(self):
        with pytest.raises(ValueError):
            DeterministicClock(datetime(2020, 8, 15))
        with pytest.raises(ValueError):
            DeterministicClock().set_time(datetime(2020, 8, 15))

    def test_cannot_move_backwards(self):
        with pytest.raises(ValueError):
            DeterministicClock().advance(-1)
