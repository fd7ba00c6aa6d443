"""Unit tests for pomotrack.models.focus.clock."""

from __future__ import annotations

from conftest import FakeNow

from pomotrack.models.focus.clock import SessionClock, local_now


class TestSessionClockInit:
    def test_starts_stopped_with_full_duration(self):
        clock = SessionClock(90)
        assert clock.is_running is False
        assert clock.seconds_remaining == 90
        assert clock.total_seconds == 90
        assert clock.started_at is None

    def test_negative_duration_clamped_to_zero(self):
        clock = SessionClock(-5)
        assert clock.seconds_remaining == 0

    def test_default_time_source_is_aware(self):
        assert local_now().tzinfo is not None


class TestSessionClockStart:
    def test_start_records_instant(self, fake_now: FakeNow):
        clock = SessionClock(60, now=fake_now)
        assert clock.start() is True
        assert clock.is_running is True
        assert clock.started_at == fake_now()

    def test_start_twice_is_noop(self, fake_now: FakeNow):
        clock = SessionClock(60, now=fake_now)
        clock.start()
        first = clock.started_at
        fake_now.advance(seconds=10)
        assert clock.start() is False
        assert clock.started_at == first

    def test_cannot_start_at_zero(self):
        clock = SessionClock(0)
        assert clock.start() is False
        assert clock.is_running is False


class TestSessionClockTick:
    def test_tick_decrements_by_one(self):
        clock = SessionClock(10)
        clock.start()
        clock.tick()
        assert clock.seconds_remaining == 9

    def test_tick_when_stopped_does_nothing(self):
        clock = SessionClock(10)
        assert clock.tick() is False
        assert clock.seconds_remaining == 10

    def test_completion_signalled_exactly_once(self):
        clock = SessionClock(3)
        clock.start()
        signals = [clock.tick() for _ in range(6)]
        assert signals == [False, False, True, False, False, False]
        assert clock.seconds_remaining == 0
        assert clock.is_running is False

    def test_elapsed_and_progress(self):
        clock = SessionClock(4)
        clock.start()
        clock.tick()
        assert clock.elapsed_seconds == 1
        assert clock.progress_percentage() == 25.0

    def test_progress_of_empty_clock_is_zero(self):
        assert SessionClock(0).progress_percentage() == 0.0


class TestSessionClockPause:
    def test_pause_returns_wall_clock_seconds(self, fake_now: FakeNow):
        clock = SessionClock(600, now=fake_now)
        clock.start()
        fake_now.advance(seconds=125)
        assert clock.pause() == 125.0
        assert clock.is_running is False
        assert clock.started_at is None

    def test_pause_when_stopped_returns_zero(self):
        clock = SessionClock(600)
        assert clock.pause() == 0.0

    def test_pause_keeps_remaining(self):
        clock = SessionClock(600)
        clock.start()
        clock.tick()
        clock.pause()
        assert clock.seconds_remaining == 599

    def test_resume_measures_from_new_start(self, fake_now: FakeNow):
        clock = SessionClock(600, now=fake_now)
        clock.start()
        fake_now.advance(seconds=60)
        clock.pause()
        fake_now.advance(seconds=300)  # paused time is not counted
        clock.start()
        fake_now.advance(seconds=30)
        assert clock.pause() == 30.0

    def test_lap_returns_seconds_and_keeps_running(self, fake_now: FakeNow):
        clock = SessionClock(600, now=fake_now)
        clock.start()
        fake_now.advance(seconds=90)
        assert clock.lap() == 90.0
        assert clock.is_running is True
        assert clock.started_at == fake_now()

    def test_lap_measures_from_previous_lap(self, fake_now: FakeNow):
        clock = SessionClock(600, now=fake_now)
        clock.start()
        fake_now.advance(seconds=90)
        clock.lap()
        fake_now.advance(seconds=40)
        assert clock.pause() == 40.0

    def test_lap_when_stopped_returns_zero(self):
        clock = SessionClock(600)
        assert clock.lap() == 0.0


class TestSessionClockReset:
    def test_reset_reloads_full_duration(self):
        clock = SessionClock(60)
        clock.start()
        for _ in range(10):
            clock.tick()
        clock.reset(60)
        assert clock.seconds_remaining == 60
        assert clock.is_running is False

    def test_load_changes_total(self):
        clock = SessionClock(60)
        clock.load(300)
        assert clock.total_seconds == 300
        assert clock.seconds_remaining == 300
