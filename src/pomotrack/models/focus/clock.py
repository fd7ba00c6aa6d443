"""Countdown clock for focus sessions."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime


def local_now() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


class SessionClock:
    """Countdown driven by discrete one-second ticks.

    The clock never sleeps. Whoever owns the event loop calls ``tick()`` once
    per second of wall-clock time while the clock is running.
    """

    def __init__(
        self, seconds: int = 0, now: Callable[[], datetime] | None = None
    ) -> None:
        self.now = now or local_now
        self.total_seconds = max(0, seconds)
        self.seconds_remaining = self.total_seconds
        self.is_running = False
        self.started_at: datetime | None = None

    def load(self, seconds: int) -> None:
        """Stop the clock and load a fresh countdown of ``seconds``."""
        self.total_seconds = max(0, seconds)
        self.seconds_remaining = self.total_seconds
        self.is_running = False
        self.started_at = None

    def reset(self, seconds: int) -> None:
        """Discard progress and reload the full duration."""
        self.load(seconds)

    def start(self) -> bool:
        """Start counting down. Returns False if already running or at zero."""
        if self.is_running or self.seconds_remaining == 0:
            return False
        self.is_running = True
        self.started_at = self.now()
        return True

    def pause(self) -> float:
        """Stop counting down.

        Returns:
            Wall-clock seconds elapsed since the most recent ``start()``,
            or 0 if the clock was not running.
        """
        if not self.is_running:
            return 0.0

        elapsed = 0.0
        if self.started_at is not None:
            elapsed = (self.now() - self.started_at).total_seconds()

        self.is_running = False
        self.started_at = None
        return max(0.0, elapsed)

    def lap(self) -> float:
        """Seconds since the last start or lap. The clock keeps running."""
        if not self.is_running or self.started_at is None:
            return 0.0

        now = self.now()
        elapsed = (now - self.started_at).total_seconds()
        self.started_at = now
        return max(0.0, elapsed)

    def tick(self) -> bool:
        """Advance the countdown by one second.

        Returns True exactly once, on the tick that reaches zero. The clock
        stops at that point so a zero-crossing is never signalled twice.
        """
        if not self.is_running or self.seconds_remaining == 0:
            return False

        self.seconds_remaining -= 1
        if self.seconds_remaining == 0:
            self.is_running = False
            self.started_at = None
            return True
        return False

    @property
    def elapsed_seconds(self) -> int:
        """Seconds counted down so far in the loaded session."""
        return self.total_seconds - self.seconds_remaining

    def progress_percentage(self) -> float:
        """Share of the loaded session already counted down, 0-100."""
        if self.total_seconds == 0:
            return 0.0
        return self.elapsed_seconds / self.total_seconds * 100
