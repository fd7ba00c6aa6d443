"""Pomodoro cycling: work and break sessions driven by a countdown clock."""

from __future__ import annotations

import logging
import math
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Any

from pomotrack.models.config_models import FocusProgress, SessionConfig
from pomotrack.models.session import RuntimeState, SessionRecord, SessionType

from .analytics import today_session_stats
from .clock import SessionClock
from .history import SessionHistoryStore
from .ledger import TaskTimeLedger
from .notifier import Notifier, NullNotifier

logger = logging.getLogger(__name__)

AUTO_START_DELAY_SECONDS = 1
DEFAULT_TASK_TITLE = "Focus Session"
UNKNOWN_TASK_TITLE = "Unknown Task"

WORK_DONE_MESSAGE = "🍅 Work session completed! Time for a break."
BREAK_DONE_MESSAGE = "✨ Break time is over! Ready to focus?"

TodayStatsListener = Callable[[dict[str, int]], None]


def next_session_type(
    current: SessionType, sessions_completed: int, sessions_until_long_break: int
) -> SessionType:
    """
    Determine the session that follows ``current``.

    Args:
        current: Session type that just ended
        sessions_completed: Work sessions completed, including one that just ended
        sessions_until_long_break: Work sessions per long break

    Returns:
        The next session type
    """
    if current != "work":
        return "work"
    if sessions_completed > 0 and sessions_completed % sessions_until_long_break == 0:
        return "long_break"
    return "short_break"


def _whole_minutes(seconds: float) -> int:
    """Completed minutes in ``seconds``; a partial minute is not counted."""
    return math.floor(seconds / 60)


class SessionStateMachine:
    """Owns the Pomodoro cycle for one timer.

    Call ``tick()`` once per second from the event loop. When the clock runs
    out the finished session is recorded, focus time is credited to the
    selected task and the next session is loaded before ``tick()`` returns.
    """

    def __init__(
        self,
        config: SessionConfig,
        history: SessionHistoryStore,
        ledger: TaskTimeLedger,
        clock: SessionClock | None = None,
        notifier: Notifier | None = None,
        progress: FocusProgress | None = None,
        on_progress: Callable[[FocusProgress], None] | None = None,
    ):
        progress = progress or FocusProgress()

        self.config = config
        self.history = history
        self.ledger = ledger
        self.clock = clock or SessionClock()
        self.notifier = notifier or NullNotifier()
        self.on_progress = on_progress

        self.current_type: SessionType = progress.current_type
        self.sessions_completed = progress.sessions_completed
        self.selected_task_id: int | None = None
        self.seconds_spent_on_task = 0

        self._listeners: list[TodayStatsListener] = []
        self._auto_start_due: datetime | None = None
        self._load(self.current_type)

    # ------------------------------------------------------------------
    # Session bookkeeping
    # ------------------------------------------------------------------

    def _load(self, session_type: SessionType) -> None:
        self.current_type = session_type
        self._loaded_minutes = self.config.duration_for(session_type)
        self._session_started_at: datetime | None = None
        self._session_task_id: int | None = None
        self._session_task_title: str | None = None
        self._credited_minutes = 0
        self._run_seconds = 0.0
        self.seconds_spent_on_task = 0
        self.clock.load(self._loaded_minutes * 60)

    def _capture_task(self) -> None:
        """Remember which task this session is for and its current title."""
        self._session_task_id = self.selected_task_id
        if self.selected_task_id is None:
            self._session_task_title = DEFAULT_TASK_TITLE
            return

        task = self.ledger.find_task(self.selected_task_id)
        self._session_task_title = task.title if task else UNKNOWN_TASK_TITLE

    @property
    def session_in_progress(self) -> bool:
        return self._session_started_at is not None

    @property
    def auto_start_pending(self) -> bool:
        return self._auto_start_due is not None

    @property
    def task_title(self) -> str | None:
        """Title captured for the current session, if it has started."""
        return self._session_task_title

    @property
    def long_breaks_earned(self) -> int:
        return self.sessions_completed // self.config.sessions_until_long_break

    @property
    def state(self) -> RuntimeState:
        return RuntimeState(
            is_running=self.clock.is_running,
            seconds_remaining=self.clock.seconds_remaining,
            current_type=self.current_type,
            sessions_completed=self.sessions_completed,
            selected_task_id=self.selected_task_id,
            seconds_spent_on_task=self.seconds_spent_on_task,
        )

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def select_task(self, task_id: int | None) -> None:
        """
        Set or clear the task that receives focus time.

        Switching mid-session first credits the running time so far to the
        previous task. Minutes already credited stay with that task; the new
        task receives the rest of the session.
        """
        if self.session_in_progress and task_id != self._session_task_id:
            self._credit_run_time(self.clock.lap())
        self.selected_task_id = task_id
        if self.session_in_progress:
            self._capture_task()

    def update_config(self, config: SessionConfig) -> None:
        """Use new settings from the next session load onwards."""
        self.config = config

    def start(self) -> bool:
        """Start or resume the countdown."""
        self._auto_start_due = None
        if not self.clock.start():
            return False

        if self._session_started_at is None:
            self._session_started_at = self.clock.started_at
            self._capture_task()

        logger.debug(
            "%s session started (%ds left)",
            self.current_type,
            self.clock.seconds_remaining,
        )
        if self.config.sound_enabled:
            self._signal(self.notifier.play_tick)
        return True

    def pause(self) -> int:
        """
        Pause the countdown.

        During work sessions the selected task is credited with the whole
        minutes the session has run so far, less what earlier pauses already
        credited. Credits never exceed the running time or the session's
        configured duration.

        Returns:
            Minutes credited by this pause
        """
        self._auto_start_due = None
        if not self.clock.is_running:
            return 0
        return self._credit_run_time(self.clock.pause())

    def _credit_run_time(self, elapsed: float) -> int:
        # Whole minutes of the session total, never of a single run
        self._run_seconds += elapsed
        if self.current_type != "work" or self._session_task_id is None:
            return 0

        earned = min(_whole_minutes(self._run_seconds), self._loaded_minutes)
        minutes = earned - self._credited_minutes
        if minutes <= 0:
            return 0

        self.ledger.credit(self._session_task_id, minutes)
        self._credited_minutes += minutes
        return minutes

    def reset(self) -> None:
        """Stop and reload the current session type without recording it."""
        self._auto_start_due = None
        if self.session_in_progress:
            logger.debug("%s session reset", self.current_type)
        self._load(self.current_type)

    def subscribe(self, listener: TodayStatsListener) -> Callable[[], None]:
        """
        Receive today's session stats after every completed session.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def today_stats(self) -> dict[str, int]:
        return today_session_stats(self.history.all(), self.clock.now())

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def tick(self) -> SessionRecord | None:
        """
        Process one second of wall-clock time.

        Returns:
            The session record if this tick completed a session
        """
        if not self.clock.is_running:
            if self._auto_start_due and self.clock.now() >= self._auto_start_due:
                self.start()
            return None

        if self.current_type == "work" and self._session_task_id is not None:
            self.seconds_spent_on_task += 1

        if self.clock.tick():
            return self._complete()
        return None

    def _complete(self) -> SessionRecord:
        ended_at = self.clock.now()
        ended_type = self.current_type

        record = SessionRecord(
            id=uuid.uuid4().hex,
            task_id=self._session_task_id,
            task_title=self._session_task_title or DEFAULT_TASK_TITLE,
            start_time=self._session_started_at or ended_at,
            end_time=ended_at,
            duration=self._loaded_minutes,
            session_type=ended_type,
            completed=True,
        )
        self.history.append(record)

        if ended_type == "work":
            if self._session_task_id is not None:
                remaining = self._loaded_minutes - self._credited_minutes
                if remaining > 0:
                    self.ledger.credit(self._session_task_id, remaining)
            self.sessions_completed += 1

        next_type = next_session_type(
            ended_type, self.sessions_completed, self.config.sessions_until_long_break
        )
        self._load(next_type)
        logger.info(
            "%s session completed (%d min), next: %s",
            ended_type,
            record.duration,
            next_type,
        )

        if self.config.auto_start_for(next_type):
            delay = timedelta(seconds=AUTO_START_DELAY_SECONDS)
            self._auto_start_due = ended_at + delay

        if self.on_progress is not None:
            self.on_progress(
                FocusProgress(
                    sessions_completed=self.sessions_completed,
                    current_type=self.current_type,
                )
            )

        if self.config.sound_enabled:
            self._signal(self.notifier.play_completion)
        message = WORK_DONE_MESSAGE if ended_type == "work" else BREAK_DONE_MESSAGE
        self._signal(self.notifier.notify, message)

        stats = self.today_stats()
        for listener in list(self._listeners):
            self._signal(listener, stats)

        return record

    def _signal(self, func: Callable[..., Any], *args: Any) -> None:
        """Call a side-channel hook; a failure is logged and never raised."""
        try:
            func(*args)
        except Exception as e:
            logger.warning("%s failed: %s", getattr(func, "__name__", func), e)
