"""Focus mode - Pomodoro timer system for Pomotrack."""

from .clock import SessionClock
from .cycling import SessionStateMachine, next_session_type
from .history import SessionHistoryStore, deserialize_history, serialize_history
from .ledger import TaskTimeLedger
from .notifier import ConsoleNotifier, Notifier, NullNotifier
from .ui import TimerDisplay, completion_panel, show_paused_message

__all__ = [
    "ConsoleNotifier",
    "Notifier",
    "NullNotifier",
    "SessionClock",
    "SessionHistoryStore",
    "SessionStateMachine",
    "TaskTimeLedger",
    "TimerDisplay",
    "completion_panel",
    "deserialize_history",
    "next_session_type",
    "serialize_history",
    "show_paused_message",
]
