"""Data models for Pomotrack."""

from .config_models import FocusProgress, SessionConfig
from .session import RuntimeState, SessionRecord, SessionType
from .task import Priority, Task

__all__ = [
    "FocusProgress",
    "Priority",
    "RuntimeState",
    "SessionConfig",
    "SessionRecord",
    "SessionType",
    "Task",
]
