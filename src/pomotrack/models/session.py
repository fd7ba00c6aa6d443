"""Focus session records and runtime snapshots."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SessionType = Literal["work", "short_break", "long_break"]


class SessionRecord(BaseModel):
    """A completed focus or break session. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    id: str
    task_id: int | None = None
    task_title: str
    start_time: datetime
    end_time: datetime
    duration: int = Field(ge=0)  # configured minutes
    session_type: SessionType
    completed: bool = True


@dataclass(frozen=True)
class RuntimeState:
    """Read-only snapshot of the timer for display."""

    is_running: bool
    seconds_remaining: int
    current_type: SessionType
    sessions_completed: int
    selected_task_id: int | None
    seconds_spent_on_task: int
