"""Configuration models for the focus timer.

``SessionConfig`` holds the user's timer settings and ``FocusProgress`` the
cycle position that survives a restart. Both are validated pydantic models so
invalid values are rejected before they reach the state machine.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pomotrack.models.session import SessionType


class SessionConfig(BaseModel):
    """Timer settings."""

    model_config = ConfigDict(frozen=True)

    work_duration: int = Field(default=25, gt=0, description="Minutes")
    short_break_duration: int = Field(default=5, gt=0, description="Minutes")
    long_break_duration: int = Field(default=15, gt=0, description="Minutes")
    sessions_until_long_break: int = Field(default=4, ge=2)
    auto_start_breaks: bool = Field(default=False)
    auto_start_work: bool = Field(default=False)
    sound_enabled: bool = Field(default=True)

    def duration_for(self, session_type: SessionType) -> int:
        """Get duration in minutes for a session type."""
        if session_type == "short_break":
            return self.short_break_duration
        if session_type == "long_break":
            return self.long_break_duration
        return self.work_duration

    def auto_start_for(self, session_type: SessionType) -> bool:
        """Whether entering ``session_type`` starts the clock automatically."""
        if session_type == "work":
            return self.auto_start_work
        return self.auto_start_breaks


class FocusProgress(BaseModel):
    """Cycle position persisted between runs."""

    sessions_completed: int = Field(default=0, ge=0)
    current_type: SessionType = "work"
