"""Task data models."""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Priority = Literal["high", "medium", "low"]


class Task(BaseModel):
    """Task model.

    Tasks are owned by the task list. The focus core only reads them and
    increments ``actual_time``.
    """

    id: int
    title: str
    deadline: Optional[date] = None
    completed: bool = False
    created_at: datetime
    priority: Priority = "medium"
    estimated_time: Optional[int] = Field(default=None, ge=0)  # minutes
    actual_time: Optional[int] = Field(default=None, ge=0)  # minutes
