"""Task repository abstraction for the focus core.

The task list owns task storage. The focus timer only needs to read tasks and
write back accumulated time, so this port is deliberately narrow.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pomotrack.models.task import Task

logger = logging.getLogger(__name__)


class TaskNotFoundError(LookupError):
    """Raised when a task id does not resolve to a stored task."""

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class TaskRepository(ABC):
    """Abstract base class for the task operations the focus core consumes."""

    @abstractmethod
    def get_tasks(self) -> list[Task]:
        """Return all tasks in list order.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "TaskRepository.get_tasks() must be implemented by adapter"
        )

    @abstractmethod
    def update_task(self, task_id: int, **changes: Any) -> Task:
        """Apply a partial update to a task.

        Args:
            task_id: Task to update
            **changes: Field values to overwrite

        Returns:
            The updated Task

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            TaskNotFoundError: If task does not exist
        """
        raise NotImplementedError(
            "TaskRepository.update_task() must be implemented by adapter"
        )


class JsonTaskRepository(TaskRepository):
    """Tasks stored in a JSON file.

    Accepts either a bare list of tasks or the backup format
    ``{"tasks": [...]}``. Entries that fail validation are skipped.
    """

    def __init__(self, tasks_file: Path):
        self.tasks_file = tasks_file

    def _read_raw(self) -> list[Any]:
        if not self.tasks_file.exists():
            return []

        try:
            with open(self.tasks_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("tasks file %s is unreadable: %s", self.tasks_file, e)
            return []

        if isinstance(data, dict):
            data = data.get("tasks", [])
        if not isinstance(data, list):
            logger.warning("tasks file %s has unexpected format", self.tasks_file)
            return []
        return data

    def get_tasks(self) -> list[Task]:
        tasks = []
        for item in self._read_raw():
            try:
                tasks.append(Task.model_validate(item))
            except ValidationError:
                logger.warning("skipping invalid task entry in %s", self.tasks_file)
        return tasks

    def save_tasks(self, tasks: list[Task]) -> None:
        """Overwrite the tasks file."""
        self.tasks_file.parent.mkdir(parents=True, exist_ok=True)
        payload = [task.model_dump(mode="json") for task in tasks]
        with open(self.tasks_file, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    def update_task(self, task_id: int, **changes: Any) -> Task:
        tasks = self.get_tasks()
        for index, task in enumerate(tasks):
            if task.id == task_id:
                updated = Task.model_validate({**task.model_dump(), **changes})
                tasks[index] = updated
                self.save_tasks(tasks)
                return updated
        raise TaskNotFoundError(task_id)
