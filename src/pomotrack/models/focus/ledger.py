"""Credits focused minutes to tasks."""

from __future__ import annotations

import logging

from pomotrack.models.task import Task
from pomotrack.repositories.task_repository import TaskNotFoundError, TaskRepository

logger = logging.getLogger(__name__)


class TaskTimeLedger:
    """Applies focused minutes to a task's accumulated ``actual_time``.

    Credits only ever add time. A credit for a task that no longer exists is
    dropped silently, since the task may have been deleted while a session
    was running.
    """

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    def find_task(self, task_id: int) -> Task | None:
        """Look up a task by id."""
        for task in self.repository.get_tasks():
            if task.id == task_id:
                return task
        return None

    def credit(self, task_id: int, minutes: int) -> bool:
        """
        Add ``minutes`` to a task's actual time.

        Args:
            task_id: Task to credit
            minutes: Whole minutes to add

        Returns:
            True if the task was updated, False if nothing was credited

        Raises:
            ValueError: If minutes is negative
        """
        if minutes < 0:
            raise ValueError("Cannot credit a negative number of minutes")
        if minutes == 0:
            return False

        task = self.find_task(task_id)
        if task is None:
            logger.info("skip credit of %d min: task %s not found", minutes, task_id)
            return False

        new_total = (task.actual_time or 0) + minutes
        try:
            self.repository.update_task(task_id, actual_time=new_total)
        except TaskNotFoundError:
            logger.info("skip credit of %d min: task %s deleted", minutes, task_id)
            return False

        logger.debug("credited %d min to task %s (now %d)", minutes, task_id, new_total)
        return True
