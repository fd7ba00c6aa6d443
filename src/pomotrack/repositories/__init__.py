"""Repository layer for Pomotrack."""

from .task_repository import JsonTaskRepository, TaskNotFoundError, TaskRepository

__all__ = ["JsonTaskRepository", "TaskNotFoundError", "TaskRepository"]
