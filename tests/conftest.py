"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem state and
from wall-clock time.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest

from pomotrack.models.config_models import SessionConfig
from pomotrack.models.focus.clock import SessionClock
from pomotrack.models.focus.cycling import SessionStateMachine
from pomotrack.models.focus.history import SessionHistoryStore
from pomotrack.models.focus.ledger import TaskTimeLedger
from pomotrack.models.task import Task
from pomotrack.repositories.task_repository import JsonTaskRepository

T0 = datetime(2024, 6, 15, 9, 0, 0, tzinfo=timezone.utc)


class FakeNow:
    """Controllable replacement for ``datetime.now()``."""

    def __init__(self, start: datetime = T0):
        self.current = start

    def __call__(self) -> datetime:
        return self.current

    def advance(self, seconds: float = 0, minutes: float = 0) -> None:
        self.current += timedelta(seconds=seconds, minutes=minutes)


def make_task(
    task_id: int = 1,
    title: str = "Write report",
    *,
    completed: bool = False,
    created_at: datetime = T0,
    deadline: date | None = None,
    priority: str = "medium",
    estimated_time: int | None = None,
    actual_time: int | None = None,
) -> Task:
    return Task(
        id=task_id,
        title=title,
        completed=completed,
        created_at=created_at,
        deadline=deadline,
        priority=priority,
        estimated_time=estimated_time,
        actual_time=actual_time,
    )


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_logging(tmp_path):
    """Keep the application log file inside tmp_path."""
    import pomotrack.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    logging.getLogger("pomotrack").handlers.clear()

    with patch("pomotrack.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield

    for handler in logging.getLogger("pomotrack").handlers:
        handler.close()
    logging.getLogger("pomotrack").handlers.clear()
    logger_mod._logger = original


# ---------------------------------------------------------------------------
# Config isolation helpers
# ---------------------------------------------------------------------------


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so settings and data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from pomotrack.services.config_service import ConfigService, get_config_service

    config_dir = str(tmp_path / "config")
    data_dir = str(tmp_path / "data")
    get_config_service.cache_clear()
    with patch("pomotrack.services.config_service.user_config_dir", return_value=config_dir):
        with patch("pomotrack.services.config_service.user_data_dir", return_value=data_dir):
            svc = ConfigService()
            yield svc
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Focus core
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_now() -> FakeNow:
    return FakeNow()


@pytest.fixture()
def task_repo(tmp_path) -> JsonTaskRepository:
    """Task repository with three pending tasks."""
    repo = JsonTaskRepository(tmp_path / "tasks.json")
    repo.save_tasks(
        [
            make_task(1, "Write report", estimated_time=50),
            make_task(2, "Read chapter 3", actual_time=10),
            make_task(3, "Plan sprint", priority="high"),
        ]
    )
    return repo


@pytest.fixture()
def history_store(tmp_path) -> SessionHistoryStore:
    return SessionHistoryStore(tmp_path / "history.json")


@pytest.fixture()
def make_machine(task_repo, history_store, fake_now):
    """Factory for a state machine on a fake clock with short sessions."""

    def _make(**config_overrides) -> SessionStateMachine:
        config = SessionConfig(**config_overrides)
        return SessionStateMachine(
            config=config,
            history=history_store,
            ledger=TaskTimeLedger(task_repo),
            clock=SessionClock(now=fake_now),
        )

    return _make
