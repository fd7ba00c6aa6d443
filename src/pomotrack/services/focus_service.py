"""Wiring for the focus timer.

Builds one SessionStateMachine per process from the persisted settings,
progress, history and task files.
"""

from __future__ import annotations

from pomotrack.models.focus.clock import SessionClock
from pomotrack.models.focus.cycling import SessionStateMachine
from pomotrack.models.focus.history import SessionHistoryStore
from pomotrack.models.focus.ledger import TaskTimeLedger
from pomotrack.models.focus.notifier import Notifier
from pomotrack.repositories.task_repository import JsonTaskRepository
from pomotrack.services.config_service import ConfigService, get_config_service


def get_task_repository(
    config_service: ConfigService | None = None,
) -> JsonTaskRepository:
    """Get the task repository backed by the configured tasks file."""
    config_service = config_service or get_config_service()
    return JsonTaskRepository(config_service.tasks_path)


def get_history_store(
    config_service: ConfigService | None = None,
) -> SessionHistoryStore:
    """Get the session history store backed by the configured file."""
    config_service = config_service or get_config_service()
    return SessionHistoryStore(config_service.history_path)


def build_state_machine(
    notifier: Notifier | None = None,
    config_service: ConfigService | None = None,
    clock: SessionClock | None = None,
) -> SessionStateMachine:
    """
    Create a state machine restored from persisted progress.

    Completed sessions write progress back through the config service.
    """
    config_service = config_service or get_config_service()
    return SessionStateMachine(
        config=config_service.load_settings(),
        history=get_history_store(config_service),
        ledger=TaskTimeLedger(get_task_repository(config_service)),
        clock=clock,
        notifier=notifier,
        progress=config_service.load_progress(),
        on_progress=config_service.save_progress,
    )
