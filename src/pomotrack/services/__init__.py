"""Services module for Pomotrack - wiring and persistence layer."""

from .config_service import ConfigService, get_config_service
from .focus_service import build_state_machine, get_history_store, get_task_repository

__all__ = [
    "ConfigService",
    "build_state_machine",
    "get_config_service",
    "get_history_store",
    "get_task_repository",
]
