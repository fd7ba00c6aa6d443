"""Configuration service for Pomotrack.

This module provides the ConfigService class, the single owner of everything
the focus timer persists between runs:

- Timer settings (settings.json)
- Cycle progress (progress.json)
- Locations of the session history and task files

Unreadable files never stop the timer; they load as defaults.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError

from pomotrack.models.config_models import FocusProgress, SessionConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading and saving timer settings and progress."""

    def __init__(self):
        """Initialize the config service."""

        self.config_dir = Path(user_config_dir("pomotrack"))
        self.data_dir = Path(user_data_dir("pomotrack"))
        self.settings_path = self.config_dir / "settings.json"
        self.progress_path = self.data_dir / "progress.json"
        self.history_path = self.data_dir / "session_history.json"
        self.tasks_path = self.data_dir / "tasks.json"

        # Ensure directories exist
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._settings: SessionConfig | None = None

    @property
    def settings(self) -> SessionConfig:
        """Get or load the current settings."""
        if self._settings is None:
            self._settings = self.load_settings()
        return self._settings

    def _read_json(self, path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    def _write_json(self, path: Path, data: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)
        path.chmod(0o600)

    def load_settings(self) -> SessionConfig:
        """Load settings, falling back to defaults if missing or invalid."""
        if self._settings is not None:
            return self._settings  # Return cached settings if already loaded

        try:
            self._settings = SessionConfig.model_validate(
                self._read_json(self.settings_path)
            )
        except FileNotFoundError:
            # First run
            self._settings = SessionConfig()
            self.save_settings()
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(
                "settings at %s are invalid, using defaults: %s", self.settings_path, e
            )
            self._settings = SessionConfig()

        return self._settings

    def save_settings(self) -> None:
        """Save the current settings."""
        self._write_json(self.settings_path, self.settings.model_dump_json(indent=4))

    def update_setting(self, key: str, value: Any) -> SessionConfig:
        """
        Change one setting and persist it.

        Args:
            key: Setting name, e.g. ``work_duration``
            value: New value; strings are coerced ("30", "true")

        Returns:
            The new settings

        Raises:
            ValueError: If the key is unknown or the value is invalid
        """
        if key not in SessionConfig.model_fields:
            valid = ", ".join(SessionConfig.model_fields)
            raise ValueError(f"Unknown setting '{key}'. Must be one of: {valid}")

        try:
            updated = SessionConfig.model_validate(
                {**self.settings.model_dump(), key: value}
            )
        except ValidationError as e:
            message = e.errors()[0]["msg"]
            raise ValueError(f"Invalid value for {key}: {message}") from e

        self._settings = updated
        self.save_settings()
        logger.info("setting %s changed to %r", key, getattr(updated, key))
        return updated

    def reset_settings(self) -> SessionConfig:
        """Reset settings to defaults."""
        self._settings = SessionConfig()
        self.save_settings()
        return self._settings

    def load_progress(self) -> FocusProgress:
        """Load cycle progress, starting fresh if missing or invalid."""
        try:
            return FocusProgress.model_validate(self._read_json(self.progress_path))
        except FileNotFoundError:
            return FocusProgress()
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            logger.warning(
                "progress at %s is invalid, starting fresh: %s", self.progress_path, e
            )
            return FocusProgress()

    def save_progress(self, progress: FocusProgress) -> None:
        """Persist cycle progress."""
        self._write_json(self.progress_path, progress.model_dump_json(indent=4))


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_settings()
    return config_service
