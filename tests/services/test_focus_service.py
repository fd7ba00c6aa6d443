"""Tests for the focus timer wiring."""

from __future__ import annotations

from conftest import make_task

from pomotrack.models.config_models import FocusProgress
from pomotrack.models.focus.clock import SessionClock
from pomotrack.services.focus_service import (
    build_state_machine,
    get_history_store,
    get_task_repository,
)


def test_repository_and_history_use_configured_paths(tmp_config):
    assert get_task_repository(tmp_config).tasks_file == tmp_config.tasks_path
    assert get_history_store(tmp_config).history_file == tmp_config.history_path


def test_machine_restores_settings_and_progress(tmp_config):
    tmp_config.update_setting("short_break_duration", "10")
    tmp_config.save_progress(FocusProgress(sessions_completed=3, current_type="short_break"))

    machine = build_state_machine(config_service=tmp_config)

    assert machine.sessions_completed == 3
    assert machine.current_type == "short_break"
    assert machine.clock.seconds_remaining == 600


def test_completion_persists_everything(tmp_config, fake_now):
    get_task_repository(tmp_config).save_tasks([make_task(1, "Write report")])
    tmp_config.update_setting("work_duration", "1")

    machine = build_state_machine(
        config_service=tmp_config, clock=SessionClock(now=fake_now)
    )
    machine.select_task(1)
    machine.start()
    for _ in range(60):
        fake_now.advance(seconds=1)
        machine.tick()

    assert tmp_config.load_progress() == FocusProgress(
        sessions_completed=1, current_type="short_break"
    )
    assert len(get_history_store(tmp_config)) == 1
    task = get_task_repository(tmp_config).get_tasks()[0]
    assert task.actual_time == 1
