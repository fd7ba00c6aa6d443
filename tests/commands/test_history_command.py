"""Tests for the history commands."""

import json
from datetime import timedelta

import pytest
from conftest import T0
from typer.testing import CliRunner

from pomotrack.commands.history import app
from pomotrack.models.focus.history import serialize_history
from pomotrack.models.session import SessionRecord
from pomotrack.services.focus_service import get_history_store
from pomotrack.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND

runner = CliRunner()


def _record(record_id: str, offset_minutes: int = 0, **overrides) -> SessionRecord:
    start = T0 + timedelta(minutes=offset_minutes)
    fields = {
        "id": record_id,
        "task_id": 1,
        "task_title": "Write report",
        "start_time": start,
        "end_time": start + timedelta(minutes=25),
        "duration": 25,
        "session_type": "work",
    }
    fields.update(overrides)
    return SessionRecord(**fields)


@pytest.fixture()
def populated(tmp_config):
    store = get_history_store(tmp_config)
    store.append(_record("a"))
    store.append(
        _record("b", 25, task_id=None, task_title="Focus Session",
                duration=5, session_type="short_break")
    )
    store.append(_record("c", 30, task_title="Plan sprint"))
    return tmp_config


class TestHistoryList:
    def test_empty(self, tmp_config):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "No sessions completed yet" in result.stdout

    def test_lists_sessions(self, populated):
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0
        assert "Recent Sessions (3)" in result.stdout
        assert "Plan sprint" in result.stdout
        assert "Short Break" in result.stdout

    def test_limit(self, populated):
        result = runner.invoke(app, ["list", "-n", "1"])
        assert "Recent Sessions (1)" in result.stdout
        assert "Plan sprint" in result.stdout
        assert "Write report" not in result.stdout

    def test_zero_limit_shows_nothing(self, populated):
        result = runner.invoke(app, ["list", "--limit", "0"])
        assert "No sessions completed yet" in result.stdout


class TestHistoryExportImport:
    def test_export_writes_json(self, populated, tmp_path):
        target = tmp_path / "export.json"
        result = runner.invoke(app, ["export", str(target)])

        assert result.exit_code == 0
        assert "Exported 3 sessions" in result.stdout
        data = json.loads(target.read_text(encoding="utf-8"))
        assert [item["id"] for item in data] == ["a", "b", "c"]

    def test_import_merges(self, populated, tmp_path):
        source = tmp_path / "import.json"
        source.write_text(
            serialize_history([_record("a"), _record("z", -60)]), encoding="utf-8"
        )

        result = runner.invoke(app, ["import", str(source)])

        assert result.exit_code == 0
        assert "Imported 1 sessions (1 already present)" in result.stdout
        ids = [r.id for r in get_history_store(populated).all()]
        assert ids == ["z", "a", "b", "c"]

    def test_import_missing_file(self, tmp_config, tmp_path):
        result = runner.invoke(app, ["import", str(tmp_path / "nope.json")])
        assert result.exit_code == ERROR_NOT_FOUND

    def test_import_invalid_file(self, tmp_config, tmp_path):
        source = tmp_path / "bad.json"
        source.write_text("{oops", encoding="utf-8")
        result = runner.invoke(app, ["import", str(source)])
        assert result.exit_code == ERROR_INVALID_ARGS
        assert len(get_history_store(tmp_config)) == 0
