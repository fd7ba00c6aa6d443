"""Tests for output formatters."""

import importlib
from unittest.mock import patch

import pytest

from pomotrack.utils.ui import formatters
from pomotrack.utils.ui.formatters import (
    format_duration,
    format_error,
    format_success,
    render_progress_bar,
)


@pytest.mark.parametrize(
    "minutes, expected",
    [(0, "0m"), (45, "45m"), (60, "1h 0m"), (135, "2h 15m")],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected


def test_progress_bar_partial():
    assert render_progress_bar(50, 100, width=10) == "█████░░░░░"


def test_progress_bar_clamped():
    assert render_progress_bar(150, 100, width=4) == "████"


def test_progress_bar_zero_max():
    assert render_progress_bar(5, 0, width=3) == "░░░"


def test_messages_prefixed():
    with patch("pomotrack.utils.ui.formatters.console") as console:
        format_error("bad")
        format_success("good")
    printed = [call.args[0] for call in console.print.call_args_list]
    assert printed == [
        "[bold red]Error:[/bold red] bad",
        "[bold green]Success:[/bold green] good",
    ]


def test_messages_use_the_app_console():
    shared = object()
    with patch("pomotrack.utils.ui.console.get_console", return_value=shared):
        importlib.reload(formatters)
        assert formatters.console is shared
    importlib.reload(formatters)
