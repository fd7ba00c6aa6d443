"""Session history commands."""

from pathlib import Path

import typer
from rich.table import Table

from pomotrack.models.focus.history import deserialize_history, serialize_history
from pomotrack.models.focus.ui import SESSION_ICONS, SESSION_LABELS
from pomotrack.services.focus_service import get_history_store
from pomotrack.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Completed session history")


@app.command("list")
@command_wrapper
def list_history(
    limit: int = typer.Option(10, "--limit", "-n", help="Number of sessions to show"),
):
    """Show the most recent sessions."""
    store = get_history_store()
    sessions = list(store.most_recent(limit))

    if not sessions:
        console.print("No sessions completed yet. Start your first Pomodoro! 🍅")
        return

    table = Table(title=f"Recent Sessions ({len(sessions)})", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Type")
    table.add_column("Task")
    table.add_column("Duration", justify="right")

    for session in sessions:
        table.add_row(
            session.start_time.strftime("%Y-%m-%d %H:%M"),
            f"{SESSION_ICONS[session.session_type]} "
            f"{SESSION_LABELS[session.session_type]}",
            session.task_title[:30],
            f"{session.duration}m",
        )

    console.print(table)


@app.command("export")
@command_wrapper
def export_history(
    path: Path = typer.Argument(..., help="File to write the history to"),
):
    """Export all sessions to a JSON file."""
    records = get_history_store().all()
    path.write_text(serialize_history(records), encoding="utf-8")
    format_success(f"Exported {len(records)} sessions to {path}")


@app.command("import")
@command_wrapper
def import_history(
    path: Path = typer.Argument(..., help="JSON file produced by export"),
):
    """Merge sessions from an exported JSON file."""
    if not path.exists():
        raise AppError(f"File not found: {path}", exit_code=ERROR_NOT_FOUND)

    try:
        records = deserialize_history(path.read_bytes())
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e

    added = get_history_store().import_records(records)
    format_success(
        f"Imported {added} sessions ({len(records) - added} already present)"
    )
