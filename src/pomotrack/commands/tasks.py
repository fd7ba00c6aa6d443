"""Read-only task listing for picking a focus task."""

import typer
from rich.table import Table

from pomotrack.services.focus_service import get_task_repository
from pomotrack.utils.ui.console import get_console

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Tasks available for focus sessions")

PRIORITY_COLORS = {"high": "red", "medium": "yellow", "low": "green"}


@app.command("list")
@command_wrapper
def list_tasks(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include completed tasks"),
):
    """List tasks with estimated and tracked time."""
    tasks = get_task_repository().get_tasks()
    if not show_all:
        tasks = [t for t in tasks if not t.completed]

    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(title=f"Tasks ({len(tasks)})", show_header=True)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Deadline")
    table.add_column("Estimate", justify="right")
    table.add_column("Actual", justify="right")

    for task in tasks:
        color = PRIORITY_COLORS[task.priority]
        title = f"[dim]{task.title}[/dim]" if task.completed else task.title
        table.add_row(
            str(task.id),
            title,
            f"[{color}]{task.priority}[/{color}]",
            task.deadline.isoformat() if task.deadline else "—",
            f"~{task.estimated_time}m" if task.estimated_time else "—",
            f"{task.actual_time}m" if task.actual_time else "—",
        )

    console.print(table)
