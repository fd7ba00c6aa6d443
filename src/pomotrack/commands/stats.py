"""Task analytics commands."""

import typer

from pomotrack.models.focus.analytics import compute_statistics
from pomotrack.models.focus.clock import local_now
from pomotrack.services.focus_service import get_history_store, get_task_repository
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import format_duration, render_progress_bar

from .decorators import command_wrapper

console = get_console()
app = typer.Typer(help="Task analytics and productivity insights")


@app.command("show")
@command_wrapper
def show_stats(
    output: str = typer.Option(None, "--output", "-o", help="Output format (json)"),
):
    """Show task statistics and time-tracking accuracy."""
    stats = compute_statistics(
        get_task_repository().get_tasks(),
        get_history_store().all(),
        local_now(),
    )

    if output == "json":
        console.print_json(data=stats)
        return

    console.print("\n[bold cyan]📊 Task Analytics[/bold cyan]\n")

    console.print(f"Total Tasks: [bold]{stats['total_tasks']}[/bold]")
    console.print(f"  Completed: [green]{stats['completed_tasks']}[/green]")
    console.print(f"  Pending: [yellow]{stats['pending_tasks']}[/yellow]")
    bar = render_progress_bar(stats["completion_rate"], 100, width=20)
    console.print(f"  Completion Rate: {bar} {stats['completion_rate']}%")
    console.print()

    console.print("[bold]Deadlines[/bold]")
    console.print(f"  Overdue: [red]{stats['overdue_tasks']}[/red]")
    console.print(f"  Due today: {stats['due_today_tasks']}")
    console.print(f"  Due this week: {stats['upcoming_tasks']}")
    console.print()

    time_stats = stats["time"]
    console.print("[bold]Time Tracking[/bold]")
    console.print(
        f"  Estimated: {format_duration(time_stats['total_estimated_minutes'])}"
    )
    console.print(f"  Actual: {format_duration(time_stats['total_actual_minutes'])}")
    console.print(
        f"  Average per task: {format_duration(time_stats['average_task_minutes'])}"
    )
    console.print(f"  Estimation accuracy: {time_stats['estimation_accuracy']}%")
    console.print()

    if stats["most_time_consuming"]:
        console.print("[bold]Most Time-Consuming Tasks[/bold]")
        for index, task in enumerate(stats["most_time_consuming"], start=1):
            console.print(
                f"  {index}. {task['title']} - {format_duration(task['actual_time'])}"
            )
        console.print()

    productivity = stats["productivity"]
    if productivity:
        console.print("[bold]Productivity[/bold]")
        console.print(f"  Tasks per day: {productivity['average_tasks_per_day']}")
        console.print(f"  Completion streak: {productivity['completion_streak']} days")
        console.print(
            f"  Most productive day: {productivity['most_productive_day'] or 'No data'}"
        )
        console.print()

    today = stats["sessions"]["today"]
    console.print(
        f"Today: {today['work_sessions']} pomodoros, "
        f"{format_duration(today['total_minutes'])} focused\n"
    )
