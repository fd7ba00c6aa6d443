"""Main entry point for Pomotrack."""

import typer
from rich.console import Console

from pomotrack import __version__
from pomotrack.commands import focus, history, settings, stats, tasks
from pomotrack.utils.logger import log_file_path

app = typer.Typer(
    name="pomotrack",
    help="Pomodoro focus sessions with task time tracking",
    no_args_is_help=True,
)

console = Console()


# Add subcommands
app.add_typer(focus.app, name="focus", help="Pomodoro focus timer")
app.add_typer(history.app, name="history", help="Completed session history")
app.add_typer(settings.app, name="settings", help="Timer settings")
app.add_typer(stats.app, name="stats", help="Task analytics and productivity")
app.add_typer(tasks.app, name="tasks", help="Tasks available for focus")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]Pomotrack[/bold] version [cyan]{__version__}[/cyan]")
    console.print(f"[dim]Log file: {log_file_path()}[/dim]")


def main() -> None:
    """Entry point for the console script."""
    app()


if __name__ == "__main__":
    main()
