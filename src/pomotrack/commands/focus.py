"""Focus mode commands with the Pomodoro timer."""

import typer

from pomotrack.models.focus.notifier import ConsoleNotifier
from pomotrack.models.focus.ui import (
    SESSION_LABELS,
    TimerDisplay,
    format_time,
    show_paused_message,
)
from pomotrack.services.focus_service import build_state_machine
from pomotrack.utils.exit_codes import ERROR_INVALID_ARGS, ERROR_NOT_FOUND
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import format_duration

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Focus mode with Pomodoro timer")


@app.command("start")
@command_wrapper
def start_focus(
    task_id: int = typer.Option(
        None, "--task", "-t", help="Task ID to credit focus time to"
    ),
):
    """Start the next session in the Pomodoro cycle."""
    machine = build_state_machine(notifier=ConsoleNotifier(console))

    if task_id is not None:
        task = machine.ledger.find_task(task_id)
        if task is None:
            raise AppError(f"Task {task_id} not found", exit_code=ERROR_NOT_FOUND)
        if task.completed:
            raise AppError(
                f"Task {task_id} is already completed", exit_code=ERROR_INVALID_ARGS
            )
        machine.select_task(task_id)

    session_label = SESSION_LABELS[machine.current_type]
    minutes = machine.config.duration_for(machine.current_type)
    console.print(f"\n[bold green]Starting {session_label}[/bold green]")
    console.print(f"Duration: {minutes} minutes\n")

    machine.start()
    display = TimerDisplay(console)
    result = display.run(machine)

    if result == "interrupted":
        credited = machine.pause()
        show_paused_message(machine, credited, console)


@app.command("status")
@command_wrapper
def focus_status():
    """Show the current position in the Pomodoro cycle."""
    machine = build_state_machine()
    state = machine.state
    today = machine.today_stats()

    console.print("\n[bold cyan]🍅 Pomodoro Status[/bold cyan]\n")
    console.print(f"Next session: [bold]{SESSION_LABELS[state.current_type]}[/bold]")
    console.print(f"Duration: {format_time(state.seconds_remaining)}")
    console.print(f"Total sessions: {state.sessions_completed}")
    console.print(f"Long breaks earned: {machine.long_breaks_earned}")
    console.print()
    console.print("[bold]Today's Progress[/bold]")
    console.print(f"  Pomodoros: {today['work_sessions']}")
    console.print(f"  Minutes focused: {format_duration(today['total_minutes'])}")
    console.print()
