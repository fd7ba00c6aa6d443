"""Terminal timer UI for focus mode."""

import time
from collections.abc import Callable

from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from pomotrack.models.session import SessionRecord, SessionType

from .cycling import SessionStateMachine

SESSION_LABELS: dict[SessionType, str] = {
    "work": "Focus Time",
    "short_break": "Short Break",
    "long_break": "Long Break",
}

SESSION_ICONS: dict[SessionType, str] = {
    "work": "🍅",
    "short_break": "☕",
    "long_break": "🛋️",
}


def format_time(seconds: int) -> str:
    """Format seconds as MM:SS."""
    seconds = max(0, seconds)
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class TimerDisplay:
    """Renders the countdown and drives the tick loop."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def create_panel(self, machine: SessionStateMachine) -> Panel:
        """Build the timer panel for the machine's current state."""
        state = machine.state
        components = []

        label = SESSION_LABELS[state.current_type]
        icon = SESSION_ICONS[state.current_type]
        components.append(Text(f"{icon}  {label}", style="bold", justify="center"))

        if machine.task_title and state.current_type == "work":
            task_text = Text(
                machine.task_title[:50], style="bold white", justify="center"
            )
            if state.selected_task_id is not None:
                task_text.append(f" (#{state.selected_task_id})", style="dim")
            components.append(task_text)

        remaining = state.seconds_remaining
        if not state.is_running:
            timer_color = "yellow"
        elif remaining < 60:
            timer_color = "red"
        else:
            timer_color = "cyan"
        components.append(Text(""))
        components.append(
            Text(format_time(remaining), style=f"bold {timer_color}", justify="center")
        )
        components.append(Text(""))

        progress_pct = min(100, int(machine.clock.progress_percentage()))
        bar_width = 40
        filled = int(bar_width * progress_pct / 100)
        progress_bar = "▓" * filled + "░" * (bar_width - filled)
        components.append(
            Text(f"{progress_bar}  {progress_pct}%", style="dim", justify="center")
        )

        if state.seconds_spent_on_task:
            spent = state.seconds_spent_on_task
            components.append(
                Text(
                    f"Time spent this session: {spent // 60}m {spent % 60}s",
                    style="dim",
                    justify="center",
                )
            )

        border = "red" if state.current_type == "work" else "green"
        subtitle = f"Session {state.sessions_completed + 1} · Ctrl+C to pause"
        return Panel(
            Align.center(Group(*components)),
            title="Pomotrack",
            subtitle=subtitle,
            border_style=border,
            padding=(1, 2),
        )

    def run(
        self,
        machine: SessionStateMachine,
        sleep: Callable[[float], None] = time.sleep,
    ) -> str:
        """
        Tick the machine once per second until it goes idle.

        The loop ends when a session completes and the next one is not
        auto-started, or when the user presses Ctrl+C.

        Returns:
            "completed" or "interrupted"
        """
        try:
            with Live(
                self.create_panel(machine), console=self.console, refresh_per_second=4
            ) as live:
                while machine.clock.is_running or machine.auto_start_pending:
                    sleep(1)
                    record = machine.tick()
                    if record is not None:
                        live.console.print(completion_panel(record))
                    live.update(self.create_panel(machine))
        except KeyboardInterrupt:
            return "interrupted"
        return "completed"


def completion_panel(record: SessionRecord) -> Panel:
    """Panel shown when a session finishes."""
    if record.session_type == "work":
        body = f"""[bold green]🎉 Focus Session Complete![/bold green]

Task: {record.task_title}
Duration: {record.duration} minutes

Session saved to history."""
    else:
        label = SESSION_LABELS[record.session_type]
        body = f"""[bold green]✨ {label} over![/bold green]

Duration: {record.duration} minutes"""

    return Panel(body, border_style="green", padding=(1, 2))


def show_paused_message(
    machine: SessionStateMachine, credited: int, console: Console | None = None
):
    """Show a message when the timer is paused from the keyboard."""
    console = console or Console()
    state = machine.state

    lines = [
        "[yellow]Session Paused[/yellow]",
        "",
        f"Session: {SESSION_LABELS[state.current_type]}",
        f"Remaining: {format_time(state.seconds_remaining)}",
    ]
    if credited:
        lines.append(f"Credited to task: {credited} minutes")
    lines.append("")
    lines.append("Progress in this session is not kept after exit.")

    console.print(Panel("\n".join(lines), border_style="yellow", padding=(1, 2)))
