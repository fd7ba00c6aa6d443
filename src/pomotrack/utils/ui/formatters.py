"""Shared rich output helpers for pomotrack commands."""

from pomotrack.utils.ui.console import get_console

console = get_console()

BAR_FILLED = "█"
BAR_EMPTY = "░"


def format_duration(minutes: float) -> str:
    """Render a minute count as ``2h 15m`` or ``45m``."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours}h {mins}m" if hours else f"{mins}m"


def render_progress_bar(value: float, max_value: float, width: int = 10) -> str:
    """Fixed-width bar for ``value`` out of ``max_value``. Overflow fills it."""
    ratio = min(value / max_value, 1.0) if max_value else 0.0
    filled = int(ratio * width)
    return BAR_FILLED * filled + BAR_EMPTY * (width - filled)


def _emit(label: str, color: str, message: str) -> None:
    console.print(f"[bold {color}]{label}:[/bold {color}] {message}")


def format_error(message: str) -> None:
    """Print a red error line. Used by command_wrapper for every failure."""
    _emit("Error", "red", message)


def format_success(message: str) -> None:
    _emit("Success", "green", message)
