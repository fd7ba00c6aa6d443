"""Timer settings commands."""

import typer
from rich.table import Table

from pomotrack.services.config_service import get_config_service
from pomotrack.utils.exit_codes import ERROR_INVALID_ARGS
from pomotrack.utils.ui.console import get_console
from pomotrack.utils.ui.formatters import format_success

from .decorators import AppError, command_wrapper

console = get_console()
app = typer.Typer(help="Timer settings")


@app.command("show")
@command_wrapper
def show_settings():
    """Show the current timer settings."""
    settings = get_config_service().settings

    table = Table(title="⚙️ Timer Settings", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    for key, value in settings.model_dump().items():
        shown = str(value).lower() if isinstance(value, bool) else str(value)
        table.add_row(key, shown)

    console.print(table)


@app.command("set")
@command_wrapper
def set_setting(
    key: str = typer.Argument(..., help="Setting name, e.g. work_duration"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a timer setting. Takes effect from the next session."""
    try:
        settings = get_config_service().update_setting(key, value)
    except ValueError as e:
        raise AppError(str(e), exit_code=ERROR_INVALID_ARGS) from e

    format_success(f"{key} = {getattr(settings, key)}")


@app.command("reset")
@command_wrapper
def reset_settings():
    """Restore the default timer settings."""
    get_config_service().reset_settings()
    format_success("Settings reset to defaults")
