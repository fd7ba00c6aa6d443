"""Error handling and logging shared by every command."""

import functools
import time
from collections.abc import Callable

import typer

from pomotrack.utils.exit_codes import ERROR_GENERAL, get_exit_code_name
from pomotrack.utils.logger import get_logger
from pomotrack.utils.ui.formatters import format_error


class AppError(Exception):
    """A failure the user can act on, reported with a semantic exit code."""

    def __init__(self, message: str, exit_code: int = ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def command_wrapper(func: Callable):
    """Log a command's run and turn its failures into exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger()
        name = func.__name__
        started = time.monotonic()

        def took() -> float:
            return time.monotonic() - started

        logger.info("command started: %s", name)
        try:
            result = func(*args, **kwargs)
        except AppError as e:
            logger.error(
                "command failed: %s (%.3fs) [%s] - %s",
                name,
                took(),
                get_exit_code_name(e.exit_code),
                e,
            )
            format_error(str(e))
            raise typer.Exit(code=e.exit_code) from e
        except typer.Exit:
            raise
        except Exception as e:
            logger.exception("command crashed: %s (%.3fs)", name, took())
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=ERROR_GENERAL) from e

        logger.info("command completed: %s (%.3fs)", name, took())
        return result

    return wrapper
