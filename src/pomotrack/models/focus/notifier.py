"""Sound and message side channel for the focus timer."""

from __future__ import annotations

from typing import Protocol

from rich.console import Console


class Notifier(Protocol):
    """Capability the state machine uses to signal the user."""

    def play_tick(self) -> None: ...

    def play_completion(self) -> None: ...

    def notify(self, message: str) -> None: ...


class NullNotifier:
    """Notifier that does nothing. Used headless and in tests."""

    def play_tick(self) -> None:
        pass

    def play_completion(self) -> None:
        pass

    def notify(self, message: str) -> None:
        pass


class ConsoleNotifier:
    """Notifier that rings the terminal bell and prints messages."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def play_tick(self) -> None:
        self.console.bell()

    def play_completion(self) -> None:
        # Three bells, one per note of the completion chime
        for _ in range(3):
            self.console.bell()

    def notify(self, message: str) -> None:
        self.console.print(f"\n[bold green]{message}[/bold green]")
