"""Rich console trace output for cache reconciliation."""

import os
from typing import Optional

from rich.console import Console
from rich.markup import escape

from pkgtypes.config.defaults import ENV_DEBUG


class TypesLogger:
    """Rich console output for scanner and reconciler steps."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Show debug trace output. Also enabled by PKGTYPES_DEBUG.
        """
        self.console = console or Console(stderr=True)
        self.verbose = verbose or bool(os.environ.get(ENV_DEBUG))

    def debug(self, message: str, *details: object) -> None:
        """Dim trace message, only shown when verbose."""
        if not self.verbose:
            return
        suffix = " ".join(str(detail) for detail in details)
        text = f"{message} {suffix}" if suffix else message
        self.console.print(f"[dim]\\[pkgtypes] {escape(text)}[/dim]")

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str) -> None:
        """Red error message."""
        self.console.print(f"[red]✗[/red] {message}")
