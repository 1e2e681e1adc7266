"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
status messages with color coding, JSON rendering of entities and a spinner
for long-running requests. Supports verbosity levels and --no-color flag.
"""

import json
from contextlib import contextmanager
from typing import Any, Iterator

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console for results (stdout)
        err_console: Rich Console for status messages (stderr)

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.print_json({"data": [], "total": 0})
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.no_color = no_color
        self.console = Console(no_color=no_color, highlight=False)
        self.err_console = Console(stderr=True, no_color=no_color, highlight=False)

    def success(self, message: str) -> None:
        self.err_console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]✗[/red] {message}", style="red")

    def warning(self, message: str) -> None:
        self.err_console.print(f"[yellow]⚠[/yellow] {message}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.err_console.print(message)

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.err_console.print(f"[dim]{message}[/dim]")

    def print_json(self, payload: Any) -> None:
        """Print a result as indented JSON on stdout.

        Args:
            payload: JSON-serializable result (e.g. {"data": ..., "total": n})
        """
        text = json.dumps(payload, indent=2, ensure_ascii=False, default=str)
        if self.no_color:
            self.console.print(text, markup=False, emoji=False, soft_wrap=True)
        else:
            self.console.print_json(text)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner on stderr while a request runs.

        Example:
            >>> with handler.spinner("Listing users..."):
            ...     result = data_provider(GET_LIST, "users", params)
        """
        if not self.err_console.is_terminal:
            yield
            return
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.err_console, refresh_per_second=10, transient=True):
            yield
