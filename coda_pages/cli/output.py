"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output:
colored status messages, a spinner for long operations, and tables for
page listings and autocomplete suggestions.
"""

from contextlib import contextmanager
from typing import Iterable, Iterator, List

from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.spinner import Spinner
from rich.table import Table

from coda_pages.page_operations.models import AutocompleteOption


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Verbosity level (0=results only, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Page created")
        >>> with handler.spinner("Exporting page..."):
        ...     pass
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            no_color=no_color,
            highlight=False,
        )
        self.error_console = Console(
            stderr=True,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red on stderr."""
        self.error_console.print(f"[red]✗[/red] {escape(message)}", style="red", soft_wrap=True)

    def warning(self, message: str) -> None:
        """Display warning message in yellow on stderr."""
        self.error_console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(message)

    def print(self, message: str) -> None:
        """Display message without formatting."""
        self.console.print(message, markup=False, soft_wrap=True)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Display spinner while a long operation runs.

        Example:
            >>> with handler.spinner("Copying page..."):
            ...     copier.copy_page(...)
        """
        spinner = Spinner("dots", text=message)
        with Live(spinner, console=self.error_console, refresh_per_second=10, transient=True):
            yield

    def print_pages(self, pages: List[List[str]]) -> None:
        """Display [id, name] pairs as a table."""
        if not pages:
            self.console.print("[yellow]No pages found[/yellow]")
            return
        table = Table("ID", "Name")
        for page_id, name in pages:
            # Names are user text; brackets must not be read as markup
            table.add_row(escape(str(page_id)), escape(str(name)))
        self.console.print(table)

    def print_options(self, options: Iterable[AutocompleteOption]) -> None:
        """Display autocomplete suggestions as a table."""
        options = list(options)
        if not options:
            self.console.print("[yellow]No matches[/yellow]")
            return
        table = Table("Display", "Value")
        for option in options:
            table.add_row(escape(str(option.display)), escape(str(option.value)))
        self.console.print(table)
