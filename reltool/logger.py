"""Rich console output for release operations."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class ReleaseLogger:
    """Rich console output for git and shell operations."""

    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        """Initialize logger.

        Args:
            console: Rich Console instance
            verbose: Enable verbose output
        """
        self.console = console or Console(highlight=False)
        self.verbose = verbose

    def info(self, message: str) -> None:
        """Blue info message."""
        self.console.print(f"[blue]ℹ[/blue] {escape(message)}", soft_wrap=True)

    def success(self, message: str) -> None:
        """Green success message."""
        self.console.print(f"[green]✓[/green] {escape(message)}", soft_wrap=True)

    def warning(self, message: str) -> None:
        """Yellow warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", soft_wrap=True)

    def error(self, message: str) -> None:
        """Red error message."""
        self.console.print(f"[red]✗[/red] {escape(message)}", soft_wrap=True)

    def command(self, command: str) -> None:
        """Echo a command line exactly as it is invoked."""
        self._plain(f"$ {command}")

    def output(self, text: str) -> None:
        """Raw output of an invoked command."""
        self._plain(text)

    def show_repository_state(self, state: dict[str, object]) -> None:
        """Display repository state as a two-column table."""
        table = Table(title="Repository", show_header=True, header_style="bold")
        table.add_column("Property", style="cyan")
        table.add_column("Value")

        for name, value in state.items():
            if value is True:
                shown = "[green]✓[/green]"
            elif value is False:
                shown = "[red]✗[/red]"
            elif value is None:
                shown = "[dim]-[/dim]"
            else:
                shown = escape(str(value))
            table.add_row(name, shown)

        self.console.print()
        self.console.print(table)
        self.console.print()

    def show_changelog(self, records: list, title: str = "Changelog") -> None:
        """Display parsed changelog records."""
        if not records:
            self.info("No commits since the latest release")
            return

        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Commit", style="magenta")
        table.add_column("Subject")
        for record in records:
            table.add_row(record.hash, escape(record.subject))

        self.console.print(table)

    def _plain(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
