"""Console UI wrapper using Rich library."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class ConsoleUI:
    """
    Wrapper for Rich Console providing styled output methods.

    Keeps message styling (info, warning, error, success) in one place
    for every CLI command.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize with a Rich Console (a new one by default)."""
        self.console = console or Console()

    def print(self, *args, **kwargs) -> None:
        """Print to console (delegates to Rich Console)."""
        self.console.print(*args, **kwargs)

    def print_info(self, message: str) -> None:
        self.console.print(f"[blue]ℹ️  {escape(message)}[/blue]")

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠️  {escape(message)}[/yellow]")

    def print_error(self, message: str) -> None:
        self.console.print(f"[red]❌ {escape(message)}[/red]")

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def create_table(
        self,
        title: str,
        columns: Optional[List[str]] = None
    ) -> Table:
        """
        Create a Rich Table with optional columns.

        Args:
            title: Table title.
            columns: List of column headers.

        Returns:
            Rich Table instance.
        """
        table = Table(title=title, show_header=True, header_style="bold magenta")
        for col in columns or []:
            table.add_column(col)
        return table


console = ConsoleUI()
