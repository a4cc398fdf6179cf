"""Terminal output handling using Rich library.

This module provides the OutputHandler class for all CLI terminal output.
Uses Rich library for colored output and formatted summaries.
Supports verbosity levels and the --no-color flag.
"""

from rich.console import Console
from rich.markup import escape

from src.cli.models import CheckSummary


class OutputHandler:
    """Handles all terminal output using Rich library.

    Attributes:
        verbosity: Output verbosity level (0=summary, 1=info, 2=debug)
        console: Rich Console instance for output

    Example:
        >>> handler = OutputHandler(verbosity=1, no_color=False)
        >>> handler.success("Operation completed")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        """Initialize output handler.

        Args:
            verbosity: Verbosity level (0=summary, 1=info, 2=debug)
            no_color: Disable color output if True
        """
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )

    def success(self, message: str) -> None:
        """Display success message in green."""
        self.console.print(f"[green]✓[/green] {escape(message)}")

    def error(self, message: str) -> None:
        """Display error message in red."""
        self.console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def warning(self, message: str) -> None:
        """Display warning message in yellow."""
        self.console.print(f"[yellow]⚠[/yellow] {escape(message)}", style="yellow")

    def info(self, message: str) -> None:
        """Display info message (only if verbosity >= 1)."""
        if self.verbosity >= 1:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        """Display debug message (only if verbosity >= 2)."""
        if self.verbosity >= 2:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def print_roundtrip_summary(self, summary: CheckSummary) -> None:
        """Display round-trip check results with color coding.

        Failing pages are always listed with each differing path. Passing
        pages are listed only at verbosity >= 1.

        Args:
            summary: Aggregate check outcome
        """
        self.console.print("\n[bold]Round-trip Summary:[/bold]")

        for check in summary.checks:
            name = escape(f"{check.label} ({check.page_id})")
            if check.passed:
                if self.verbosity >= 1:
                    self.console.print(f"  [green]✓[/green] {name}")
                continue
            self.console.print(
                f"  [red]✗[/red] {name}: {len(check.result.diff)} difference(s)"
            )
            for line in check.result.diff:
                self.console.print(f"      [dim]{escape(line)}[/dim]")

        total = len(summary.checks)
        failed = len(summary.failed)
        if total == 0:
            self.console.print("\n[yellow]No pages to check[/yellow]")
        elif failed:
            self.console.print(
                f"\n[red]{failed} of {total} page(s) failed the round trip[/red]"
            )
        else:
            self.console.print(f"\n[green]All {total} page(s) round-trip cleanly[/green]")
