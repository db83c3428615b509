"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from covhtml.report.builder import ReportPackage
    from covhtml.themes import Theme

console = Console()
err_console = Console(stderr=True)

_HIGH_COVERAGE = 80.0
_MEDIUM_COVERAGE = 50.0


class CLIReporter:
    """Rich terminal output for the covhtml CLI.

    Errors and warnings go to *errors* (stderr by default) so that they never
    mix with a report written to stdout.
    """

    def __init__(self, output: Console | None = None, errors: Console | None = None) -> None:
        """Initialize the CLI reporter."""
        self.console = output or console
        self.err_console = errors or output or err_console

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.err_console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.err_console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    def print_coverage_summary(
        self, packages: list[ReportPackage], overview: ReportPackage | None = None
    ) -> None:
        """Print a per-package statement coverage table."""
        table = Table(title="Coverage Summary", title_style="bold cyan")
        table.add_column("Package", style="bold")
        table.add_column("Reached", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Coverage", justify="right")

        for pkg in packages:
            pct = pkg.percentage_reached
            color = self._get_coverage_color(pct)
            table.add_row(
                pkg.name,
                str(pkg.reached_statements),
                str(pkg.total_statements),
                f"[{color}]{pct:.1f}%[/{color}]",
            )

        if overview is not None:
            pct = overview.percentage_reached
            color = self._get_coverage_color(pct)
            table.add_section()
            table.add_row(
                f"[bold]{overview.name}[/bold]",
                str(overview.reached_statements),
                str(overview.total_statements),
                f"[bold {color}]{pct:.1f}%[/bold {color}]",
            )

        self.console.print(table)

    def print_themes(self, themes: list[Theme], default: str) -> None:
        """Print the available themes, marking the default one."""
        table = Table(title="Themes", title_style="bold cyan")
        table.add_column("Name", style="bold")
        table.add_column("Description")
        table.add_column("Default", justify="center")

        for theme in themes:
            table.add_row(
                theme.name,
                theme.description,
                "[green]✓[/green]" if theme.name == default else "",
            )

        self.console.print(table)

    def _get_coverage_color(self, percentage: float) -> str:
        """Get a color based on coverage percentage."""
        if percentage >= _HIGH_COVERAGE:
            return "green"
        if percentage >= _MEDIUM_COVERAGE:
            return "yellow"
        return "red"


# Singleton instance for easy import
reporter = CLIReporter()
