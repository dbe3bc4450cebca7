"""
CLI output formatting utilities.

This module provides helpers for consistent terminal output using the
Rich library.
"""

from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table

from drivesweep.core.models import DuplicateGroup, Priority, Recommendation
from drivesweep.utils.formatting import format_bytes

# Global console instance
console = Console()

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "dim",
}


def print_header(title: str, subtitle: Optional[str] = None) -> None:
    """Print a formatted header."""
    console.print()
    console.rule(f"[bold blue]{title}[/bold blue]")
    if subtitle:
        console.print(f"[dim]{subtitle}[/dim]")
    console.print()


def print_section(title: str) -> None:
    console.print(f"\n[bold]{title}[/bold]")


def print_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    console.print(f"[red]✗[/red] {message}", style="red")


def print_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_config(config_dict: Dict[str, Any], title: str = "Configuration") -> None:
    """Print a configuration dictionary in a nice format."""
    print_section(title)
    for key, value in config_dict.items():
        if isinstance(value, (list, tuple)):
            value_str = ", ".join(str(v) for v in value)
        else:
            value_str = str(value)
        console.print(f"  [cyan]{key}:[/cyan] {value_str}")


def print_statistics(stats: Dict[str, Any], title: str = "Statistics") -> None:
    """Print statistics in a table format."""
    table = Table(title=title, show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for key, value in stats.items():
        if isinstance(value, float) and 0 <= value <= 1:
            value_str = f"{value:.1%}"
        elif isinstance(value, float):
            value_str = f"{value:.2f}"
        else:
            value_str = str(value)
        table.add_row(key, value_str)

    console.print(table)


def print_groups(groups: List[DuplicateGroup], limit: int = 20) -> None:
    """Print the top duplicate groups as a table."""
    table = Table(title="Duplicate Groups", show_header=True)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Conf.", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Keep")
    table.add_column("Wasted", justify="right", style="green")
    table.add_column("Action")

    for index, group in enumerate(groups[:limit], 1):
        table.add_row(
            str(index),
            group.kind.value,
            str(group.confidence),
            str(group.size),
            group.kept.name,
            format_bytes(group.wasted_bytes),
            group.suggested_action.value + ("" if group.can_auto_resolve else " (confirm)"),
        )

    console.print(table)
    if len(groups) > limit:
        console.print(f"[dim]  ... and {len(groups) - limit:,} more group(s)[/dim]")


def print_recommendations(recommendations: List[Recommendation]) -> None:
    """Print recommendations, most urgent first."""
    print_section("Recommendations")
    if not recommendations:
        console.print("  No recommendations")
        return

    for rec in recommendations:
        style = PRIORITY_STYLES.get(rec.priority, "")
        auto = "auto" if rec.auto_executable else "needs confirmation"
        console.print(
            f"  [{style}]{rec.priority.value.upper()}[/{style}] {rec.action} "
            f"[dim]({rec.risk_level.value}, {auto})[/dim]"
        )
        console.print(f"      {rec.description}")
        console.print(f"      Potential savings: [green]{format_bytes(rec.potential_savings)}[/green]")


def format_number(n: int) -> str:
    """Format a number with thousand separators."""
    return f"{n:,}"


def format_duration(seconds: float) -> str:
    """Format duration in human-readable format."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    elif seconds < 3600:
        return f"{seconds / 60:.1f}m"
    else:
        return f"{seconds / 3600:.1f}h"
