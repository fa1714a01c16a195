# ABOUTME: Rich UI utilities for enhanced terminal display
# ABOUTME: Provides reusable rich components for showing stat pools and their events

from typing import Iterable, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.align import Align
from rich.style import Style
from rich import box
from rich.markup import escape

from statpool.core.stat_pool import StatPool
from statpool.utils.logging_config import init_logging


console = Console()


def init_console(debug_mode: bool = False) -> Console:
    """Initialize logging and replace the module console.

    Args:
        debug_mode: Whether to tee console output into a debug log file

    Returns:
        The console now used by the print helpers
    """
    global console
    logging_config = init_logging(debug_enabled=debug_mode)
    console = logging_config.create_console()
    return console


def print_banner(title: str = "StatPool Demo", version: str = "0.1.0", color: str = "blue") -> None:
    """Display a styled banner with title and optional version.

    Args:
        title: Banner title
        version: Optional version string
        color: Color scheme (blue, green, cyan, magenta)
    """
    text = title
    if version:
        text += f"\nVersion {version}"

    panel = Panel(
        Align.center(text),
        style=Style(color=color, bold=True),
        expand=False,
        box=box.DOUBLE,
        padding=(1, 3)
    )
    console.print(panel)


def get_pool_status(pool: StatPool) -> str:
    """Classify a pool as EMPTY, FULL or PARTIAL."""
    if pool.is_depleted():
        return "EMPTY"
    if pool.is_filled():
        return "FULL"
    return "PARTIAL"


def format_pool_status(pool: StatPool, label: str) -> str:
    """Format a one-line status such as 'After fill(): 100 (100%) [FULL]'.

    Args:
        pool: Pool to describe
        label: Leading label for the line

    Returns:
        Status line text
    """
    percentage = pool.get_percentage() * 100
    return f"{label}: {pool.value} ({percentage:.0f}%) [{get_pool_status(pool)}]"


def create_pool_table(pools: Iterable[StatPool], title: str = "STAT POOLS") -> Table:
    """Create a styled table for stat pool display.

    Args:
        pools: Pools to list
        title: Table title

    Returns:
        Formatted Rich Table
    """
    table = Table(title=title, style="cyan", show_header=True, header_style="bold magenta")
    table.add_column("Pool", style="bold")
    table.add_column("Min", justify="right")
    table.add_column("Value", justify="center")
    table.add_column("Max", justify="right")
    table.add_column("%", justify="right")
    table.add_column("Status", justify="center")

    for pool in pools:
        percent = pool.get_percentage()

        if percent <= 0.25:
            color = "red"
        elif percent <= 0.5:
            color = "yellow"
        else:
            color = "green"

        table.add_row(
            pool.name,
            str(pool.min_value),
            f"[{color}]{pool.value}[/{color}]",
            str(pool.max_value),
            f"{percent * 100:.0f}%",
            get_pool_status(pool)
        )

    return table


def print_pool_status(pool: StatPool, label: str) -> None:
    """Print an indented status line for a pool."""
    # Status tags like [FULL] would otherwise parse as Rich markup
    console.print(f"  {escape(format_pool_status(pool, label))}")


def print_pool_table(pools: Iterable[StatPool], title: str = "STAT POOLS") -> None:
    """Print the pool table to the console."""
    console.print(create_pool_table(pools, title=title))


def print_status_message(message: str, message_type: str = "info") -> None:
    """Print a styled status message.

    Args:
        message: Message text
        message_type: Type of message (info, success, warning, error)
    """
    colors = {
        "info": "blue",
        "success": "green",
        "warning": "yellow",
        "error": "red",
    }

    symbols = {
        "info": "ℹ",
        "success": "✓",
        "warning": "⚠",
        "error": "✗",
    }

    color = colors.get(message_type, colors["info"])
    symbol = symbols.get(message_type, "•")
    style = Style(color=color, bold=(message_type == "error"))

    console.print(f"[{color}]{symbol}[/{color}] {message}", style=style)


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print an error message with optional exception details.

    Args:
        message: Error message
        error: Optional exception for details
    """
    console.print(f"[bold red]✗ ERROR:[/bold red] {message}")
    if error:
        console.print(f"[dim red]{str(error)}[/dim red]")


def print_section(title: str, content: str = "") -> None:
    """Print a formatted section with title and optional content.

    Args:
        title: Section title
        content: Optional section content
    """
    panel = Panel(
        content,
        title=f"[bold cyan]{title}[/bold cyan]",
        style="cyan",
        expand=False
    )
    console.print(panel)


def print_message(message: str) -> None:
    """Print a plain message without status symbols."""
    console.print(message)
