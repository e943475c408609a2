"""Rich console formatter for portfolio snapshots."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..domain import PortfolioSnapshot
from .generator import format_balance, format_fiat


def _truncate_address(address: str) -> str:
    """Truncate address for display."""
    return f"{address[:10]}...{address[-4:]}"


def build_snapshot_table(snapshot: PortfolioSnapshot) -> Table:
    fiat = snapshot.fiat_currency
    table = Table(expand=True, show_lines=False)
    table.add_column("Asset", style="cyan", no_wrap=True)
    table.add_column("Balance", justify="right")
    table.add_column(f"Price ({fiat.upper()})", justify="right", style="yellow")
    table.add_column(f"Value ({fiat.upper()})", justify="right", style="green")

    for valuation in snapshot.valuations:
        price_display = (
            format_fiat(valuation.price, fiat)
            if valuation.price_available
            else "[dim]<N/A>[/]"
        )
        table.add_row(
            valuation.display_name,
            f"{format_balance(valuation.balance)} {valuation.symbol}",
            price_display,
            format_fiat(valuation.fiat_value, fiat),
        )

    table.add_row(
        "[bold]Total Portfolio Value[/]",
        "",
        "",
        f"[bold]{format_fiat(snapshot.total_fiat_value, fiat)}[/]",
        style="bold",
    )
    return table


def format_snapshot_table(
    snapshot: PortfolioSnapshot, console: Console | None = None
) -> None:
    """Print the snapshot as a rich panel to stdout.

    Args:
        snapshot: The portfolio snapshot to format
        console: Optional console to print to (defaults to stdout)
    """
    console = console or Console()
    panel = Panel(
        build_snapshot_table(snapshot),
        title=f"[bold white]Portfolio {_truncate_address(snapshot.address)}[/]",
        border_style="cyan",
        padding=(1, 2),
    )

    console.print()
    console.print(panel)
    missing = [v.symbol for v in snapshot.valuations if not v.price_available]
    if missing:
        console.print(
            f"[yellow]No {snapshot.fiat_currency.upper()} price for: "
            f"{', '.join(missing)} (valued at 0)[/]"
        )
    console.print()
