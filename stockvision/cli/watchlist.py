"""Watchlist management commands for StockVision CLI.

Handles watchlist operations including add, remove, list, and import commands.
Supports multiple named watchlists.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from stockvision.cli.common import console, get_config, get_data_store
from stockvision.data.normalize import normalize_ticker

# Predefined universes for import
PREDEFINED_LISTS = {
    "pulse": ["SPY", "QQQ", "DIA", "IWM", "AAPL", "MSFT", "NVDA", "TSLA"],
    "indices": ["SPY", "QQQ", "DIA", "IWM"],
    "megacap": ["AAPL", "MSFT", "NVDA", "AMZN", "GOOGL", "META", "TSLA"],
}


@click.group()
def watch() -> None:
    """Manage watchlists.

    Add, remove, and view symbols in your watchlists. The scan command
    ranks the symbols of one watchlist.

    \b
    Examples:
      stockvision watch add AAPL MSFT         # Add to default watchlist
      stockvision watch add NVDA --list tech  # Add to 'tech' watchlist
      stockvision watch list                  # Show all watchlists
      stockvision watch import pulse          # Import the market pulse set
    """
    pass


@watch.command("add")
@click.argument("symbols", nargs=-1, required=True)
@click.option(
    "--list", "list_name",
    default="default",
    help="Name of the watchlist to add to (default: 'default').",
)
def add_symbol(symbols: tuple[str, ...], list_name: str) -> None:
    """Add one or more symbols to a watchlist."""
    store = get_data_store(get_config())
    current = store.get_watchlist(list_name)

    for raw in symbols:
        symbol = normalize_ticker(raw)
        if symbol in current:
            console.print(f"[yellow]{symbol} is already in watchlist '{list_name}'[/yellow]")
            continue
        store.add_to_watchlist(symbol, list_name)
        current.append(symbol)
        console.print(f"[green]✓ Added {symbol} to watchlist '{list_name}'[/green]")


@watch.command("remove")
@click.argument("symbol")
@click.option(
    "--list", "list_name",
    default="default",
    help="Name of the watchlist to remove from (default: 'default').",
)
def remove_symbol(symbol: str, list_name: str) -> None:
    """Remove a symbol from a watchlist."""
    symbol = normalize_ticker(symbol)
    store = get_data_store(get_config())

    if symbol not in store.get_watchlist(list_name):
        console.print(f"[yellow]{symbol} is not in watchlist '{list_name}'[/yellow]")
        return

    store.remove_from_watchlist(symbol, list_name)
    console.print(f"[green]✓ Removed {symbol} from watchlist '{list_name}'[/green]")


@watch.command("import")
@click.argument("preset", type=click.Choice(sorted(PREDEFINED_LISTS)))
@click.option(
    "--list", "list_name",
    default="default",
    help="Watchlist to import into (default: 'default').",
)
def import_preset(preset: str, list_name: str) -> None:
    """Import a predefined symbol set into a watchlist."""
    store = get_data_store(get_config())
    for symbol in PREDEFINED_LISTS[preset]:
        store.add_to_watchlist(symbol, list_name)
    console.print(
        f"[green]✓ Imported {len(PREDEFINED_LISTS[preset])} symbols from "
        f"'{preset}' into '{list_name}'[/green]"
    )


@watch.command("list")
@click.option(
    "--list", "list_name",
    default=None,
    help="Name of the watchlist to display. If not specified, shows all watchlists.",
)
def list_watchlist(list_name: Optional[str]) -> None:
    """Display watchlist symbols."""
    store = get_data_store(get_config())
    names = [list_name] if list_name else sorted(store.get_watchlist_names())

    if not names:
        console.print(Panel(
            "[dim]No watchlists found. Use 'stockvision watch add SYMBOL' to create one.[/dim]",
            title="[bold]Watchlists[/bold]",
            border_style="dim",
        ))
        return

    for name in names:
        symbols = store.get_watchlist(name)
        if not symbols:
            console.print(f"[dim]Watchlist '{name}' is empty[/dim]")
            continue

        table = Table(
            title=f"Watchlist: {name}",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("#", style="dim", width=4)
        table.add_column("Symbol", style="bold")

        for i, symbol in enumerate(symbols, 1):
            table.add_row(str(i), symbol)

        console.print(table)
        console.print(f"[dim]Total: {len(symbols)} symbols[/dim]\n")
