"""Data commands for StockVision CLI.

Creates the config file and loads OHLCV candles from CSV or JSON files
into the local store.
"""

from pathlib import Path

import click
from rich.panel import Panel

from stockvision.cli.common import console, error_panel, get_config, get_data_store
from stockvision.config import get_config_path, write_default_config
from stockvision.data.normalize import load_candles_file, normalize_ticker

VALID_TIMEFRAMES = ["5min", "15min", "1h", "1day"]


@click.command("init")
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create a default config file.

    \b
    Examples:
      stockvision init
      stockvision --config ./sv.toml init
    """
    config_path = ctx.find_root().obj.get("config_path")
    path = get_config_path(Path(config_path) if config_path else None)
    existed = path.exists()
    write_default_config(path)

    if existed:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
    else:
        console.print(Panel(
            f"[green]Created config at[/green] {path}\n\n"
            "Edit the [cyan][backtest][/cyan] and [cyan][scan][/cyan] sections to "
            "change defaults.",
            title="[bold green]StockVision[/bold green]",
            border_style="green",
        ))


@click.command("import")
@click.argument("symbol")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-t", "--timeframe",
    default=None,
    type=click.Choice(VALID_TIMEFRAMES),
    help="Candle timeframe (default: from config, usually 1day)",
)
@click.option(
    "-w", "--watch", "watchlist",
    default=None,
    help="Also add the symbol to this watchlist.",
)
def import_candles(symbol: str, path: Path, timeframe: str | None, watchlist: str | None) -> None:
    """Import OHLCV candles for SYMBOL from a CSV or JSON file.

    CSV files need a header with date (or datetime), open, high, low,
    close and volume columns. JSON may be a list of rows or a provider
    time_series payload.

    \b
    Examples:
      stockvision import AAPL aapl.csv
      stockvision import MSFT msft.json --watch tech
    """
    config = get_config()
    symbol = normalize_ticker(symbol)
    timeframe = timeframe or config["data"]["timeframe"]

    try:
        candles = load_candles_file(path)
    except (OSError, ValueError) as e:
        error_panel(f"[red]Failed to read {path}:[/red]\n\n{e}")
        raise SystemExit(1)

    if not candles:
        error_panel(f"[red]No valid candles found in {path}.[/red]", title="No Data")
        raise SystemExit(1)

    store = get_data_store(config)
    store.save_candles(symbol, timeframe, candles)
    if watchlist:
        store.add_to_watchlist(symbol, watchlist)

    console.print(
        f"[green]✓ Imported {len(candles)} {timeframe} candles for {symbol}[/green] "
        f"[dim]({candles[0].date} → {candles[-1].date})[/dim]"
    )
