"""Correlation command for StockVision CLI."""

import json

import click
from rich.table import Table

from stockvision.analysis.correlation import build_correlation_matrix
from stockvision.cli.common import console, error_panel, get_config, get_data_store
from stockvision.data.normalize import normalize_ticker


def _cell_style(value: float) -> str:
    if value >= 0.7:
        return "bold green"
    if value >= 0.3:
        return "green"
    if value <= -0.3:
        return "red"
    return "dim"


@click.command("correlate")
@click.argument("symbols", nargs=-1)
@click.option("-w", "--watchlist", default=None, help="Correlate every symbol in a watchlist.")
@click.option("-t", "--timeframe", default=None, help="Candle timeframe (default: from config)")
@click.option("--json", "as_json", is_flag=True, help="Print the matrix as JSON.")
def correlate(symbols: tuple[str, ...], watchlist: str | None, timeframe: str | None, as_json: bool) -> None:
    """Correlation matrix of daily returns for SYMBOLS.

    Uses the last 90 overlapping returns per pair; pairs with fewer than
    8 overlapping returns show 0.

    \b
    Examples:
      stockvision correlate AAPL MSFT NVDA
      stockvision correlate --watchlist tech
    """
    config = get_config()
    timeframe = timeframe or config["data"]["timeframe"]
    store = get_data_store(config)

    tickers = [normalize_ticker(s) for s in symbols]
    if watchlist:
        tickers.extend(store.get_watchlist(watchlist))
    tickers = list(dict.fromkeys(t for t in tickers if t))

    if len(tickers) < 2:
        error_panel("[red]Need at least two symbols to correlate.[/red]")
        raise SystemExit(1)

    candles_by_ticker = {}
    for ticker in tickers:
        candles = store.get_candles(ticker, timeframe)
        if not candles:
            console.print(f"[yellow]Skipping {ticker}: no {timeframe} candles stored[/yellow]")
            continue
        candles_by_ticker[ticker] = candles

    matrix = build_correlation_matrix(candles_by_ticker)

    if as_json:
        click.echo(json.dumps(matrix.values, indent=2))
        return

    table = Table(title="Return Correlation", show_header=True, header_style="bold cyan")
    table.add_column("", style="bold")
    for ticker in matrix.tickers:
        table.add_column(ticker, justify="right")

    for a in matrix.tickers:
        cells = []
        for b in matrix.tickers:
            value = matrix[a][b]
            style = "dim" if a == b else _cell_style(value)
            cells.append(f"[{style}]{value:.2f}[/{style}]")
        table.add_row(a, *cells)

    console.print(table)
