"""Scan command for StockVision CLI.

Ranks watchlist stocks by composite signal score, with optional filters
on score, trend and risk.
"""

from typing import Optional

import click
from rich.panel import Panel
from rich.table import Table

from stockvision.analysis.metrics import derive_metrics
from stockvision.cli.common import console, fmt_pct, get_config, get_data_store
from stockvision.cli.metrics import RISK_STYLES, TREND_STYLES, score_style
from stockvision.db.store import DataStore
from stockvision.models import RiskLevel, Trend


def scan_symbols(
    symbols: list[str],
    store: DataStore,
    timeframe: str = "1day",
    min_score: Optional[int] = None,
    trend: Optional[Trend] = None,
    risk: Optional[RiskLevel] = None,
    limit: Optional[int] = None,
) -> list[dict]:
    """Derive metrics per symbol, filter, and rank by signal score.

    Args:
        symbols: Symbols to scan.
        store: DataStore holding their candles.
        timeframe: Candle timeframe.
        min_score: Keep only scores at or above this value.
        trend: Keep only this trend classification.
        risk: Keep only this risk level.
        limit: Maximum number of rows returned.

    Returns:
        Dicts with ``symbol``, ``metrics`` (MetricsSnapshot) and
        ``candles`` (count), highest score first, ties by symbol.
        Symbols without stored candles are skipped.
    """
    results = []

    for symbol in symbols:
        candles = store.get_candles(symbol, timeframe)
        if not candles:
            continue

        snapshot = derive_metrics(candles)

        if min_score is not None and snapshot.signal_score < min_score:
            continue
        if trend is not None and snapshot.trend != trend:
            continue
        if risk is not None and snapshot.risk_level != risk:
            continue

        results.append({
            "symbol": symbol,
            "metrics": snapshot,
            "candles": len(candles),
        })

    results.sort(key=lambda row: (-row["metrics"].signal_score, row["symbol"]))

    if limit is not None:
        results = results[:limit]
    return results


@click.command("scan")
@click.option(
    "-w", "--watchlist",
    default=None,
    help="Watchlist to scan (default: from config, usually 'default')",
)
@click.option("-m", "--min-score", type=click.IntRange(0, 100), help="Minimum signal score.")
@click.option(
    "--trend",
    type=click.Choice([t.value for t in Trend], case_sensitive=False),
    help="Only show this trend classification.",
)
@click.option(
    "--risk",
    type=click.Choice([r.value for r in RiskLevel], case_sensitive=False),
    help="Only show this risk level.",
)
@click.option("-n", "--limit", type=int, default=None, help="Maximum rows (default: from config).")
@click.option("-t", "--timeframe", default=None, help="Candle timeframe (default: from config)")
def scan(
    watchlist: Optional[str],
    min_score: Optional[int],
    trend: Optional[str],
    risk: Optional[str],
    limit: Optional[int],
    timeframe: Optional[str],
) -> None:
    """Rank watchlist stocks by signal score.

    \b
    Examples:
      stockvision scan                       # Rank default watchlist
      stockvision scan --min-score 60        # Only strong setups
      stockvision scan --trend Bullish --risk Low
    """
    config = get_config()
    watchlist = watchlist or config["scan"]["watchlist"]
    limit = limit if limit is not None else config["scan"]["limit"]
    timeframe = timeframe or config["data"]["timeframe"]

    store = get_data_store(config)
    symbols = store.get_watchlist(watchlist)

    if not symbols:
        console.print(Panel(
            f"[yellow]Watchlist '{watchlist}' is empty.[/yellow]\n\n"
            "Add stocks to your watchlist first:\n"
            "[cyan]stockvision watch add AAPL MSFT[/cyan]",
            title="[bold yellow]Empty Watchlist[/bold yellow]",
            border_style="yellow",
        ))
        return

    console.print(f"[dim]Scanning {len(symbols)} stocks in '{watchlist}' watchlist...[/dim]")

    results = scan_symbols(
        symbols=symbols,
        store=store,
        timeframe=timeframe,
        min_score=min_score,
        trend=_match_enum(Trend, trend),
        risk=_match_enum(RiskLevel, risk),
        limit=limit,
    )

    if not results:
        console.print(Panel(
            "[dim]No stocks match the specified criteria.[/dim]\n\n"
            "Try adjusting your filters or import candles for your watchlist.",
            title="[bold]No Results[/bold]",
            border_style="dim",
        ))
        return

    table = Table(
        title=f"Signal Board ({len(results)} stocks)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", style="dim", width=3)
    table.add_column("Symbol", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Change", justify="right")
    table.add_column("Perf 20", justify="right")
    table.add_column("RSI", justify="right")
    table.add_column("Trend")
    table.add_column("Risk")
    table.add_column("Flags", style="dim")

    for rank, row in enumerate(results, 1):
        m = row["metrics"]
        s_style = score_style(m.signal_score)
        t_style = TREND_STYLES[m.trend]
        r_style = RISK_STYLES[m.risk_level]
        table.add_row(
            str(rank),
            row["symbol"],
            f"[{s_style}]{m.signal_score}[/{s_style}]",
            f"{m.last_close:.2f}",
            fmt_pct(m.change_pct),
            fmt_pct(m.performance20),
            f"{m.rsi14:.1f}",
            f"[{t_style}]{m.trend.value}[/{t_style}]",
            f"[{r_style}]{m.risk_level.value}[/{r_style}]",
            ", ".join(m.signal_flags),
        )

    console.print(table)


def _match_enum(enum_cls, value: Optional[str]):
    if value is None:
        return None
    for member in enum_cls:
        if member.value.lower() == value.lower():
            return member
    return None
