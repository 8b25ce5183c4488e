"""Metrics command for StockVision CLI.

Shows the indicator snapshot, classifications and signal score for one
symbol.
"""

import json

import click
from rich.panel import Panel
from rich.table import Table

from stockvision.analysis.metrics import derive_metrics
from stockvision.cli.common import console, fmt_pct, get_config, get_data_store, load_symbol_candles
from stockvision.data.normalize import normalize_ticker
from stockvision.data.ranges import RANGE_CONFIG, resolve_range_config
from stockvision.models import MetricsSnapshot, RiskLevel, Trend

TREND_STYLES = {
    Trend.BULLISH: "green",
    Trend.BEARISH: "red",
    Trend.RANGE_BOUND: "yellow",
    Trend.NEUTRAL: "dim",
}

RISK_STYLES = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "yellow",
    RiskLevel.HIGH: "red",
}


def score_style(score: int) -> str:
    if score >= 65:
        return "green"
    if score <= 35:
        return "red"
    return "yellow"


def render_snapshot(symbol: str, snapshot: MetricsSnapshot) -> None:
    """Print a snapshot as a table plus a flags panel."""
    table = Table(title=f"{symbol} Metrics", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    trend_style = TREND_STYLES[snapshot.trend]
    risk_style = RISK_STYLES[snapshot.risk_level]

    table.add_row("Last Close", f"{snapshot.last_close:.2f}")
    table.add_row("Change", fmt_pct(snapshot.change_pct))
    table.add_row("Range", f"{snapshot.low:.2f} - {snapshot.high:.2f}")
    table.add_row("SMA 20 / 50", f"{snapshot.sma20:.2f} / {snapshot.sma50:.2f}")
    table.add_row("RSI 14", f"{snapshot.rsi14:.1f} ({snapshot.momentum.value})")
    table.add_row("Trend", f"[{trend_style}]{snapshot.trend.value}[/{trend_style}]")
    table.add_row("Volatility", f"{snapshot.volatility:.2f}%")
    table.add_row("ATR 14", f"{snapshot.atr14:.2f} ({snapshot.atr_pct:.2f}%)")
    table.add_row("Perf 5 / 20", f"{fmt_pct(snapshot.performance5)} / {fmt_pct(snapshot.performance20)}")
    table.add_row("Max Drawdown", f"{snapshot.max_drawdown:.2f}%")
    table.add_row(
        "Support / Resistance",
        f"{snapshot.support:.2f} ({snapshot.distance_to_support_pct:.1f}%) / "
        f"{snapshot.resistance:.2f} ({snapshot.distance_to_resistance_pct:.1f}%)",
    )
    table.add_row("Volume Trend", snapshot.volume_trend.value)
    table.add_row("Risk", f"[{risk_style}]{snapshot.risk_level.value}[/{risk_style}]")

    style = score_style(snapshot.signal_score)
    table.add_row("Signal Score", f"[bold {style}]{snapshot.signal_score}[/bold {style}]")

    console.print(table)

    if snapshot.signal_flags:
        console.print(Panel(
            "\n".join(f"• {flag}" for flag in snapshot.signal_flags),
            title="[bold]Signal Flags[/bold]",
            border_style=style,
        ))


@click.command("metrics")
@click.argument("symbol")
@click.option("-t", "--timeframe", default=None, help="Candle timeframe (default: from config)")
@click.option(
    "-r", "--range", "range_label",
    type=click.Choice(list(RANGE_CONFIG), case_sensitive=False),
    default=None,
    help="Chart range preset; sets the timeframe and how many recent candles to use.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the snapshot as JSON.")
def metrics(symbol: str, timeframe: str | None, range_label: str | None, as_json: bool) -> None:
    """Show indicators, classification and signal score for SYMBOL.

    \b
    Examples:
      stockvision metrics AAPL
      stockvision metrics MSFT --json
      stockvision metrics NVDA --range 1Y
    """
    config = get_config()
    symbol = normalize_ticker(symbol)
    window = None
    if range_label:
        preset = resolve_range_config(range_label)
        timeframe = timeframe or preset.interval
        window = preset.outputsize
    timeframe = timeframe or config["data"]["timeframe"]

    candles = load_symbol_candles(get_data_store(config), symbol, timeframe)
    if window:
        candles = candles[-window:]
    snapshot = derive_metrics(candles)

    if as_json:
        click.echo(json.dumps(snapshot.model_dump(mode="json", by_alias=True), indent=2))
        return

    render_snapshot(symbol, snapshot)
