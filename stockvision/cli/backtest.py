"""Backtest command for StockVision CLI.

Runs the SMA crossover simulation on stored candles and prints the
summary and the most recent trades.
"""

import json

import click
from pydantic import ValidationError
from rich.panel import Panel
from rich.table import Table

from stockvision.backtest.engine import InsufficientHistoryError, run_backtest
from stockvision.cli.common import console, error_panel, fmt_pct, get_config, get_data_store, load_symbol_candles
from stockvision.data.normalize import normalize_ticker
from stockvision.models import BacktestParams, BacktestResult, TradeType


def render_result(symbol: str, params: BacktestParams, result: BacktestResult, max_trades: int) -> None:
    """Print a backtest summary panel and trade table."""
    s = result.summary
    position = "[green]LONG[/green]" if s.ends_in_position else "[dim]FLAT[/dim]"

    console.print(Panel(
        f"Capital: {s.initial_capital:,.2f} → [bold]{s.final_capital:,.2f}[/bold]\n"
        f"Strategy return: {fmt_pct(s.total_return_pct)}   "
        f"Buy & hold: {fmt_pct(s.buy_hold_return_pct)}   "
        f"Alpha: {fmt_pct(s.alpha_pct)}\n"
        f"CAGR: {fmt_pct(s.cagr_pct)}   Max drawdown: [red]{s.max_drawdown_pct:.2f}%[/red]\n"
        f"Round trips: {s.trades} ({s.wins}W / {s.losses}L, win rate {s.win_rate_pct:.1f}%)   "
        f"Ends: {position}",
        title=(
            f"[bold]{symbol} SMA {params.fast_period}/{params.slow_period} "
            f"({params.fee_bps:g} bps)[/bold]"
        ),
        border_style="cyan",
    ))

    if not result.trades or max_trades <= 0:
        console.print("[dim]No trades: the averages never crossed.[/dim]")
        return

    table = Table(title="Recent Trades", show_header=True, header_style="bold cyan")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Price", justify="right")
    table.add_column("Shares", justify="right")
    table.add_column("Fee", justify="right")
    table.add_column("P&L", justify="right")

    for trade in result.trades[-max_trades:]:
        type_style = "green" if trade.type == TradeType.BUY else "red"
        if trade.pnl is None:
            pnl_str = ""
        else:
            pnl_style = "green" if trade.pnl > 0 else "red"
            pnl_str = f"[{pnl_style}]{trade.pnl:+,.2f}[/{pnl_style}]"
        table.add_row(
            trade.date.isoformat(),
            f"[{type_style}]{trade.type.value}[/{type_style}]",
            f"{trade.price:.2f}",
            f"{trade.shares:.4f}",
            f"{trade.fee:.2f}",
            pnl_str,
        )

    console.print(table)


@click.command("backtest")
@click.argument("symbol")
@click.option("-f", "--fast", "fast_period", type=int, default=None, help="Fast SMA period.")
@click.option("-s", "--slow", "slow_period", type=int, default=None, help="Slow SMA period.")
@click.option("--capital", "initial_capital", type=float, default=None, help="Starting capital.")
@click.option("--fee-bps", type=float, default=None, help="Fee per leg in basis points.")
@click.option("--trades", "max_trades", type=int, default=10, help="Trades to list (default: 10).")
@click.option("-t", "--timeframe", default=None, help="Candle timeframe (default: from config)")
@click.option("--json", "as_json", is_flag=True, help="Print the full result as JSON.")
def backtest(
    symbol: str,
    fast_period: int | None,
    slow_period: int | None,
    initial_capital: float | None,
    fee_bps: float | None,
    max_trades: int,
    timeframe: str | None,
    as_json: bool,
) -> None:
    """Backtest an SMA crossover strategy on SYMBOL.

    Buys with all cash when the fast SMA crosses above the slow SMA and
    sells everything when it crosses back below. Defaults come from the
    [backtest] config section.

    \b
    Examples:
      stockvision backtest AAPL
      stockvision backtest MSFT --fast 10 --slow 30 --fee-bps 2
    """
    config = get_config()
    symbol = normalize_ticker(symbol)
    timeframe = timeframe or config["data"]["timeframe"]

    overrides = {
        "fast_period": fast_period,
        "slow_period": slow_period,
        "initial_capital": initial_capital,
        "fee_bps": fee_bps,
    }
    settings = dict(config["backtest"])
    settings.update({k: v for k, v in overrides.items() if v is not None})

    try:
        params = BacktestParams.model_validate(settings)
    except ValidationError as e:
        error_panel(
            "[red]Invalid backtest parameters:[/red]\n\n"
            + "\n".join(err["msg"] for err in e.errors()),
        )
        raise SystemExit(1)

    candles = load_symbol_candles(get_data_store(config), symbol, timeframe)

    try:
        result = run_backtest(candles, params)
    except InsufficientHistoryError as e:
        error_panel(f"[red]{e}[/red]", title="Insufficient History")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json", by_alias=True), indent=2))
        return

    render_result(symbol, params, result, max_trades)
