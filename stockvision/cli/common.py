"""Helpers shared by the CLI command modules."""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel

from stockvision.config import ConfigError, load_config
from stockvision.db.store import DataStore

console = Console()


def error_panel(message: str, title: str = "Error") -> None:
    """Print an error panel."""
    console.print(Panel(
        message,
        title=f"[bold red]{title}[/bold red]",
        border_style="red",
    ))


def get_config(ctx: Optional[click.Context] = None) -> dict:
    """Load configuration for the current invocation, exiting on a bad file."""
    ctx = ctx or click.get_current_context(silent=True)
    config_path = None
    if ctx is not None and ctx.find_root().obj:
        config_path = ctx.find_root().obj.get("config_path")

    try:
        return load_config(Path(config_path) if config_path else None)
    except ConfigError as e:
        error_panel(f"[red]{e}[/red]", title="Config Error")
        raise SystemExit(1)


def get_data_store(config: dict) -> DataStore:
    """Get the data store instance configured in ``[data]``."""
    return DataStore(Path(config["data"]["db_path"]).expanduser())


def load_symbol_candles(store: DataStore, symbol: str, timeframe: str) -> list:
    """Stored candles for a symbol, exiting with a hint when there are none."""
    candles = store.get_candles(symbol, timeframe)
    if not candles:
        error_panel(
            f"[red]No {timeframe} candles stored for {symbol}.[/red]\n\n"
            f"Load some first: [cyan]stockvision import {symbol} FILE[/cyan]",
            title="No Data",
        )
        raise SystemExit(1)
    return candles


def fmt_pct(value: float) -> str:
    """Signed percentage with a green/red style."""
    style = "green" if value > 0 else "red" if value < 0 else "dim"
    return f"[{style}]{value:+.2f}%[/{style}]"
