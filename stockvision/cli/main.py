"""Main CLI entry point for StockVision.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    This improves CLI startup time by only importing
    command modules when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    "init": "stockvision.cli.data",
    "import": "stockvision.cli.data",
    "watch": "stockvision.cli.watchlist",
    "metrics": "stockvision.cli.metrics",
    "scan": "stockvision.cli.scan",
    "correlate": "stockvision.cli.correlate",
    "backtest": "stockvision.cli.backtest",
    "insight": "stockvision.cli.insight",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="stockvision")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c", "--config", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to config.toml (default: ~/.config/stockvision/config.toml)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: str | None) -> None:
    """StockVision - market signals, correlation and backtests for equities.

    Import candle data, rank a watchlist by signal score, compare
    tickers, and test moving-average crossover strategies.

    \b
    Quick Start:
      stockvision init                       # Create config file
      stockvision import AAPL aapl.csv       # Load candles
      stockvision metrics AAPL               # Indicator snapshot
      stockvision backtest AAPL --fast 10    # Crossover backtest
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
