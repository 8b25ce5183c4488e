"""Insight command for StockVision CLI.

Prints the rule-based strategy brief for a symbol.
"""

import click
from rich.markdown import Markdown
from rich.panel import Panel

from stockvision.analysis.metrics import derive_metrics
from stockvision.cli.common import console, get_config, get_data_store, load_symbol_candles
from stockvision.data.normalize import normalize_ticker
from stockvision.insight.heuristic import build_heuristic_insight


@click.command("insight")
@click.argument("symbol")
@click.option(
    "-r", "--risk-profile",
    type=click.Choice(["aggressive", "balanced", "conservative"]),
    default="balanced",
    help="Risk profile to tailor the brief to (default: balanced).",
)
@click.option("-q", "--question", default="", help="Question to answer in the brief.")
@click.option("-t", "--timeframe", default=None, help="Candle timeframe (default: from config)")
def insight(symbol: str, risk_profile: str, question: str, timeframe: str | None) -> None:
    """Strategy brief for SYMBOL built from its metrics.

    \b
    Examples:
      stockvision insight AAPL
      stockvision insight TSLA -r conservative -q "Is this a pullback entry?"
    """
    config = get_config()
    symbol = normalize_ticker(symbol)
    timeframe = timeframe or config["data"]["timeframe"]

    candles = load_symbol_candles(get_data_store(config), symbol, timeframe)
    brief = build_heuristic_insight(symbol, derive_metrics(candles), risk_profile, question)

    sections = [f"**{brief.answered_question}**", "", brief.summary]
    for title, items in (
        ("Setups", brief.setups),
        ("Risks", brief.risks),
        ("Catalysts", brief.catalysts),
        ("Action Items", brief.action_items),
    ):
        if items:
            sections.append(f"\n### {title}")
            sections.extend(f"- {item}" for item in items)

    console.print(Panel(
        Markdown("\n".join(sections)),
        title=f"[bold]{symbol} Strategy Brief[/bold]",
        subtitle=f"[dim]confidence {brief.confidence}/100 · heuristic[/dim]",
        border_style="cyan",
    ))
