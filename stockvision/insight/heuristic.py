"""Rule-based strategy brief built from a MetricsSnapshot.

This is the offline advisory text used when no language model is
configured. It only reads the snapshot; nothing here feeds back into
scores or backtests.
"""

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stockvision.models import MetricsSnapshot, Momentum, Trend

RiskProfile = Literal["aggressive", "balanced", "conservative"]

DEFAULT_QUESTION = "General strategy brief"

RISK_TONES = {
    "aggressive": "higher-beta continuation setups",
    "balanced": "balanced opportunities with controlled position sizing",
    "conservative": "capital-preserving entries with tighter risk controls",
}

CATALYSTS = (
    "Macro data releases and rate expectations",
    "Sector rotation against mega-cap leadership",
    "Unexpected earnings guidance or revisions",
)


class Insight(BaseModel):
    """A strategy brief for one ticker."""

    summary: str
    setups: tuple[str, ...] = ()
    risks: tuple[str, ...] = ()
    catalysts: tuple[str, ...] = ()
    action_items: tuple[str, ...] = ()
    confidence: int = Field(..., ge=0, le=100)
    answered_question: str = DEFAULT_QUESTION

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


def build_heuristic_insight(
    ticker: str,
    metrics: MetricsSnapshot,
    risk_profile: RiskProfile = "balanced",
    question: str = "",
) -> Insight:
    """Assemble a strategy brief from indicator values.

    Args:
        ticker: Symbol the brief is about.
        metrics: Snapshot from ``derive_metrics``.
        risk_profile: One of aggressive, balanced, conservative.
        question: Optional user question echoed back in the brief.

    Returns:
        Insight with confidence ``55 + change_pct`` clamped to [35, 82].
    """
    direction = "upward" if metrics.change_pct >= 0 else "downward"
    tone = RISK_TONES.get(risk_profile, RISK_TONES["balanced"])

    setups = []
    if metrics.trend == Trend.BULLISH and metrics.rsi14 < 70:
        setups.append(f"Trend remains constructive above key moving averages for {ticker}.")
    if metrics.trend == Trend.BEARISH and metrics.rsi14 > 30:
        setups.append("Weak structure suggests rallies may be sold near resistance.")
    if metrics.momentum == Momentum.OVERSOLD:
        setups.append("RSI is stretched to the downside; watch for a reflex bounce.")
    setups.append(
        f"Watch support around {metrics.support:.2f} and resistance near "
        f"{metrics.resistance:.2f}."
    )

    risks = [
        f"Annualized volatility is {metrics.volatility:.2f}%, which can widen "
        "intraday ranges quickly.",
        f"Momentum currently reads {metrics.momentum.value.lower()}, so reversals "
        "can be sharp.",
    ]
    if metrics.max_drawdown > 18:
        risks.append(
            f"The window already holds a {metrics.max_drawdown:.1f}% drawdown from its peak."
        )

    action_items = [
        f"Define invalidation below {metrics.support:.2f} before entering a trade.",
        "Size risk per trade first, then choose entry precision.",
        "Re-evaluate if price closes beyond the 20-day regime for two sessions.",
    ]

    confidence = max(35, min(82, math.floor(55 + metrics.change_pct + 0.5)))

    return Insight(
        summary=(
            f"{ticker} shows {direction} pressure with a {metrics.trend.value.lower()} "
            f"trend profile. For a {risk_profile} profile, focus on {tone}."
        ),
        setups=tuple(setups),
        risks=tuple(risks),
        catalysts=CATALYSTS,
        action_items=tuple(action_items),
        confidence=confidence,
        answered_question=question or DEFAULT_QUESTION,
    )
