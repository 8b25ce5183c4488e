"""Tests for the rule-based strategy brief."""

from datetime import date, timedelta

import pytest

from stockvision.analysis import derive_metrics, empty_snapshot
from stockvision.insight import build_heuristic_insight
from stockvision.insight.heuristic import CATALYSTS, DEFAULT_QUESTION
from stockvision.models import Candle, Momentum


def snapshot_with(**updates):
    return empty_snapshot().model_copy(update=updates)


class TestConfidence:
    @pytest.mark.parametrize(
        "change_pct, expected",
        [(0.0, 55), (2.4, 57), (2.5, 58), (-3.5, 52), (40.0, 82), (-40.0, 35)],
    )
    def test_follows_daily_change_within_bounds(self, change_pct, expected):
        brief = build_heuristic_insight("AAPL", snapshot_with(change_pct=change_pct))
        assert brief.confidence == expected


class TestContent:
    def test_summary_mentions_ticker_and_profile(self):
        brief = build_heuristic_insight("MSFT", empty_snapshot(), "conservative")

        assert brief.summary.startswith("MSFT shows upward pressure")
        assert "conservative profile" in brief.summary
        assert "capital-preserving" in brief.summary
        assert brief.catalysts == CATALYSTS
        assert len(brief.action_items) == 3

    def test_default_question(self):
        assert build_heuristic_insight("A", empty_snapshot()).answered_question == DEFAULT_QUESTION
        brief = build_heuristic_insight("A", empty_snapshot(), question="Hold into earnings?")
        assert brief.answered_question == "Hold into earnings?"

    def test_bullish_setup(self):
        start = date(2024, 1, 1)
        closes = [100.0 + (i % 3) * 0.5 + i * 0.3 for i in range(80)]
        candles = [
            Candle(date=start + timedelta(days=i), open=c, high=c + 1, low=c - 1, close=c)
            for i, c in enumerate(closes)
        ]
        metrics = derive_metrics(candles)
        assert metrics.trend.value == "Bullish"

        brief = build_heuristic_insight("NVDA", metrics, "aggressive")
        if metrics.rsi14 < 70:
            assert "constructive" in brief.setups[0]
        assert brief.setups[-1].startswith("Watch support around")

    def test_deep_drawdown_adds_risk(self):
        calm = build_heuristic_insight("X", snapshot_with(max_drawdown=10.0))
        deep = build_heuristic_insight("X", snapshot_with(max_drawdown=25.0))

        assert len(deep.risks) == len(calm.risks) + 1
        assert "25.0% drawdown" in deep.risks[-1]

    def test_oversold_setup(self):
        brief = build_heuristic_insight("X", snapshot_with(momentum=Momentum.OVERSOLD, rsi14=20.0))
        assert any("reflex bounce" in s for s in brief.setups)

    def test_camel_case_serialization(self):
        data = build_heuristic_insight("X", empty_snapshot()).model_dump(by_alias=True)
        assert "actionItems" in data
        assert "answeredQuestion" in data
