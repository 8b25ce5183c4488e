"""Tests for the metrics facade.

Validates the neutral snapshot, scenario behaviour, bounds on random
input and JSON shape of the serialised snapshot.
"""

from datetime import date, timedelta

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stockvision.analysis import derive_metrics, empty_snapshot
from stockvision.models import Candle, Momentum, RiskLevel, Trend, VolumeTrend


def create_candles(closes: list[float], volume: float = 1000.0) -> list[Candle]:
    """Daily candles with a one-point band around each close."""
    start = date(2024, 1, 1)
    return [
        Candle(
            date=start + timedelta(days=i),
            open=close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=volume,
        )
        for i, close in enumerate(closes)
    ]


@st.composite
def candle_series(draw, min_length: int = 1, max_length: int = 120):
    length = draw(st.integers(min_value=min_length, max_value=max_length))
    base = draw(st.floats(min_value=5.0, max_value=500.0))
    changes = draw(st.lists(
        st.floats(min_value=-0.08, max_value=0.08),
        min_size=length - 1,
        max_size=length - 1,
    ))
    volumes = draw(st.lists(
        st.floats(min_value=0.0, max_value=1e7),
        min_size=length,
        max_size=length,
    ))

    closes = [base]
    for change in changes:
        closes.append(max(0.01, closes[-1] * (1 + change)))

    start = date(2023, 1, 2)
    candles = []
    for i, close in enumerate(closes):
        candles.append(Candle(
            date=start + timedelta(days=i),
            open=close,
            high=close * 1.01,
            low=close * 0.99,
            close=close,
            volume=volumes[i],
        ))
    return candles


class TestEmptySnapshot:
    def test_empty_sequence_is_neutral(self):
        snapshot = derive_metrics([])

        assert snapshot == empty_snapshot()
        assert snapshot.signal_score == 50
        assert snapshot.trend == Trend.NEUTRAL
        assert snapshot.momentum == Momentum.NEUTRAL
        assert snapshot.risk_level == RiskLevel.LOW
        assert snapshot.volume_trend == VolumeTrend.STABLE
        assert snapshot.rsi14 == 50
        assert snapshot.last_close == 0
        assert snapshot.signal_flags == ()

    def test_single_candle(self):
        snapshot = derive_metrics(create_candles([100.0]))

        assert snapshot.last_close == 100.0
        assert snapshot.change_pct == 0.0
        assert snapshot.rsi14 == 50.0
        assert snapshot.sma20 == 0.0
        assert snapshot.trend == Trend.NEUTRAL
        assert snapshot.volatility == 0.0


class TestScenarios:
    def test_flat_series(self):
        snapshot = derive_metrics(create_candles([100.0] * 60))

        assert snapshot.volatility == 0.0
        assert snapshot.max_drawdown == 0.0
        assert snapshot.change_pct == 0.0
        assert snapshot.trend in (Trend.RANGE_BOUND, Trend.NEUTRAL)
        assert snapshot.sma20 == 100.0
        assert snapshot.sma50 == 100.0
        assert snapshot.support == 99.0
        assert snapshot.resistance == 101.0
        assert snapshot.distance_to_support_pct == pytest.approx(1.0)
        assert snapshot.distance_to_resistance_pct == pytest.approx(1.0)

    def test_steady_uptrend(self):
        snapshot = derive_metrics(create_candles([100.0 * 1.01 ** i for i in range(80)]))

        assert snapshot.trend == Trend.BULLISH
        assert snapshot.rsi14 == 100.0
        assert snapshot.momentum == Momentum.OVERBOUGHT
        assert snapshot.max_drawdown == 0.0
        assert snapshot.performance20 == pytest.approx((1.01 ** 20 - 1) * 100)
        assert snapshot.change_pct == pytest.approx(1.0)
        assert snapshot.signal_flags[0] == "Bullish trend"
        assert "RSI overbought" in snapshot.signal_flags
        assert "Strong 20-bar strength" in snapshot.signal_flags

    def test_steady_downtrend(self):
        snapshot = derive_metrics(create_candles([500.0 * 0.99 ** i for i in range(80)]))

        assert snapshot.trend == Trend.BEARISH
        assert snapshot.momentum == Momentum.OVERSOLD
        assert snapshot.max_drawdown > 0
        assert snapshot.signal_flags[:2] == ("Bearish trend", "RSI oversold")

    def test_change_pct_uses_last_two_closes(self):
        snapshot = derive_metrics(create_candles([90.0, 100.0, 110.0]))
        assert snapshot.change_pct == pytest.approx(10.0)

    def test_volume_expansion(self):
        candles = create_candles([100.0] * 10, volume=100.0)
        later = create_candles([100.0] * 20, volume=200.0)[10:]
        snapshot = derive_metrics(candles + later)

        assert snapshot.volume_trend == VolumeTrend.INCREASING
        assert snapshot.avg_volume == 150.0


class TestSnapshotProperties:
    """
    **Feature: stockvision, Property 7: Snapshot Bounds**

    *For any* valid candle sequence, the snapshot keeps RSI and score in
    range, drawdown and volatility non-negative and at most six flags.
    """

    @given(candles=candle_series())
    @settings(max_examples=100, deadline=None)
    def test_bounds(self, candles: list[Candle]):
        snapshot = derive_metrics(candles)

        assert 0 <= snapshot.rsi14 <= 100
        assert 0 <= snapshot.signal_score <= 100
        assert isinstance(snapshot.signal_score, int)
        assert snapshot.max_drawdown >= 0
        assert snapshot.volatility >= 0
        assert len(snapshot.signal_flags) <= 6
        assert snapshot.low <= snapshot.high

    @given(candles=candle_series())
    @settings(max_examples=50, deadline=None)
    def test_idempotent(self, candles: list[Candle]):
        before = list(candles)
        first = derive_metrics(candles)
        second = derive_metrics(candles)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()
        assert candles == before


class TestSerialization:
    def test_camel_case_keys(self):
        data = derive_metrics(create_candles([100.0] * 30)).model_dump(
            mode="json", by_alias=True
        )

        assert data["lastClose"] == 100.0
        assert data["signalScore"] == derive_metrics(create_candles([100.0] * 30)).signal_score
        assert data["volumeTrend"] == "Stable"
        assert data["trend"] == "Neutral"
        assert data["riskLevel"] == "Low"
        assert "rsi14" in data
        assert "distanceToSupportPct" in data
        assert isinstance(data["signalFlags"], list)

    def test_accepts_field_names_and_aliases(self):
        snapshot = empty_snapshot()
        rebuilt = type(snapshot).model_validate(snapshot.model_dump(by_alias=True))
        assert rebuilt == snapshot
