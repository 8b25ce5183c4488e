"""Tests for signal classification, the composite score and flag notes."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from stockvision.models import Momentum, RiskLevel, Trend, VolumeTrend
from stockvision.signals import (
    MAX_FLAGS,
    build_flags,
    classify_momentum,
    classify_risk,
    classify_trend,
    composite_score,
)


class TestClassifiers:
    @pytest.mark.parametrize(
        "close, sma20, sma50, expected",
        [
            (110.0, 105.0, 100.0, Trend.BULLISH),
            (90.0, 95.0, 100.0, Trend.BEARISH),
            (100.0, 100.0, 100.0, Trend.RANGE_BOUND),
            (104.0, 105.0, 100.0, Trend.RANGE_BOUND),
            (110.0, 105.0, 0.0, Trend.NEUTRAL),
            (110.0, 0.0, 0.0, Trend.NEUTRAL),
        ],
    )
    def test_trend(self, close, sma20, sma50, expected):
        assert classify_trend(close, sma20, sma50) == expected

    @pytest.mark.parametrize(
        "rsi, expected",
        [
            (100.0, Momentum.OVERBOUGHT),
            (70.0, Momentum.OVERBOUGHT),
            (69.99, Momentum.POSITIVE),
            (55.0, Momentum.POSITIVE),
            (54.99, Momentum.NEUTRAL),
            (50.0, Momentum.NEUTRAL),
            (45.01, Momentum.NEUTRAL),
            (45.0, Momentum.NEGATIVE),
            (30.01, Momentum.NEGATIVE),
            (30.0, Momentum.OVERSOLD),
            (0.0, Momentum.OVERSOLD),
        ],
    )
    def test_momentum_boundaries(self, rsi, expected):
        assert classify_momentum(rsi) == expected

    @pytest.mark.parametrize(
        "volatility, drawdown, atr_pct, expected",
        [
            (10.0, 5.0, 1.0, RiskLevel.LOW),
            (28.0, 18.0, 3.0, RiskLevel.LOW),
            (28.5, 0.0, 0.0, RiskLevel.MEDIUM),
            (0.0, 19.0, 0.0, RiskLevel.MEDIUM),
            (0.0, 0.0, 3.5, RiskLevel.MEDIUM),
            (46.0, 0.0, 0.0, RiskLevel.HIGH),
            (0.0, 31.0, 0.0, RiskLevel.HIGH),
            (0.0, 0.0, 5.5, RiskLevel.HIGH),
        ],
    )
    def test_risk(self, volatility, drawdown, atr_pct, expected):
        assert classify_risk(volatility, drawdown, atr_pct) == expected


class TestCompositeScore:
    """
    **Feature: stockvision, Property 5: Score Bounds**

    *For any* combination of classified inputs, the composite score
    should be an integer in [0, 100].
    """

    @given(
        trend=st.sampled_from(list(Trend)),
        momentum=st.sampled_from(list(Momentum)),
        performance20=st.floats(min_value=-500, max_value=500),
        volatility=st.floats(min_value=0, max_value=500),
        dist_res=st.floats(min_value=-50, max_value=200),
        dist_sup=st.floats(min_value=-50, max_value=200),
        vol_trend=st.sampled_from(list(VolumeTrend)),
    )
    @settings(max_examples=200, deadline=None)
    def test_bounded_integer(self, trend, momentum, performance20, volatility,
                             dist_res, dist_sup, vol_trend):
        score = composite_score(
            trend, momentum, performance20, volatility, dist_res, dist_sup, vol_trend
        )
        assert isinstance(score, int)
        assert 0 <= score <= 100

    def test_neutral_baseline(self):
        score = composite_score(
            Trend.RANGE_BOUND, Momentum.NEUTRAL, 0.0, 25.0, 10.0, 10.0, VolumeTrend.STABLE
        )
        assert score == 50

    def test_every_positive_contribution(self):
        # 50 + 12 + 8 + 14 + 4 + 4
        score = composite_score(
            Trend.BULLISH, Momentum.POSITIVE, 30.0, 10.0, 10.0, 1.0, VolumeTrend.INCREASING
        )
        assert score == 92

    def test_clamped_at_zero(self):
        # 50 - 12 - 8 - 14 - 14 - 6 - 4 = -8
        score = composite_score(
            Trend.BEARISH, Momentum.NEGATIVE, -30.0, 100.0, 0.0, 50.0, VolumeTrend.DECLINING
        )
        assert score == 0

    def test_extreme_momentum_is_contrarian(self):
        oversold = composite_score(
            Trend.RANGE_BOUND, Momentum.OVERSOLD, 0.0, 0.0, 10.0, 10.0, VolumeTrend.STABLE
        )
        overbought = composite_score(
            Trend.RANGE_BOUND, Momentum.OVERBOUGHT, 0.0, 0.0, 10.0, 10.0, VolumeTrend.STABLE
        )
        assert oversold == 55
        assert overbought == 45

    @pytest.mark.parametrize("performance20, expected", [(1.0, 51), (-1.0, 49)])
    def test_rounds_to_nearest(self, performance20, expected):
        score = composite_score(
            Trend.RANGE_BOUND, Momentum.NEUTRAL, performance20, 0.0, 10.0, 10.0,
            VolumeTrend.STABLE,
        )
        assert score == expected


class TestFlags:
    """
    **Feature: stockvision, Property 6: Flag Order and Cap**

    *For any* inputs, at most six flags are produced, in a fixed order.
    """

    def test_cap_keeps_earliest(self):
        flags = build_flags(
            Trend.BULLISH, 75.0, 15.0, 6.0, 1.0, 1.0, 4.0, VolumeTrend.INCREASING
        )
        assert flags == [
            "Bullish trend",
            "RSI overbought",
            "Strong 20-bar strength",
            "5-bar acceleration",
            "Near support",
            "Near resistance",
        ]

    def test_negative_conditions(self):
        flags = build_flags(
            Trend.BEARISH, 25.0, -15.0, -6.0, 10.0, 10.0, 1.0, VolumeTrend.DECLINING
        )
        assert flags == [
            "Bearish trend",
            "RSI oversold",
            "Weak 20-bar strength",
            "5-bar selloff",
        ]

    def test_tail_flags(self):
        flags = build_flags(
            Trend.RANGE_BOUND, 50.0, 0.0, 0.0, 10.0, 10.0, 3.5, VolumeTrend.INCREASING
        )
        assert flags == ["Elevated ATR", "Volume expanding"]

    def test_quiet_market_has_no_flags(self):
        flags = build_flags(
            Trend.RANGE_BOUND, 50.0, 0.0, 0.0, 10.0, 10.0, 1.0, VolumeTrend.STABLE
        )
        assert flags == []

    @given(
        trend=st.sampled_from(list(Trend)),
        rsi=st.floats(min_value=0, max_value=100),
        perf20=st.floats(min_value=-50, max_value=50),
        perf5=st.floats(min_value=-20, max_value=20),
        dist_sup=st.floats(min_value=0, max_value=20),
        dist_res=st.floats(min_value=-5, max_value=20),
        atr_pct=st.floats(min_value=0, max_value=10),
        vol_trend=st.sampled_from(list(VolumeTrend)),
    )
    @settings(max_examples=100, deadline=None)
    def test_never_more_than_cap(self, trend, rsi, perf20, perf5, dist_sup, dist_res,
                                 atr_pct, vol_trend):
        flags = build_flags(trend, rsi, perf20, perf5, dist_sup, dist_res, atr_pct, vol_trend)
        assert len(flags) <= MAX_FLAGS
        assert len(set(flags)) == len(flags)
