"""Metrics facade: one candle sequence in, one MetricsSnapshot out."""

import logging

from stockvision.indicators.technical import (
    annualized_volatility,
    calculate_atr,
    calculate_rsi,
    daily_returns,
    max_drawdown,
    performance,
    resistance,
    sma,
    support,
    volume_trend,
)
from stockvision.models import Candle, MetricsSnapshot, Momentum, RiskLevel, Trend, VolumeTrend
from stockvision.signals.scoring import (
    build_flags,
    classify_momentum,
    classify_risk,
    classify_trend,
    composite_score,
)

logger = logging.getLogger(__name__)


def empty_snapshot() -> MetricsSnapshot:
    """The neutral snapshot returned for an empty candle sequence."""
    return MetricsSnapshot(
        last_close=0.0,
        change_pct=0.0,
        high=0.0,
        low=0.0,
        avg_volume=0.0,
        volatility=0.0,
        rsi14=50.0,
        sma20=0.0,
        sma50=0.0,
        trend=Trend.NEUTRAL,
        momentum=Momentum.NEUTRAL,
        support=0.0,
        resistance=0.0,
        atr14=0.0,
        atr_pct=0.0,
        performance5=0.0,
        performance20=0.0,
        max_drawdown=0.0,
        volume_trend=VolumeTrend.STABLE,
        distance_to_support_pct=0.0,
        distance_to_resistance_pct=0.0,
        risk_level=RiskLevel.LOW,
        signal_score=50,
        signal_flags=(),
    )


def _pct_of(numerator: float, base: float) -> float:
    return numerator / base * 100 if base else 0.0


def derive_metrics(candles: list[Candle]) -> MetricsSnapshot:
    """Compute the full indicator bundle for a candle sequence.

    Args:
        candles: Ascending, already-cleaned candles. Never mutated.

    Returns:
        MetricsSnapshot. An empty sequence yields ``empty_snapshot()``.
    """
    if not candles:
        return empty_snapshot()

    closes = [c.close for c in candles]
    highs = [c.high for c in candles]
    lows = [c.low for c in candles]
    volumes = [c.volume for c in candles]

    last_close = closes[-1]
    prev_close = closes[-2] if len(closes) > 1 else last_close
    change_pct = _pct_of(last_close - prev_close, prev_close)

    volatility = annualized_volatility(daily_returns(closes))
    rsi14 = calculate_rsi(closes, 14)
    sma20 = sma(closes, 20) or 0.0
    sma50 = sma(closes, 50) or 0.0
    support_level = support(lows)
    resistance_level = resistance(highs)
    atr14 = calculate_atr(highs, lows, closes, 14)
    atr_pct = _pct_of(atr14, last_close)
    performance5 = performance(closes, 5)
    performance20 = performance(closes, 20)
    drawdown = max_drawdown(closes)
    vol_trend = volume_trend(volumes)
    distance_to_support_pct = _pct_of(last_close - support_level, last_close)
    distance_to_resistance_pct = _pct_of(resistance_level - last_close, last_close)

    trend = classify_trend(last_close, sma20, sma50)
    momentum = classify_momentum(rsi14)
    risk_level = classify_risk(volatility, drawdown, atr_pct)
    score = composite_score(
        trend,
        momentum,
        performance20,
        volatility,
        distance_to_resistance_pct,
        distance_to_support_pct,
        vol_trend,
    )
    flags = build_flags(
        trend,
        rsi14,
        performance20,
        performance5,
        distance_to_support_pct,
        distance_to_resistance_pct,
        atr_pct,
        vol_trend,
    )

    logger.debug(
        "Derived metrics over %d candles: score=%d trend=%s risk=%s",
        len(candles), score, trend.value, risk_level.value,
    )

    return MetricsSnapshot(
        last_close=last_close,
        change_pct=change_pct,
        high=max(highs),
        low=min(lows),
        avg_volume=sum(volumes) / len(volumes),
        volatility=volatility,
        rsi14=rsi14,
        sma20=sma20,
        sma50=sma50,
        trend=trend,
        momentum=momentum,
        support=support_level,
        resistance=resistance_level,
        atr14=atr14,
        atr_pct=atr_pct,
        performance5=performance5,
        performance20=performance20,
        max_drawdown=drawdown,
        volume_trend=vol_trend,
        distance_to_support_pct=distance_to_support_pct,
        distance_to_resistance_pct=distance_to_resistance_pct,
        risk_level=risk_level,
        signal_score=score,
        signal_flags=tuple(flags),
    )
