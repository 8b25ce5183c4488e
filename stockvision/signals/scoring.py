"""Signal classification and the composite tradability score.

Pure functions over already-computed indicator values. The composite
score starts neutral at 50 and adds independently bounded nudges, so no
single factor can push it out of [0, 100].
"""

import math

from stockvision.models.metrics import Momentum, RiskLevel, Trend, VolumeTrend

MAX_FLAGS = 6
PROXIMITY_PCT = 2.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def classify_trend(last_close: float, sma20: float, sma50: float) -> Trend:
    """Classify price structure against the 20 and 50 bar averages.

    A missing average (0 or None) means there is not enough history to
    call a trend, which reads as Neutral.
    """
    if not sma20 or not sma50:
        return Trend.NEUTRAL
    if last_close > sma20 > sma50:
        return Trend.BULLISH
    if last_close < sma20 < sma50:
        return Trend.BEARISH
    return Trend.RANGE_BOUND


def classify_momentum(rsi: float) -> Momentum:
    if rsi >= 70:
        return Momentum.OVERBOUGHT
    if rsi <= 30:
        return Momentum.OVERSOLD
    if rsi >= 55:
        return Momentum.POSITIVE
    if rsi <= 45:
        return Momentum.NEGATIVE
    return Momentum.NEUTRAL


def classify_risk(volatility: float, max_drawdown: float, atr_pct: float) -> RiskLevel:
    if volatility > 45 or max_drawdown > 30 or atr_pct > 5:
        return RiskLevel.HIGH
    if volatility > 28 or max_drawdown > 18 or atr_pct > 3:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def composite_score(
    trend: Trend,
    momentum: Momentum,
    performance20: float,
    volatility: float,
    distance_to_resistance_pct: float,
    distance_to_support_pct: float,
    volume_trend: VolumeTrend,
) -> int:
    """Combine classified signals into a single 0-100 score.

    Args:
        trend: Trend classification (+/-12 for Bullish/Bearish)
        momentum: Momentum classification (+/-8 Positive/Negative,
            +5 Oversold, -5 Overbought)
        performance20: 20-bar return in % (contributes 0.7x, capped at 14)
        volatility: Annualized volatility in % (penalty above 25, capped at 14)
        distance_to_resistance_pct: Distance to the 20-bar high (-6 within 2%)
        distance_to_support_pct: Distance to the 20-bar low (+4 within 2%)
        volume_trend: Volume classification (+/-4 Increasing/Declining)

    Returns:
        Integer score in [0, 100], rounded half up.
    """
    score = 50.0

    if trend == Trend.BULLISH:
        score += 12
    elif trend == Trend.BEARISH:
        score -= 12

    if momentum == Momentum.POSITIVE:
        score += 8
    elif momentum == Momentum.NEGATIVE:
        score -= 8
    elif momentum == Momentum.OVERSOLD:
        score += 5
    elif momentum == Momentum.OVERBOUGHT:
        score -= 5

    score += _clamp(performance20 * 0.7, -14, 14)
    score -= _clamp((volatility - 25) * 0.4, 0, 14)

    if distance_to_resistance_pct <= PROXIMITY_PCT:
        score -= 6
    if distance_to_support_pct <= PROXIMITY_PCT:
        score += 4

    if volume_trend == VolumeTrend.INCREASING:
        score += 4
    elif volume_trend == VolumeTrend.DECLINING:
        score -= 4

    return int(_clamp(_round_half_up(score), 0, 100))


def build_flags(
    trend: Trend,
    rsi: float,
    performance20: float,
    performance5: float,
    distance_to_support_pct: float,
    distance_to_resistance_pct: float,
    atr_pct: float,
    volume_trend: VolumeTrend,
) -> list[str]:
    """Short human-readable notes for notable conditions.

    Conditions are evaluated in a fixed order and the list is cut at six
    entries, so earlier conditions win when many fire at once.
    """
    flags = []

    if trend == Trend.BULLISH:
        flags.append("Bullish trend")
    elif trend == Trend.BEARISH:
        flags.append("Bearish trend")

    if rsi >= 70:
        flags.append("RSI overbought")
    elif rsi <= 30:
        flags.append("RSI oversold")

    if performance20 > 10:
        flags.append("Strong 20-bar strength")
    elif performance20 < -10:
        flags.append("Weak 20-bar strength")

    if performance5 > 4:
        flags.append("5-bar acceleration")
    elif performance5 < -4:
        flags.append("5-bar selloff")

    if distance_to_support_pct <= PROXIMITY_PCT:
        flags.append("Near support")
    if distance_to_resistance_pct <= PROXIMITY_PCT:
        flags.append("Near resistance")

    if atr_pct > 3:
        flags.append("Elevated ATR")

    if volume_trend == VolumeTrend.INCREASING:
        flags.append("Volume expanding")

    return flags[:MAX_FLAGS]
