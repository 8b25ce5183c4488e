"""Technical indicator calculations for market signal analysis.

Every function here is total: short or empty input yields a documented
neutral value instead of raising, so callers can always render a result.
Rolling series use NaN for "not yet available" slots; scalar helpers
return ``None`` or 0 as noted per function.
"""

import math
from typing import Optional

from stockvision.models.metrics import VolumeTrend

TRADING_DAYS_PER_YEAR = 252
SUPPORT_RESISTANCE_WINDOW = 20
VOLUME_TREND_WINDOW = 10
VOLUME_TREND_THRESHOLD = 0.15


def calculate_sma(prices: list[float], period: int) -> list[float]:
    """Calculate a rolling Simple Moving Average.

    Args:
        prices: List of price values (typically close prices)
        period: Number of periods for the moving average

    Returns:
        List of SMA values aligned with ``prices``. First (period-1)
        values are NaN.
    """
    if len(prices) < period or period < 1:
        return [float('nan')] * len(prices)

    result = [float('nan')] * (period - 1)

    for i in range(period - 1, len(prices)):
        window = prices[i - period + 1:i + 1]
        result.append(sum(window) / period)

    return result


def sma(prices: list[float], period: int) -> Optional[float]:
    """Simple moving average of the trailing ``period`` values.

    Returns:
        The average, or None while fewer than ``period`` values exist.
    """
    if period < 1 or len(prices) < period:
        return None
    return sum(prices[-period:]) / period


def calculate_rsi(prices: list[float], period: int = 14) -> float:
    """Calculate Wilder's Relative Strength Index for the latest bar.

    Average gain/loss are seeded with the simple mean of the first
    ``period`` deltas, then smoothed with
    ``avg = (avg * (period - 1) + value) / period``.

    Args:
        prices: List of price values (typically close prices)
        period: RSI period (default 14)

    Returns:
        RSI in [0, 100]. 50 when there are ``period`` or fewer prices,
        100 when the smoothed average loss is zero.
    """
    if period < 1 or len(prices) <= period:
        return 50.0

    gains = 0.0
    losses = 0.0
    for i in range(1, period + 1):
        change = prices[i] - prices[i - 1]
        if change > 0:
            gains += change
        else:
            losses -= change

    avg_gain = gains / period
    avg_loss = losses / period

    for i in range(period + 1, len(prices)):
        change = prices[i] - prices[i - 1]
        gain = change if change > 0 else 0.0
        loss = -change if change < 0 else 0.0
        avg_gain = (avg_gain * (period - 1) + gain) / period
        avg_loss = (avg_loss * (period - 1) + loss) / period

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def daily_returns(prices: list[float]) -> list[float]:
    """Bar-over-bar fractional returns, dropping non-finite values."""
    returns = []
    for i in range(1, len(prices)):
        prev = prices[i - 1]
        if prev == 0:
            continue
        value = (prices[i] - prev) / prev
        if math.isfinite(value):
            returns.append(value)
    return returns


def annualized_volatility(returns: list[float]) -> float:
    """Population standard deviation of daily returns, annualized, in %.

    Returns:
        ``stdev * sqrt(252) * 100``; 0 for empty input.
    """
    if not returns:
        return 0.0

    mean = sum(returns) / len(returns)
    variance = sum((r - mean) ** 2 for r in returns) / len(returns)
    return math.sqrt(variance) * math.sqrt(TRADING_DAYS_PER_YEAR) * 100


def true_ranges(
    high: list[float],
    low: list[float],
    close: list[float],
) -> list[float]:
    """True range per bar; the first bar has no prior close and uses high-low."""
    n = min(len(high), len(low), len(close))
    if n == 0:
        return []

    result = [high[0] - low[0]]
    for i in range(1, n):
        result.append(max(
            high[i] - low[i],
            abs(high[i] - close[i - 1]),
            abs(low[i] - close[i - 1]),
        ))
    return result


def calculate_atr(
    high: list[float],
    low: list[float],
    close: list[float],
    period: int = 14
) -> float:
    """Calculate Average True Range for the latest bar.

    Args:
        high: List of high prices
        low: List of low prices
        close: List of close prices
        period: ATR period (default 14)

    Returns:
        Mean of the trailing ``period`` true ranges, or of all of them when
        fewer exist. 0 for empty input.
    """
    ranges = true_ranges(high, low, close)
    if not ranges or period < 1:
        return 0.0

    window = ranges[-period:]
    return sum(window) / len(window)


def performance(prices: list[float], lookback: int) -> float:
    """Percent change from the close ``lookback`` bars ago to the latest one.

    Returns 0 when the series is too short or the reference close is 0.
    """
    if lookback < 1 or len(prices) < lookback + 1:
        return 0.0

    reference = prices[-lookback - 1]
    if reference == 0:
        return 0.0
    return (prices[-1] - reference) / reference * 100


def max_drawdown(values: list[float]) -> float:
    """Largest running-peak drawdown as a non-negative percentage.

    Returns:
        0 for an empty or never-declining series.
    """
    peak = None
    worst = 0.0

    for value in values:
        if peak is None or value > peak:
            peak = value
        if peak > 0:
            drawdown = (value - peak) / peak
            if drawdown < worst:
                worst = drawdown

    return abs(worst) * 100


def volume_trend(volumes: list[float]) -> VolumeTrend:
    """Classify recent volume against the preceding window.

    Compares the mean of the latest 10 volumes to the mean of the 10
    before them; a move beyond 15% either way is a trend.
    """
    window = VOLUME_TREND_WINDOW
    if len(volumes) < window * 2:
        return VolumeTrend.STABLE

    recent = sum(volumes[-window:]) / window
    prior = sum(volumes[-window * 2:-window]) / window

    if recent > prior * (1 + VOLUME_TREND_THRESHOLD):
        return VolumeTrend.INCREASING
    if recent < prior * (1 - VOLUME_TREND_THRESHOLD):
        return VolumeTrend.DECLINING
    return VolumeTrend.STABLE


def support(lows: list[float], window: int = SUPPORT_RESISTANCE_WINDOW) -> float:
    """Lowest low over the trailing window (0 for empty input)."""
    if not lows:
        return 0.0
    return min(lows[-window:])


def resistance(highs: list[float], window: int = SUPPORT_RESISTANCE_WINDOW) -> float:
    """Highest high over the trailing window (0 for empty input)."""
    if not highs:
        return 0.0
    return max(highs[-window:])
