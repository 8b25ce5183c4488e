"""Cross-asset correlation of daily returns."""

import logging
import math
from datetime import datetime
from typing import Mapping

from stockvision.models import Candle, CorrelationMatrix

logger = logging.getLogger(__name__)

CORRELATION_WINDOW = 90
MIN_OVERLAP = 8


def returns_by_timestamp(candles: list[Candle]) -> dict[datetime, float]:
    """Daily returns keyed by the timestamp of the later candle.

    Non-finite returns (e.g. a zero prior close) are dropped.
    """
    result = {}
    for prev, curr in zip(candles, candles[1:]):
        if prev.close == 0:
            continue
        value = (curr.close - prev.close) / prev.close
        if math.isfinite(value):
            result[curr.timestamp] = value
    return result


def pearson(xs: list[float], ys: list[float]) -> float:
    """Pearson correlation of two equally long samples.

    Returns 0 when fewer than eight observations exist or either sample
    is constant.
    """
    n = min(len(xs), len(ys))
    if n < MIN_OVERLAP:
        return 0.0
    xs, ys = xs[-n:], ys[-n:]

    mean_x = sum(xs) / n
    mean_y = sum(ys) / n
    cov = 0.0
    var_x = 0.0
    var_y = 0.0
    for x, y in zip(xs, ys):
        dx = x - mean_x
        dy = y - mean_y
        cov += dx * dy
        var_x += dx * dx
        var_y += dy * dy

    denominator = math.sqrt(var_x * var_y)
    if denominator == 0:
        return 0.0
    return max(-1.0, min(1.0, cov / denominator))


def _pair_coefficient(a: dict[datetime, float], b: dict[datetime, float]) -> float:
    overlap = sorted(a.keys() & b.keys())[-CORRELATION_WINDOW:]
    coefficient = pearson([a[t] for t in overlap], [b[t] for t in overlap])
    return round(coefficient, 2) or 0.0  # no negative zero


def build_correlation_matrix(
    candles_by_ticker: Mapping[str, list[Candle]],
) -> CorrelationMatrix:
    """Build a symmetric correlation matrix of daily returns.

    Returns are aligned on candle timestamps and each pair uses its last
    90 overlapping observations. Each unordered pair is computed once and
    mirrored; the diagonal is exactly 1.

    Args:
        candles_by_ticker: Ascending candle sequences keyed by ticker.

    Returns:
        CorrelationMatrix with coefficients rounded to 2 decimals.
    """
    tickers = list(candles_by_ticker)
    returns = {t: returns_by_timestamp(candles_by_ticker[t]) for t in tickers}
    values: dict[str, dict[str, float]] = {t: {} for t in tickers}

    for i, a in enumerate(tickers):
        values[a][a] = 1.0
        for b in tickers[i + 1:]:
            coefficient = _pair_coefficient(returns[a], returns[b])
            values[a][b] = coefficient
            values[b][a] = coefficient

    logger.debug("Built %dx%d correlation matrix", len(tickers), len(tickers))
    return CorrelationMatrix(tickers=tuple(tickers), values=values)
