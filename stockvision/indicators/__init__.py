"""Technical indicators module."""

from stockvision.indicators.technical import (
    annualized_volatility,
    calculate_atr,
    calculate_rsi,
    calculate_sma,
    daily_returns,
    max_drawdown,
    performance,
    resistance,
    sma,
    support,
    true_ranges,
    volume_trend,
)

__all__ = [
    "annualized_volatility",
    "calculate_atr",
    "calculate_rsi",
    "calculate_sma",
    "daily_returns",
    "max_drawdown",
    "performance",
    "resistance",
    "sma",
    "support",
    "true_ranges",
    "volume_trend",
]
