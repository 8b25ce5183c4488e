"""Backtesting module."""

from stockvision.backtest.engine import (
    MAX_EQUITY_POINTS,
    MAX_TRADES,
    InsufficientHistoryError,
    run_backtest,
)

__all__ = [
    "MAX_EQUITY_POINTS",
    "MAX_TRADES",
    "InsufficientHistoryError",
    "run_backtest",
]
