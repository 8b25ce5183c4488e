"""Data models for StockVision."""

from stockvision.models.backtest import (
    BacktestParams,
    BacktestResult,
    BacktestSummary,
    BacktestTrade,
    EquityPoint,
    TradeType,
)
from stockvision.models.candle import Candle
from stockvision.models.correlation import CorrelationMatrix
from stockvision.models.metrics import (
    MetricsSnapshot,
    Momentum,
    RiskLevel,
    Trend,
    VolumeTrend,
)

__all__ = [
    "BacktestParams",
    "BacktestResult",
    "BacktestSummary",
    "BacktestTrade",
    "Candle",
    "CorrelationMatrix",
    "EquityPoint",
    "MetricsSnapshot",
    "Momentum",
    "RiskLevel",
    "TradeType",
    "Trend",
    "VolumeTrend",
]
