"""MetricsSnapshot data model and the classification enums it carries."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Trend(str, Enum):
    """Price structure relative to the 20/50 bar moving averages."""

    BULLISH = "Bullish"
    BEARISH = "Bearish"
    RANGE_BOUND = "Range-bound"
    NEUTRAL = "Neutral"


class Momentum(str, Enum):
    """RSI regime."""

    OVERBOUGHT = "Overbought"
    OVERSOLD = "Oversold"
    POSITIVE = "Positive"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class VolumeTrend(str, Enum):
    INCREASING = "Increasing"
    DECLINING = "Declining"
    STABLE = "Stable"


class MetricsSnapshot(BaseModel):
    """Read-only indicator bundle derived from one candle sequence.

    Serialises with camelCase keys (``lastClose``, ``signalScore``, ...)
    via ``model_dump(by_alias=True)``.
    """

    last_close: float = Field(..., description="Latest close")
    change_pct: float = Field(..., description="Close-to-close change vs prior bar, %")
    high: float = Field(..., description="Highest high over the window")
    low: float = Field(..., description="Lowest low over the window")
    avg_volume: float = Field(..., ge=0, description="Mean volume over the window")
    volatility: float = Field(..., ge=0, description="Annualized volatility, %")
    rsi14: float = Field(..., ge=0, le=100, description="14-period Wilder RSI")
    sma20: float = Field(..., description="20-bar SMA, 0 when unavailable")
    sma50: float = Field(..., description="50-bar SMA, 0 when unavailable")
    trend: Trend
    momentum: Momentum
    support: float = Field(..., description="20-bar low")
    resistance: float = Field(..., description="20-bar high")
    atr14: float = Field(..., description="14-bar average true range")
    atr_pct: float = Field(..., description="ATR as % of last close")
    performance5: float = Field(..., description="5-bar return, %")
    performance20: float = Field(..., description="20-bar return, %")
    max_drawdown: float = Field(..., ge=0, description="Largest peak-to-trough decline, %")
    volume_trend: VolumeTrend
    distance_to_support_pct: float
    distance_to_resistance_pct: float
    risk_level: RiskLevel
    signal_score: int = Field(..., ge=0, le=100, description="Composite score")
    signal_flags: tuple[str, ...] = Field(default=(), max_length=6)

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
