"""Backtest parameter and result models."""

from datetime import date as date_type
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


_CAMEL = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TradeType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class BacktestParams(BaseModel):
    """Moving-average crossover strategy parameters.

    Validation rejects invalid period ordering and non-positive capital
    before any simulation work begins.
    """

    fast_period: int = Field(default=20, ge=2, description="Fast SMA period")
    slow_period: int = Field(default=50, ge=3, description="Slow SMA period")
    initial_capital: float = Field(
        default=10_000.0, gt=0, allow_inf_nan=False, description="Starting cash"
    )
    fee_bps: float = Field(
        default=5.0, ge=0, lt=10_000, allow_inf_nan=False,
        description="Fee per leg in basis points of notional",
    )

    model_config = _CAMEL

    @model_validator(mode="after")
    def _check_periods(self) -> "BacktestParams":
        if self.fast_period >= self.slow_period:
            raise ValueError(
                f"fast_period ({self.fast_period}) must be below "
                f"slow_period ({self.slow_period})"
            )
        return self

    @property
    def fee_rate(self) -> float:
        return self.fee_bps / 10_000

    @property
    def min_candles(self) -> int:
        """Shortest history accepted for these periods."""
        return self.slow_period + 10


class BacktestTrade(BaseModel):
    """One leg of a round trip. ``pnl`` is only set on SELL records."""

    type: TradeType
    date: date_type
    price: float
    shares: float
    fee: float
    pnl: Optional[float] = None

    model_config = _CAMEL


class EquityPoint(BaseModel):
    date: date_type
    value: float
    close: float

    model_config = _CAMEL


class BacktestSummary(BaseModel):
    initial_capital: float
    final_capital: float
    total_return_pct: float
    buy_hold_return_pct: float
    alpha_pct: float
    max_drawdown_pct: float = Field(..., ge=0)
    trades: int = Field(..., ge=0, description="Closed round trips")
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)
    win_rate_pct: float = Field(..., ge=0, le=100)
    cagr_pct: float
    ends_in_position: bool

    model_config = _CAMEL


class BacktestResult(BaseModel):
    """Output of one simulation run.

    ``equity_curve`` and ``trades`` hold only the most recent window; the
    summary always reflects the full run.
    """

    summary: BacktestSummary
    equity_curve: tuple[EquityPoint, ...]
    trades: tuple[BacktestTrade, ...]

    model_config = _CAMEL
