"""Moving-average crossover backtest simulator.

Single asset, long only, full allocation. The simulator is FLAT (all
cash) or LONG (all shares); a golden cross of the fast SMA over the slow
SMA enters, a death cross exits. Fees apply to both legs. There is no
forced liquidation at the end of the data.
"""

import logging
import math
from typing import Optional, Union

from stockvision.indicators.technical import calculate_sma, max_drawdown
from stockvision.models import (
    BacktestParams,
    BacktestResult,
    BacktestSummary,
    BacktestTrade,
    Candle,
    EquityPoint,
    TradeType,
)

logger = logging.getLogger(__name__)

MAX_EQUITY_POINTS = 260
MAX_TRADES = 100
DAYS_PER_YEAR = 365
EQUALITY_TOLERANCE = 1e-9


def _is_valid(value: float) -> bool:
    return not math.isnan(value)


class InsufficientHistoryError(ValueError):
    """Raised when a candle series is too short for the requested periods."""

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"Insufficient history: {available} candles, need at least {required}"
        )


class _CrossoverSimulator:
    """Cash/share book for one simulation run."""

    def __init__(self, initial_capital: float, fee_rate: float):
        self.cash = initial_capital
        self.shares = 0.0
        self.fee_rate = fee_rate
        self.entry_value = 0.0
        self.trades: list[BacktestTrade] = []
        self.equity_curve: list[EquityPoint] = []

    @property
    def is_long(self) -> bool:
        return self.shares > 0

    def enter(self, candle: Candle) -> None:
        fee = self.cash * self.fee_rate
        spendable = self.cash - fee
        self.shares = spendable / candle.close
        self.entry_value = spendable + fee
        self.cash = 0.0
        self.trades.append(BacktestTrade(
            type=TradeType.BUY,
            date=candle.date,
            price=candle.close,
            shares=self.shares,
            fee=fee,
        ))
        logger.debug("BUY %.4f shares at %.4f on %s", self.shares, candle.close, candle.date)

    def exit(self, candle: Candle) -> None:
        gross = self.shares * candle.close
        fee = gross * self.fee_rate
        net = gross - fee
        pnl = net - self.entry_value
        self.trades.append(BacktestTrade(
            type=TradeType.SELL,
            date=candle.date,
            price=candle.close,
            shares=self.shares,
            fee=fee,
            pnl=pnl,
        ))
        logger.debug("SELL %.4f shares at %.4f on %s, pnl %.2f",
                     self.shares, candle.close, candle.date, pnl)
        self.cash = net
        self.shares = 0.0
        self.entry_value = 0.0

    def mark(self, candle: Candle) -> None:
        self.equity_curve.append(EquityPoint(
            date=candle.date,
            value=self.cash + self.shares * candle.close,
            close=candle.close,
        ))


def _cagr_pct(initial: float, final: float, elapsed_days: int, total_return_pct: float) -> float:
    if elapsed_days <= 0 or initial <= 0 or final <= 0:
        return total_return_pct
    years = elapsed_days / DAYS_PER_YEAR
    try:
        return ((final / initial) ** (1 / years) - 1) * 100
    except OverflowError:
        # Sub-week spans can compound past float range
        return total_return_pct


def _summarize(
    candles: list[Candle],
    params: BacktestParams,
    book: _CrossoverSimulator,
) -> BacktestSummary:
    final_capital = book.equity_curve[-1].value
    total_return_pct = (final_capital / params.initial_capital - 1) * 100

    first_close = candles[0].close
    buy_hold_return_pct = (candles[-1].close / first_close - 1) * 100

    closed = [t for t in book.trades if t.type == TradeType.SELL]
    wins = sum(1 for t in closed if t.pnl is not None and t.pnl > 0)
    losses = len(closed) - wins
    win_rate_pct = wins / len(closed) * 100 if closed else 0.0

    elapsed_days = (candles[-1].date - candles[0].date).days

    return BacktestSummary(
        initial_capital=params.initial_capital,
        final_capital=final_capital,
        total_return_pct=total_return_pct,
        buy_hold_return_pct=buy_hold_return_pct,
        alpha_pct=total_return_pct - buy_hold_return_pct,
        max_drawdown_pct=max_drawdown([p.value for p in book.equity_curve]),
        trades=len(closed),
        wins=wins,
        losses=losses,
        win_rate_pct=win_rate_pct,
        cagr_pct=_cagr_pct(
            params.initial_capital, final_capital, elapsed_days, total_return_pct
        ),
        ends_in_position=book.is_long,
    )


def run_backtest(
    candles: list[Candle],
    params: Optional[Union[BacktestParams, dict]] = None,
) -> BacktestResult:
    """Run an SMA crossover simulation over one candle sequence.

    A bar can only signal once both averages are defined on it. On the
    first such bar there is no earlier relationship to cross from, so the
    fast average opening above the slow one counts as a golden cross.

    Args:
        candles: Ascending, already-cleaned candles. Never mutated.
        params: BacktestParams or a mapping accepted by it (snake_case or
            camelCase keys). Defaults to 20/50 SMAs, 10,000 capital, 5 bps.

    Returns:
        BacktestResult whose curve and trade log are cut to the latest
        260 points and 100 trades after statistics are computed.

    Raises:
        pydantic.ValidationError: Invalid periods, capital or fee.
        InsufficientHistoryError: Fewer than ``slow_period + 10`` candles.
    """
    if params is None:
        params = BacktestParams()
    elif not isinstance(params, BacktestParams):
        params = BacktestParams.model_validate(params)

    if len(candles) < params.min_candles:
        logger.debug("Rejecting backtest: %d candles for slow period %d",
                     len(candles), params.slow_period)
        raise InsufficientHistoryError(len(candles), params.min_candles)

    closes = [c.close for c in candles]
    fast = calculate_sma(closes, params.fast_period)
    slow = calculate_sma(closes, params.slow_period)

    book = _CrossoverSimulator(params.initial_capital, params.fee_rate)
    prev_above = False
    prev_below = False

    for i, candle in enumerate(candles):
        if _is_valid(fast[i]) and _is_valid(slow[i]):
            # Averages of a flat series can differ in the last bits
            level = math.isclose(fast[i], slow[i], rel_tol=EQUALITY_TOLERANCE)
            above = not level and fast[i] > slow[i]
            below = not level and fast[i] < slow[i]
            if not book.is_long and above and not prev_above:
                book.enter(candle)
            elif book.is_long and below and not prev_below:
                book.exit(candle)
            prev_above, prev_below = above, below
        book.mark(candle)

    summary = _summarize(candles, params, book)
    logger.debug(
        "Backtest %d/%d over %d candles: %d round trips, return %.2f%%",
        params.fast_period, params.slow_period, len(candles),
        summary.trades, summary.total_return_pct,
    )

    return BacktestResult(
        summary=summary,
        equity_curve=tuple(book.equity_curve[-MAX_EQUITY_POINTS:]),
        trades=tuple(book.trades[-MAX_TRADES:]),
    )
