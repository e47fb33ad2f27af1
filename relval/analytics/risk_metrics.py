"""
Risk and performance metrics for relative-value backtests.

This module implements the statistics the backtest engine reports over an
equity curve built from cumulative trade outcomes:
  - Core performance: total return, Sharpe ratio
  - Drawdown/pain: drawdown series and maximum drawdown
  - Trade-style: win/loss ratio with an explicit "infinite" sentinel

Every function degrades gracefully on empty or flat inputs (returning 0 or the
sentinel) instead of producing NaN or raising, since the engine must stay total
over an empty filtered opportunity set.
"""

import numpy as np
import pandas as pd

from relval.utils.math import (
    compute_mean,
    compute_population_std,
    compute_simple_returns,
)


class InfiniteRatio:
    """
    Sentinel for a ratio whose denominator is zero.

    **Conceptual**: A win/loss ratio with no losses is "infinite" in spirit,
    but ``float('inf')`` leaks into arithmetic and formatting (e.g. averages of
    ratios silently become inf). A distinct singleton forces callers to handle
    the case explicitly while still rendering as "inf" for display.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "INFINITE"

    def __str__(self) -> str:
        return "inf"

    def __reduce__(self):
        return (InfiniteRatio, ())


INFINITE = InfiniteRatio()

# Relative std below which a return series counts as constant
ZERO_STD_TOLERANCE = 1e-12


def compute_total_return(equity_curve: pd.Series) -> float:
    """
    Compute the overall return from start to end of an equity curve.

    **Mathematical**: Given initial value E_0 and final value E_T:
        Total Return = (E_T / E_0) - 1

    **Edge cases**:
    - Empty curve → 0.0.
    - Single point → 0.0 (no trades).

    Args:
        equity_curve: Equity values in chronological order (positive start).

    Returns:
        Total return as a decimal (e.g., 0.05 = 5% gain).
    """
    if len(equity_curve) == 0:
        return 0.0

    # ROI formula: (final / initial) - 1
    initial_equity = equity_curve.iloc[0]
    final_equity = equity_curve.iloc[-1]
    return float(final_equity / initial_equity - 1.0)


def compute_sharpe_ratio(
    returns: pd.Series,
    periods_per_year: int = 252,
) -> float:
    """
    Compute the annualized Sharpe ratio of a per-step return series.

    **Conceptual**: Sharpe measures reward per unit of variability. Here each
    step is one trade rather than one day, but the conventional √252 scaling is
    kept so values are comparable with daily-bar backtests.

    **Mathematical**:
        Sharpe = mean(r) / σ_pop(r) * sqrt(periods_per_year)
    with zero risk-free rate and the population standard deviation.

    **Edge cases**:
    - Empty series → σ = 0 → Sharpe = 0.
    - Constant returns (σ = 0 up to floating-point noise, including a single
      trade) → Sharpe = 0.

    Args:
        returns: Per-step simple returns.
        periods_per_year: Annualization factor (252 by default).

    Returns:
        Sharpe ratio, 0.0 when undefined.
    """
    mean = compute_mean(returns)
    std = compute_population_std(returns)
    # Constant series can leave a rounding-level std instead of an exact 0
    if std <= ZERO_STD_TOLERANCE * max(1.0, abs(mean)):
        return 0.0

    return float(mean / std * np.sqrt(periods_per_year))


def compute_drawdown_series(equity_curve: pd.Series) -> pd.Series:
    """
    Compute the fractional decline from the running peak at each point.

    **Mathematical**: At each point t:
        drawdown_t = (peak_t - equity_t) / peak_t
    where peak_t = max(equity_0, ..., equity_t). Values are >= 0 and equal 0
    whenever equity is at a new high.

    **Edge cases**:
    - Non-positive peak → drawdown 0 at that point (ratio undefined).

    Args:
        equity_curve: Equity values in chronological order.

    Returns:
        Series of drawdowns (>= 0), same index as input.
    """
    # Running maximum, including the seed point
    running_peak = equity_curve.cummax()

    drawdown = (running_peak - equity_curve) / running_peak.where(running_peak > 0)
    return drawdown.fillna(0.0)


def compute_max_drawdown(equity_curve: pd.Series) -> float:
    """
    Compute the worst peak-to-trough decline as a positive fraction.

    **Edge cases**:
    - Empty curve or monotonically non-decreasing equity → 0.0.

    Returns:
        Maximum drawdown as a decimal >= 0 (e.g., 0.12 = 12% below peak).
    """
    if len(equity_curve) == 0:
        return 0.0
    return float(compute_drawdown_series(equity_curve).max())


def compute_win_loss_ratio(wins: int, losses: int) -> float | InfiniteRatio:
    """
    Ratio of winning trades to losing trades.

    **Edge cases**:
    - losses == 0 → INFINITE (also when wins == 0, e.g. no trades at all).

    Args:
        wins: Number of trades classified as wins.
        losses: Number of trades classified as losses.

    Returns:
        wins / losses, or the INFINITE sentinel.
    """
    if losses > 0:
        return wins / losses
    return INFINITE


def compute_equity_metrics(
    equity_curve: pd.Series,
    periods_per_year: int = 252,
) -> dict[str, float]:
    """
    Headline statistics for an equity curve, percentages expressed as %.

    Returns:
        Dict with total_return (%), sharpe_ratio, max_drawdown (%) and
        final_equity, all at full precision.
    """
    returns = compute_simple_returns(equity_curve)
    return {
        'total_return': compute_total_return(equity_curve) * 100.0,
        'sharpe_ratio': compute_sharpe_ratio(returns, periods_per_year=periods_per_year),
        'max_drawdown': compute_max_drawdown(equity_curve) * 100.0,
        'final_equity': float(equity_curve.iloc[-1]) if len(equity_curve) else 0.0,
    }
