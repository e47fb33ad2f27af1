"""
Mathematical and statistical utilities for the analytics core.

This module provides the small numerical building blocks the engines share:
simple returns over an equity path, population mean/standard deviation with
empty-input guards, the GARCH(1,1)-style volatility update used for spread
histories, display rounding, and construction of the injectable random source.
"""

import numpy as np
import pandas as pd

from relval.config.settings import get_settings


def make_rng(rng: np.random.Generator | None = None) -> np.random.Generator:
    """
    Return the random source an engine should draw from.

    **Conceptual**: Every randomized engine (backtest outcome multipliers,
    frontier weights, synthetic generators) takes an optional
    ``numpy.random.Generator``. Passing one makes the run reproducible; passing
    None falls back to a generator seeded from RELVAL_RANDOM_SEED, or from OS
    entropy when no seed is configured.

    Args:
        rng: Caller-supplied generator, returned unchanged if given.

    Returns:
        A numpy Generator.
    """
    if rng is not None:
        return rng
    return np.random.default_rng(get_settings().analytics.random_seed)


def compute_simple_returns(equity: pd.Series) -> pd.Series:
    """
    Convert an equity path into per-step simple returns.

    **Mathematical**: r_i = E_i / E_{i-1} - 1 for i = 1..n.

    Unlike a raw ``pct_change``, the leading NaN is dropped so the result has
    exactly n = len(equity) - 1 elements (empty for a one-point path).

    Args:
        equity: Equity values in chronological order.

    Returns:
        Series of simple returns aligned to equity.index[1:].
    """
    return equity.pct_change().iloc[1:]


def compute_mean(values: pd.Series) -> float:
    """Arithmetic mean, 0.0 for an empty series."""
    if len(values) == 0:
        return 0.0
    return float(values.mean())


def compute_population_std(values: pd.Series) -> float:
    """
    Population standard deviation (ddof=0), 0.0 for an empty series.

    **Mathematical**: σ = sqrt( (1/n) * Σ (x_i - mean)^2 )

    The population form is used (not the sample form) so that a single return
    yields σ = 0 rather than NaN.
    """
    if len(values) == 0:
        return 0.0
    return float(values.std(ddof=0))


def compute_garch_volatility_step(
    previous_volatility: float,
    shock: float,
    omega_weight: float = 0.1,
    long_run_volatility: float = 0.1,
    persistence: float = 0.8,
    shock_weight: float = 0.1,
) -> float:
    """
    One step of a GARCH(1,1)-style volatility recursion.

    **Mathematical**:
        σ_t = sqrt( ω * σ_LR^2 + β * σ_{t-1}^2 + α * ε_t^2 )
    with ω = 0.1, σ_LR = 0.1, β = 0.8, α = 0.1 by default. The weights sum to 1,
    so in the absence of shocks volatility decays toward sqrt(ω/(1-β)) * σ_LR.

    The result is strictly positive whenever ω * σ_LR^2 > 0.
    """
    variance = (
        omega_weight * long_run_volatility ** 2
        + persistence * previous_volatility ** 2
        + shock_weight * shock ** 2
    )
    return float(np.sqrt(variance))


def round_display(value: float, decimals: int = 2) -> float:
    """Round a full-precision value for display; never fed back into computation."""
    return round(float(value), decimals)
