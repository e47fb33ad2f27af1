"""
Caller-facing entrypoints for the analytics core.

These wrappers are the call boundary: they validate arguments, log and raise
InvalidArgumentError for anything out of range, and then hand off to the
engines, which never raise for well-typed input.
"""

import numbers
from typing import Hashable, Sequence

import numpy as np
from loguru import logger

from relval.analytics.yield_curve import Scenario, apply_scenario
from relval.backtesting.engine import BacktestResult
from relval.backtesting.engine import run_backtest as _run_backtest
from relval.config.settings import get_settings
from relval.data.schemas import ScenarioCurvePoint, TradeOpportunity, YieldCurvePoint
from relval.portfolio.frontier import Frontier
from relval.portfolio.frontier import explore_frontier as _explore_frontier
from relval.strategies.base import StrategyName, StrategyParams, parse_strategy_name
from relval.utils.errors import InvalidArgumentError


def _coerce_params(params: "StrategyParams | dict | None") -> StrategyParams | None:
    if params is None or isinstance(params, StrategyParams):
        return params
    if isinstance(params, dict):
        unknown = set(params) - {'min_profit', 'max_risk'}
        if unknown:
            raise InvalidArgumentError(f"Unknown strategy params: {sorted(unknown)}.")
        return StrategyParams(**params)
    raise InvalidArgumentError(
        f"params must be StrategyParams, a dict, or None, got {type(params).__name__}."
    )


def run_backtest(
    opportunities: list[TradeOpportunity],
    strategy: "str | StrategyName",
    params: "StrategyParams | dict | None" = None,
    rng: np.random.Generator | None = None,
) -> BacktestResult:
    """
    Backtest a strategy over an opportunity set.

    Args:
        opportunities: Candidate opportunities.
        strategy: "Balanced" or "Custom".
        params: Custom thresholds, as StrategyParams or
                {"min_profit": ..., "max_risk": ...}.
        rng: Optional seeded generator for reproducible runs.

    Raises:
        InvalidArgumentError: Unknown strategy or malformed params.
    """
    try:
        resolved = parse_strategy_name(strategy)
        coerced = _coerce_params(params)
    except InvalidArgumentError as exc:
        logger.warning("Rejected backtest request: {}", exc)
        raise
    return _run_backtest(opportunities, resolved, coerced, rng=rng)


def apply_yield_scenario(
    curve: list[YieldCurvePoint],
    scenario_name: "str | Scenario | None",
) -> list[ScenarioCurvePoint]:
    """Stress a base curve; unknown scenario names leave yields unchanged."""
    return apply_scenario(curve, scenario_name)


def explore_frontier(
    asset_ids: Sequence[Hashable],
    sample_count: int | None = None,
    rng: np.random.Generator | None = None,
    max_workers: int = 1,
) -> Frontier:
    """
    Sample the risk/return frontier over candidate assets.

    Args:
        asset_ids: Candidate assets (e.g. leg-A bond names of a screen).
        sample_count: Portfolios to draw. Defaults to RELVAL_FRONTIER_SAMPLES
                      (1000).
        rng: Optional seeded generator.
        max_workers: Threads for sampling.

    Raises:
        InvalidArgumentError: Negative or non-integer sample count, or
                              max_workers < 1.
    """
    if sample_count is None:
        sample_count = get_settings().analytics.frontier_samples

    if isinstance(sample_count, bool) or not isinstance(sample_count, numbers.Integral):
        logger.warning("Rejected frontier request: sample_count={!r}", sample_count)
        raise InvalidArgumentError(
            f"sample_count must be an integer, got {sample_count!r}."
        )
    if sample_count < 0:
        logger.warning("Rejected frontier request: sample_count={}", sample_count)
        raise InvalidArgumentError(
            f"sample_count must be non-negative, got {sample_count}."
        )
    if isinstance(max_workers, bool) or not isinstance(max_workers, numbers.Integral) or max_workers < 1:
        logger.warning("Rejected frontier request: max_workers={!r}", max_workers)
        raise InvalidArgumentError(
            f"max_workers must be a positive integer, got {max_workers!r}."
        )

    return _explore_frontier(
        asset_ids, samples=int(sample_count), rng=rng, max_workers=int(max_workers)
    )
